"""Tests for loader settings.

Settings default to the ``.env`` convention and can be read from a
small JSON file; unreadable files raise ``SettingsError``.
"""

import json
from pathlib import Path

import pytest

from py_env.config import DEFAULT_FILE, LoaderSettings, SettingsError


class TestLoaderSettings:
    """Verify the LoaderSettings frozen dataclass."""

    def test_defaults(self) -> None:
        """Defaults should match the .env convention."""
        settings = LoaderSettings()
        assert settings.default_file == DEFAULT_FILE == ".env"
        assert settings.comment_prefix == "#"
        assert settings.encoding == "utf-8"

    def test_frozen(self) -> None:
        """Settings should be immutable."""
        settings = LoaderSettings()
        with pytest.raises(AttributeError):
            settings.default_file = "x"  # pyright: ignore[reportAttributeAccessIssue]

    @pytest.mark.parametrize(("path", "expected"), [(".env", True), ("./.env", True), ("a", False)])
    def test_is_default_file(self, path: str, expected: bool) -> None:
        """Both spellings of the default file should be recognised."""
        assert LoaderSettings().is_default_file(path) is expected

    def test_is_default_file_custom(self) -> None:
        """A custom default file should be recognised in both spellings."""
        settings = LoaderSettings(default_file="local.env")
        assert settings.is_default_file("./local.env")
        assert not settings.is_default_file(".env")


class TestFromFile:
    """Verify loading settings from JSON."""

    def test_full_file(self, tmp_path: Path) -> None:
        """Every key in the file should be used."""
        path = tmp_path / "settings.json"
        path.write_text(
            json.dumps({"default_file": "local.env", "comment_prefix": ";", "encoding": "latin-1"})
        )
        settings = LoaderSettings.from_file(path)
        assert settings == LoaderSettings("local.env", ";", "latin-1")

    def test_partial_file_keeps_defaults(self, tmp_path: Path) -> None:
        """Missing keys should keep their defaults."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"default_file": "local.env"}))
        settings = LoaderSettings.from_file(path)
        assert settings == LoaderSettings(default_file="local.env")

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file should raise SettingsError."""
        with pytest.raises(SettingsError, match="Cannot load loader settings"):
            LoaderSettings.from_file(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Malformed JSON should raise SettingsError."""
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        with pytest.raises(SettingsError):
            LoaderSettings.from_file(path)

    def test_not_an_object(self, tmp_path: Path) -> None:
        """A JSON value that is not an object should raise SettingsError."""
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]")
        with pytest.raises(SettingsError, match="JSON object"):
            LoaderSettings.from_file(path)

    @pytest.mark.parametrize("key", ["default_file", "comment_prefix", "encoding"])
    def test_non_string_value(self, tmp_path: Path, key: str) -> None:
        """A value that is not a string should raise SettingsError."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({key: 1}))
        with pytest.raises(SettingsError, match=f"{key} must be a string"):
            LoaderSettings.from_file(path)

    def test_unknown_encoding(self, tmp_path: Path) -> None:
        """An encoding the codec registry does not know should raise SettingsError."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"encoding": "no-such-codec"}))
        with pytest.raises(SettingsError, match="unknown encoding") as exc_info:
            LoaderSettings.from_file(path)
        assert isinstance(exc_info.value.__cause__, LookupError)
