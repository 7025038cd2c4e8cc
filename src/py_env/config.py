"""Loader settings — what counts as a default file, a comment, an encoding.

The defaults match the common ``.env`` convention and rarely need
changing.  A project that does need to can keep them in a small JSON
file::

    {"default_file": "local.env", "comment_prefix": ";"}

and load it with ``LoaderSettings.from_file()``.
"""

from __future__ import annotations

import codecs
import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_FILE = ".env"


class SettingsError(RuntimeError):
    """Raise when a settings file cannot be read or decoded."""


@dataclass(frozen=True)
class LoaderSettings:
    """Settings for ``load()``.

    Attributes:
        default_file: File loaded implicitly before any named files.
        comment_prefix: Lines starting with this (after stripping) are
            ignored.
        encoding: Text encoding of env files.

    """

    default_file: str = DEFAULT_FILE
    comment_prefix: str = "#"
    encoding: str = "utf-8"

    def is_default_file(self, path: str) -> bool:
        """Return True if *path* names the default file.

        ``.env`` and ``./.env`` are the same file for this purpose.
        """
        return path in (self.default_file, f"./{self.default_file}")

    @classmethod
    def from_file(cls, path: Path) -> LoaderSettings:
        """Load settings from a JSON file; missing keys keep defaults.

        Raises:
            SettingsError: If the file cannot be read, is not a JSON
                object, holds a non-string value, or names an unknown
                encoding.

        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            msg = f"Cannot load loader settings: {e}"
            raise SettingsError(msg) from e
        if not isinstance(data, dict):
            msg = f"Cannot load loader settings: {path} does not hold a JSON object"
            raise SettingsError(msg)
        defaults = cls()
        values: dict[str, str] = {}
        for key in ("default_file", "comment_prefix", "encoding"):
            value = data.get(key, getattr(defaults, key))
            if not isinstance(value, str):
                msg = f"Cannot load loader settings: {key} must be a string, not {value!r}"
                raise SettingsError(msg)
            values[key] = value
        try:
            codecs.lookup(values["encoding"])
        except LookupError as e:
            msg = f"Cannot load loader settings: {e}"
            raise SettingsError(msg) from e
        return cls(**values)
