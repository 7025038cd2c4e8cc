"""Smoke test to verify the project is set up correctly."""

import py_env
from py_env import __doc__


def test_package_is_importable() -> None:
    """Verify that py_env can be imported."""
    assert __doc__ is not None


def test_public_names_resolve() -> None:
    """Every name in __all__ should be an attribute of the package."""
    missing = [name for name in py_env.__all__ if not hasattr(py_env, name)]
    assert missing == []
