"""Shared fixtures: keep the process environment hermetic."""

from collections.abc import Iterator

import pytest

from py_env.state import preserved


@pytest.fixture(autouse=True)
def _hermetic_environment() -> Iterator[None]:  # pyright: ignore[reportUnusedFunction]
    """Restore the process environment after every test."""
    with preserved():
        yield
