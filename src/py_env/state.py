"""Environment snapshots — put the environment back the way it was.

Tests that change environment variables leak those changes into every
test that runs after them.  A snapshot fixes that::

    snapshot = capture()
    os.environ["DEBUG"] = "1"
    ...
    snapshot.reset()   # DEBUG is gone again

or, equivalently::

    with preserved():
        os.environ["DEBUG"] = "1"
        ...

A snapshot is an immutable tuple of raw ``name=value`` strings.  Reset
clears the whole environment and re-applies every pair in captured
order, so variables added since are removed, removed ones come back,
and changed ones get their old values.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from py_env.env import Environment, process_environment

if TYPE_CHECKING:
    from collections.abc import Iterator

_SOURCE = "state"


@dataclass(frozen=True)
class State:
    """Every variable of an environment at one instant.

    Attributes:
        entries: The captured ``name=value`` strings, in capture order.
        env: The environment the snapshot was taken from, and which
            ``reset`` restores.

    """

    entries: tuple[str, ...]
    env: Environment

    @classmethod
    def capture(cls, env: Environment | None = None) -> State:
        """Snapshot *env* (default: the process environment)."""
        env = env if env is not None else process_environment()
        return cls(entries=tuple(env.environ()), env=env)

    def reset(self) -> None:
        """Replace the environment's content with exactly this snapshot."""
        self.env.clear()
        for entry in self.entries:
            name, _, value = entry.partition("=")
            self.env.set(name, value)
        self.env.logger.debug(f"restored {len(self.entries)} variables", source=_SOURCE)

    restore = reset

    def __len__(self) -> int:
        """Return the number of captured variables."""
        return len(self.entries)


def capture(env: Environment | None = None) -> State:
    """Snapshot *env* (default: the process environment)."""
    return State.capture(env)


@contextmanager
def preserved(env: Environment | None = None) -> Iterator[State]:
    """Snapshot *env* on entry and reset it on exit, even on error."""
    state = State.capture(env)
    try:
        yield state
    finally:
        state.reset()
