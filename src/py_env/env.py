"""Environment variables — process configuration via key-value pairs.

In Unix, every process has an environment: a set of ``KEY=VALUE`` string
pairs inherited from its parent.  Common examples include ``PATH``
(where to find executables), ``HOME`` (the user's home directory), and
``USER`` (current username).

Key design properties:
    - **Process-wide** — there is one table per process; any code that
      changes it changes it for everybody.
    - **Strings only** — both names and values are strings (no types).
      Turning a value into something typed is the job of ``parse()``.
    - **Host rules** — the OS decides what a valid name is and whether
      names are case-sensitive; we pass its errors through unchanged.

Our ``Environment`` class puts that table behind a narrow interface
(get, lookup, set, unset, clear, list).  By default it wraps
``os.environ``; ``Environment.isolated()`` wraps a private dict instead,
so parsing and loading can be exercised without touching the real
process environment.  The module-level functions are pass-throughs to
the process environment.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from py_env.logging import Logger
from py_env.vars import Vars

if TYPE_CHECKING:
    from collections.abc import Iterator, MutableMapping

_SOURCE = "env"


class Environment:
    """A narrow view over an environment variable table.

    Every mutation is recorded in the environment's ``logger``.
    """

    def __init__(
        self,
        store: MutableMapping[str, str] | None = None,
        *,
        logger: Logger | None = None,
    ) -> None:
        """Wrap a variable table.

        Args:
            store: The table to operate on (referenced, not copied).
                If None, the live process environment ``os.environ``.
            logger: Audit log to record mutations in; a fresh one is
                created if not given.

        """
        self._store: MutableMapping[str, str] = os.environ if store is None else store
        self._logger = logger if logger is not None else Logger()

    @classmethod
    def isolated(
        cls,
        initial: dict[str, str] | None = None,
        *,
        logger: Logger | None = None,
    ) -> Environment:
        """Create an environment backed by a private dict.

        Args:
            initial: Starting variables (copied, not referenced).
            logger: Audit log to share, if any.

        """
        return cls(dict(initial) if initial else {}, logger=logger)

    @property
    def logger(self) -> Logger:
        """Return the audit log for this environment."""
        return self._logger

    @property
    def is_process(self) -> bool:
        """Return True if this wraps the live process environment."""
        return self._store is os.environ

    def get(self, name: str) -> str:
        """Return the value of *name*, or an empty string if not set.

        Use ``lookup`` to tell an unset variable from an empty one.
        """
        return self._store.get(name, "")

    def lookup(self, name: str) -> str | None:
        """Return the value of *name*, or None if not set."""
        return self._store.get(name)

    def set(self, name: str, value: str) -> None:
        """Set *name* to *value* (creates or overwrites).

        Raises:
            ValueError: If the host rejects the name or value (for
                example an empty name, a name containing ``=``, or a
                NUL byte).

        """
        if not self.is_process:
            _check_name(name, value)
        self._store[name] = value
        self._logger.debug(f"set {name}", source=_SOURCE)

    def unset(self, *names: str) -> None:
        """Remove each of *names*; names that are not set are ignored."""
        for name in names:
            if name in self._store:
                del self._store[name]
                self._logger.debug(f"unset {name}", source=_SOURCE)

    def clear(self) -> None:
        """Remove every variable."""
        count = len(self._store)
        self._store.clear()
        self._logger.debug(f"cleared {count} variables", source=_SOURCE)

    def items(self) -> list[tuple[str, str]]:
        """Return all (name, value) pairs."""
        return list(self._store.items())

    def environ(self) -> list[str]:
        """Return every variable as a raw ``name=value`` string."""
        return [f"{name}={value}" for name, value in self._store.items()]

    def get_vars(self, *names: str) -> Vars:
        """Return variables as a ``Vars`` collection.

        Args:
            *names: Names to return.  With none, every variable is
                returned; otherwise only the named ones that are set.

        """
        if not names:
            return Vars(self._store)
        return Vars({name: self._store[name] for name in names if name in self._store})

    def copy(self) -> Environment:
        """Return an isolated copy of this environment."""
        return Environment.isolated(dict(self._store))

    def __contains__(self, name: object) -> bool:
        """Return True if *name* is set."""
        return name in self._store

    def __iter__(self) -> Iterator[str]:
        """Iterate over variable names."""
        return iter(list(self._store))

    def __len__(self) -> int:
        """Return the number of variables."""
        return len(self._store)


def _check_name(name: str, value: str) -> None:
    """Apply the host's naming rules to a private store.

    ``os.environ`` enforces these itself; an isolated table must reject
    the same names so tests see the same failures.
    """
    if not name or "=" in name:
        msg = f"illegal environment variable name: {name!r}"
        raise ValueError(msg)
    if "\0" in name or "\0" in value:
        msg = "embedded null byte"
        raise ValueError(msg)


# -- Process environment pass-throughs ----------------------------------------

# Bounded: the process environment lives as long as the interpreter.
_PROCESS_LOG_CAPACITY = 1000

_process: Environment | None = None


def process_environment() -> Environment:
    """Return the shared ``Environment`` over ``os.environ``."""
    global _process  # noqa: PLW0603
    if _process is None:
        _process = Environment(logger=Logger(capacity=_PROCESS_LOG_CAPACITY))
    return _process


def clear() -> None:
    """Remove every process environment variable."""
    process_environment().clear()


def get(name: str) -> str:
    """Return the value of *name*, or an empty string if not set."""
    return process_environment().get(name)


def get_vars(*names: str) -> Vars:
    """Return all process variables, or only the named ones that are set."""
    return process_environment().get_vars(*names)


def lookup(name: str) -> str | None:
    """Return the value of *name*, or None if not set."""
    return process_environment().lookup(name)


def set(name: str, value: str) -> None:  # noqa: A001
    """Set a process environment variable."""
    process_environment().set(name, value)


def unset(*names: str) -> None:
    """Remove process environment variables; unset names are ignored."""
    process_environment().unset(*names)
