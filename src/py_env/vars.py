"""Variable collections — a batch of variables to set or show at once.

``Vars`` is a plain ``dict[str, str]`` with three extras:

- ``names()`` — the variable names, sorted.
- ``set()`` — apply every entry to an environment.
- ``str()`` — a deterministic ``[A="1",B="2"]`` rendering, handy in
  test failure messages because it does not depend on insertion order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_env.errors import SetVariableError

if TYPE_CHECKING:
    from py_env.env import Environment


class Vars(dict[str, str]):
    """A mapping of variable names to values."""

    def names(self) -> list[str]:
        """Return the names of all variables, sorted."""
        return sorted(self)

    def set(self, *, env: Environment | None = None) -> None:
        """Apply every variable to *env* (default: the process environment).

        Variables are applied in iteration order.  The first failure
        stops the batch; variables already applied stay applied.

        Raises:
            SetVariableError: Wrapping the host's error for the variable
                that could not be set.

        """
        if env is None:
            from py_env.env import process_environment  # noqa: PLC0415

            env = process_environment()
        for name, value in self.items():
            try:
                env.set(name, value)
            except (ValueError, OSError) as e:
                raise SetVariableError(name, e) from e

    def __str__(self) -> str:
        """Render as ``[NAME1="v1",NAME2="v2"]``, sorted by name."""
        return "[" + ",".join(f'{name}="{self[name]}"' for name in self.names()) + "]"
