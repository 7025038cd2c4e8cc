"""Parse and override — read a variable through a conversion function.

The pipeline has three steps, each with its own failure:

1. **Look up** the variable.  Absent → ``ParseError(name, NotSetError())``.
2. **Convert** the raw string.  Rejected →
   ``ParseError(name, InvalidValueError(raw, cause))``.
3. **Return** the converted value (``parse``), or write it into a
   destination if it differs from what is there (``override``).

``override`` is meant for defaults that the environment may replace::

    settings = Settings(port=8080)
    with contextlib.suppress(ParseError):
        override(settings, "port", "PORT", convert.port)

Its boolean result says whether the destination *changed*.  It is False
both when the value was already equal and when nothing was written at
all, so failure is only ever signalled by the exception.
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from typing import TYPE_CHECKING, Any, TypeAlias, TypeVar

from py_env.env import process_environment
from py_env.errors import InvalidValueError, NotSetError, ParseError

if TYPE_CHECKING:
    from py_env.env import Environment

T = TypeVar("T")

ConversionFunc: TypeAlias = Callable[[str], T]


def parse(name: str, convert: ConversionFunc[T], *, env: Environment | None = None) -> T:
    """Parse the variable *name* with a conversion function.

    Args:
        name: The variable to read.
        convert: Turns the raw string into a value, raising on failure
            (see ``py_env.convert``).
        env: The environment to read (default: the process environment).

    Returns:
        The converted value.

    Raises:
        ParseError: Wrapping ``NotSetError`` if the variable is absent,
            or ``InvalidValueError`` if *convert* raised.

    """
    env = env if env is not None else process_environment()
    raw = env.lookup(name)
    if raw is None:
        raise ParseError(name, NotSetError())
    try:
        return convert(raw)
    except Exception as e:
        raise ParseError(name, InvalidValueError(raw, e)) from e


def override(
    target: Any,
    attribute: str,
    name: str,
    convert: ConversionFunc[T],
    *,
    env: Environment | None = None,
) -> bool:
    """Replace a value with the one parsed from variable *name*.

    The destination is ``target[attribute]`` when *target* is a mutable
    mapping, and ``target.attribute`` otherwise.  It is only written when
    parsing succeeds and the parsed value differs (``!=``) from the
    current one.

    Args:
        target: The object or mapping holding the destination.
        attribute: The attribute name or key of the destination.
        name: The variable to read.
        convert: Turns the raw string into a value.
        env: The environment to read (default: the process environment).

    Returns:
        True if the destination was changed, False if it already held
        the parsed value.

    Raises:
        ParseError: As for ``parse``; the destination is left untouched.

    """
    value = parse(name, convert, env=env)
    if isinstance(target, MutableMapping):
        mapping: MutableMapping[str, Any] = target
        if attribute in mapping and mapping[attribute] == value:
            return False
        mapping[attribute] = value
        return True
    if hasattr(target, attribute) and getattr(target, attribute) == value:
        return False
    setattr(target, attribute, value)
    return True
