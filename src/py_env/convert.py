"""Conversion functions — turn a raw variable string into a typed value.

Every converter has the same shape, ``(raw: str) -> T``, and raises on
failure, so any of them can be handed to ``parse()`` or ``override()``::

    port = parse("PORT", convert.port)
    timeout = parse("TIMEOUT", convert.duration)

``string`` is the identity conversion; it exists so code that always
takes a converter can read a plain string the same way.
"""

import re
from datetime import timedelta
from decimal import Decimal
from urllib.parse import SplitResult, urlsplit

from py_env.errors import (
    DurationSyntaxError,
    InvalidValueError,
    NotAnAbsoluteURLError,
    NumberSyntaxError,
    RangeError,
)

MIN_PORT = 0
MAX_PORT = 65535

_INTEGER = re.compile(r"[+-]?[0-9]+")

# Longer suffixes first so "ms" is not read as "m" followed by "s".
_UNIT = r"ns|us|µs|μs|ms|h|m|s"  # noqa: RUF001
_COMPONENT = re.compile(rf"([0-9]+\.?[0-9]*|\.[0-9]+)({_UNIT})")
_DURATION = re.compile(rf"(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:{_UNIT}))+")

_NANOSECONDS_PER_UNIT: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,  # noqa: RUF001
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}


def integer(s: str) -> int:
    """Convert a base-10 signed integer string.

    Only ASCII digits with an optional leading sign are accepted: no
    surrounding whitespace and no ``_`` separators, unlike ``int()``.

    Raises:
        NumberSyntaxError: If *s* is not an integer.

    """
    if not _INTEGER.fullmatch(s):
        raise NumberSyntaxError(s)
    return int(s)


def port(s: str) -> int:
    """Convert a TCP/UDP port number (0 to 65535 inclusive).

    Raises:
        NumberSyntaxError: If *s* is not an integer.
        RangeError: If the integer is outside the port range.

    """
    value = integer(s)
    if not MIN_PORT <= value <= MAX_PORT:
        raise RangeError(MIN_PORT, MAX_PORT)
    return value


def _parse_duration(s: str) -> timedelta:
    sign = 1
    rest = s
    if rest[:1] in ("+", "-"):
        sign = -1 if rest[0] == "-" else 1
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not _DURATION.fullmatch(rest):
        raise DurationSyntaxError(s)

    total_ns = Decimal(0)
    for number, unit in _COMPONENT.findall(rest):
        total_ns += Decimal(number) * _NANOSECONDS_PER_UNIT[unit]
    # timedelta resolves to microseconds; anything finer is truncated
    try:
        return timedelta(microseconds=sign * int(total_ns / 1000))
    except OverflowError as e:
        raise DurationSyntaxError(s) from e


def duration(s: str, *units: timedelta) -> timedelta:
    """Convert a duration.

    Without a unit, *s* is a duration string: a sequence of decimal
    numbers, each with a unit suffix (``ns``, ``us``/``µs``, ``ms``,
    ``s``, ``m``, ``h``), optionally signed, e.g. ``"1h30m"`` or
    ``"-1.5h"``.  A bare ``"0"`` is also accepted.

    With a unit, *s* must be a plain integer, which is multiplied by the
    first unit given (any others are ignored).  A suffixed string such as
    ``"1h"`` is rejected in this mode.

    Examples::

        duration("1h30m")                    # 90 minutes
        duration("10", timedelta(seconds=1))  # 10 seconds

    Raises:
        DurationSyntaxError: If *s* is not a duration string, or is too
            large for a ``timedelta`` (no unit).
        NumberSyntaxError: If *s* is not an integer (unit given).
        RangeError: If the product is too large for a ``timedelta``
            (unit given).

    """
    if not units:
        return _parse_duration(s)
    try:
        return integer(s) * units[0]
    except OverflowError as e:
        raise RangeError(timedelta.min, timedelta.max) from e


def absolute_url(s: str) -> SplitResult:
    """Convert an absolute URL, one with a scheme.

    A scheme is enough: ``mailto:a@b.c`` and ``file:///etc/hosts`` are
    absolute even though they have no host.

    Raises:
        ValueError: The parser's own error if *s* is not a valid URL.
        InvalidValueError: Wrapping ``NotAnAbsoluteURLError`` if *s*
            has no scheme.

    """
    url = urlsplit(s)
    if not url.scheme:
        raise InvalidValueError(s, NotAnAbsoluteURLError())
    return url


def string(s: str) -> str:
    """Return *s* unchanged; never fails."""
    return s
