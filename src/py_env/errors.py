"""Error taxonomy — what can go wrong reading the environment.

Reading a variable can fail in layers, and callers usually care which
layer failed:

1. **Not set** — the variable is simply absent.
2. **Invalid value** — the variable is set, but the conversion function
   rejected its raw string (``PORT=eighty``).
3. **Out of range** — a special case of (2) where the value parsed but
   falls outside a bound (``PORT=70000``).

``ParseError`` wraps (1) or (2) with the name of the variable being read,
so a message reads ``parse error: PORT: invalid value: eighty: ...``.

Loose matching:
    Every kind can be used as a *template*.  Empty or ``None`` fields on a
    template are wildcards, so ``ParseError(error=NotSetError())`` matches a
    not-set failure for any variable, and ``RangeError()`` matches any
    out-of-range failure.  Matching is an explicit ``matches(template)``
    predicate rather than ``__eq__``, and ``is_error()`` applies it across
    a whole cause chain, including every member of an exception group.
"""

from collections.abc import Sequence
from typing import Generic, TypeVar

T = TypeVar("T")


def _render(label: str, *fields: object) -> str:
    """Join the label with every populated field, separated by ``": "``."""
    parts = [label, *(str(f) for f in fields if f is not None and f != "")]
    return ": ".join(parts)


class EnvError(Exception):
    """Base class for every error raised by this library."""

    def unwrap(self) -> BaseException | None:
        """Return the error this one wraps, if any."""
        return self.__cause__

    def matches(self, template: BaseException) -> bool:
        """Return True if *template* describes this error.

        The base implementation only matches the very same instance;
        each kind loosens this with its own wildcard rules.
        """
        return self is template


class NotSetError(EnvError, LookupError):
    """Raise when a named variable is absent from the environment."""

    def __init__(self) -> None:
        """Create the not-set marker (it carries no payload)."""
        super().__init__("not set")

    def matches(self, template: BaseException) -> bool:
        """Match any other not-set error."""
        return isinstance(template, NotSetError)


class InvalidValueError(EnvError, ValueError):
    """Raise when a variable's raw value cannot be converted.

    Attributes:
        value: The offending raw string.
        error: The conversion error that rejected it.

    """

    def __init__(self, value: str = "", error: BaseException | None = None) -> None:
        """Create an invalid-value error; both fields are optional."""
        self.value = value
        self.error = error
        super().__init__(_render("invalid value", value, error))

    def unwrap(self) -> BaseException | None:
        """Return the conversion error."""
        return self.error

    def matches(self, template: BaseException) -> bool:
        """Match on ``value`` (empty = any) and ``error`` (None = any)."""
        if not isinstance(template, InvalidValueError):
            return False
        return (not template.value or template.value == self.value) and (
            template.error is None or is_error(self.error, template.error)
        )


def _same_bound(wanted: object, actual: object) -> bool:
    """Return True if *wanted* is a wildcard or equals *actual* with the same type."""
    if wanted is None:
        return True
    return type(wanted) is type(actual) and wanted == actual


class RangeError(EnvError, ValueError, Generic[T]):
    """Raise when a converted value falls outside ``minimum..maximum``.

    A template with both bounds ``None`` renders as a bare
    ``out of range`` and matches any other range error.
    """

    def __init__(self, minimum: T | None = None, maximum: T | None = None) -> None:
        """Create a range error for the inclusive bounds given."""
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.minimum is None and self.maximum is None:
            return "out of range"
        bounds = "(x)"
        if self.minimum is not None:
            bounds = f"{self.minimum} <= {bounds}"
        if self.maximum is not None:
            bounds = f"{bounds} <= {self.maximum}"
        return f"out of range: {bounds}"

    def matches(self, template: BaseException) -> bool:
        """Match each bound unless the template leaves it ``None``."""
        if not isinstance(template, RangeError):
            return False
        return _same_bound(template.minimum, self.minimum) and _same_bound(
            template.maximum, self.maximum
        )


class ParseError(EnvError):
    """Raise when a named variable cannot be parsed.

    Attributes:
        name: The variable being read.
        error: Why: a ``NotSetError`` or an ``InvalidValueError``.

    """

    def __init__(self, name: str = "", error: BaseException | None = None) -> None:
        """Create a parse error; both fields are optional."""
        self.name = name
        self.error = error
        super().__init__(_render("parse error", name, error))

    def unwrap(self) -> BaseException | None:
        """Return the underlying not-set or invalid-value error."""
        return self.error

    def matches(self, template: BaseException) -> bool:
        """Match on ``name`` (empty = any) and ``error`` (None = any)."""
        if not isinstance(template, ParseError):
            return False
        return (not template.name or template.name == self.name) and (
            template.error is None or is_error(self.error, template.error)
        )


# -- Conversion failures -------------------------------------------------------


class NumberSyntaxError(EnvError, ValueError):
    """Raise when a string is not a base-10 integer."""

    def __init__(self, value: str = "") -> None:
        """Record the rejected input."""
        self.value = value
        super().__init__(_render("invalid integer syntax", repr(value) if value else ""))

    def matches(self, template: BaseException) -> bool:
        """Match any syntax error, or one for the same input."""
        if not isinstance(template, NumberSyntaxError):
            return False
        return not template.value or template.value == self.value


class DurationSyntaxError(EnvError, ValueError):
    """Raise when a string is not a duration such as ``1h30m``."""

    def __init__(self, value: str = "") -> None:
        """Record the rejected input."""
        self.value = value
        super().__init__(_render("invalid duration", repr(value) if value else ""))

    def matches(self, template: BaseException) -> bool:
        """Match any duration error, or one for the same input."""
        if not isinstance(template, DurationSyntaxError):
            return False
        return not template.value or template.value == self.value


class NotAnAbsoluteURLError(EnvError, ValueError):
    """Raise when a URL has no scheme."""

    def __init__(self) -> None:
        """Create the not-absolute marker."""
        super().__init__("not an absolute URL")

    def matches(self, template: BaseException) -> bool:
        """Match any other not-absolute error."""
        return isinstance(template, NotAnAbsoluteURLError)


# -- Mutation and loading failures ---------------------------------------------


class SetVariableError(EnvError):
    """Raise when the host refuses to set a variable.

    Attributes:
        name: The variable that could not be set.
        error: The host's own error.

    """

    def __init__(self, name: str = "", error: BaseException | None = None) -> None:
        """Create a set-failed error; both fields are optional."""
        self.name = name
        self.error = error
        super().__init__(_render("set variable failed", name, error))

    def unwrap(self) -> BaseException | None:
        """Return the host's error."""
        return self.error

    def matches(self, template: BaseException) -> bool:
        """Match on ``name`` (empty = any) and ``error`` (None = any)."""
        if not isinstance(template, SetVariableError):
            return False
        return (not template.name or template.name == self.name) and (
            template.error is None or is_error(self.error, template.error)
        )


class MalformedLineError(EnvError, ValueError):
    """Raise when a non-comment line in an env file has no ``=``."""

    def __init__(self, line_number: int = 0, line: str = "") -> None:
        """Record where the bad line was and what it said."""
        self.line_number = line_number
        self.line = line
        label = f"malformed line {line_number}" if line_number else "malformed line"
        super().__init__(_render(label, line))

    def matches(self, template: BaseException) -> bool:
        """Match on line number (0 = any) and text (empty = any)."""
        if not isinstance(template, MalformedLineError):
            return False
        return (not template.line_number or template.line_number == self.line_number) and (
            not template.line or template.line == self.line
        )


class FileLoadError(EnvError):
    """Tag a loader failure with the path of the file that caused it.

    Renders as ``path: error``, mirroring how a shell reports a bad file.
    """

    def __init__(self, path: str = "", error: BaseException | None = None) -> None:
        """Create a file-tagged error; both fields are optional."""
        self.path = path
        self.error = error
        message = ": ".join(str(f) for f in (path, error) if f is not None and f != "")
        super().__init__(message or "file load failed")

    def unwrap(self) -> BaseException | None:
        """Return the error reading or applying the file."""
        return self.error

    def matches(self, template: BaseException) -> bool:
        """Match on ``path`` (empty = any) and ``error`` (None = any)."""
        if not isinstance(template, FileLoadError):
            return False
        return (not template.path or template.path == self.path) and (
            template.error is None or is_error(self.error, template.error)
        )


class LoadError(ExceptionGroup[Exception]):
    """Every failure from one ``load()`` call, raised together.

    Being an ``ExceptionGroup``, it works with ``except*`` as well as
    with ``is_error()``.
    """

    def derive(self, excs: Sequence[Exception]) -> "LoadError":
        """Keep the ``LoadError`` type when the group is split."""
        return LoadError(self.message, excs)


# -- Matching ------------------------------------------------------------------


def _is_match(candidate: BaseException, target: type[BaseException] | BaseException) -> bool:
    if isinstance(target, type):
        return isinstance(candidate, target)
    if candidate is target:
        return True
    return isinstance(candidate, EnvError) and candidate.matches(target)


def is_error(
    error: BaseException | None,
    target: type[BaseException] | BaseException,
) -> bool:
    """Report whether *error*, or anything it wraps, matches *target*.

    The search visits *error*, then what it wraps (``unwrap()`` for this
    library's errors, ``__cause__`` for anything else), and every member
    of an exception group, depth first.

    Args:
        error: The error to inspect; None never matches.
        target: An exception class (``isinstance`` check) or an instance
            (same object, or a template the candidate ``matches``).

    Returns:
        True if any error in the chain matches.

    """
    seen: set[int] = set()
    pending: list[BaseException | None] = [error]
    while pending:
        candidate = pending.pop()
        if candidate is None or id(candidate) in seen:
            continue
        seen.add(id(candidate))
        if _is_match(candidate, target):
            return True
        if isinstance(candidate, BaseExceptionGroup):
            pending.extend(reversed(candidate.exceptions))
        elif isinstance(candidate, EnvError):
            pending.append(candidate.unwrap())
        else:
            pending.append(candidate.__cause__)
    return False
