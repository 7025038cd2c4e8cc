"""Env file loading — apply ``NAME=VALUE`` files to the environment.

File format::

    # this is a comment
    NAME1=value1
    NAME2=value2=with an equals sign

    # blank lines are ignored too
    NAME3=value3

Each line is stripped; blank lines and lines starting with ``#`` are
skipped; everything else is split at the *first* ``=`` and both halves
are stripped again.  There is no quoting and no interpolation.

Load order:
    ``load("a.env", "b.env")`` reads ``.env`` first, then ``a.env``,
    then ``b.env``.  Every variable is set as soon as its line is read,
    so a later file wins over an earlier one.  Naming ``.env`` (or
    ``./.env``) explicitly puts it wherever it appears in the list.

The default file:
    When ``.env`` is added implicitly it is optional: if it does not
    exist it is skipped.  When it is named explicitly, or when no files
    are named at all, it is required and its absence is an error.

Failures:
    A bad file never stops the others from loading.  Every failure is
    tagged with its file path (``FileLoadError``) and all of them are
    raised together as one ``LoadError`` at the end.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import IO, TypeAlias

from py_env.config import LoaderSettings
from py_env.env import Environment, process_environment
from py_env.errors import FileLoadError, LoadError, MalformedLineError, SetVariableError

_SOURCE = "load"

FileOpener: TypeAlias = Callable[[str, str], IO[str]]
StrPath: TypeAlias = str | os.PathLike[str]


def open_text(path: str, encoding: str) -> IO[str]:
    """Open *path* for reading as text; the default ``FileOpener``."""
    return open(path, encoding=encoding)  # noqa: SIM115, PTH123


def effective_files(files: tuple[str, ...], settings: LoaderSettings) -> tuple[list[str], bool]:
    """Work out which files to load, in order.

    Args:
        files: The files named by the caller.
        settings: Supplies the default file name.

    Returns:
        The files to load, and whether the default file is required.

    """
    named = any(settings.is_default_file(f) for f in files)
    required = not files or named
    if named:
        return list(files), required
    return [settings.default_file, *files], required


def _apply_lines(
    stream: IO[str],
    env: Environment,
    settings: LoaderSettings,
    failures: list[Exception],
) -> int:
    """Set a variable for every assignment line; return how many were set."""
    count = 0
    for line_number, raw in enumerate(stream, start=1):
        line = raw.strip()
        if not line or line.startswith(settings.comment_prefix):
            continue
        name, sep, value = line.partition("=")
        if not sep:
            failures.append(MalformedLineError(line_number, line))
            continue
        name = name.strip()
        try:
            env.set(name, value.strip())
        except (ValueError, OSError) as e:
            failures.append(SetVariableError(name, e))
            continue
        count += 1
    return count


def load(
    *files: StrPath,
    env: Environment | None = None,
    settings: LoaderSettings | None = None,
    opener: FileOpener | None = None,
) -> None:
    """Load variables from env files into *env*.

    Args:
        *files: Files to load, in order.  With none, only the default
            file is loaded (and must exist).
        env: The environment to update (default: the process environment).
        settings: Loader settings (default file, comment prefix, encoding).
        opener: Opens a path for reading as text; ``open_text`` by default.

    Raises:
        LoadError: An exception group holding a ``FileLoadError`` for
            every file that could not be opened and every line that could
            not be applied.  Variables from everything else are still set.

    """
    env = env if env is not None else process_environment()
    settings = settings if settings is not None else LoaderSettings()
    opener = opener if opener is not None else open_text

    paths, default_required = effective_files(tuple(os.fspath(f) for f in files), settings)
    errors: list[Exception] = []

    for path in paths:
        failures: list[Exception] = []
        try:
            with opener(path, settings.encoding) as stream:
                count = _apply_lines(stream, env, settings, failures)
        except FileNotFoundError as e:
            if not default_required and settings.is_default_file(path):
                env.logger.debug(f"skipped missing {path}", source=_SOURCE)
                continue
            failures.append(e)
        except (OSError, UnicodeDecodeError, LookupError) as e:
            failures.append(e)
        else:
            env.logger.info(f"loaded {count} variables from {path}", source=_SOURCE)

        for failure in failures:
            error = FileLoadError(path, failure)
            env.logger.error(str(error), source=_SOURCE)
            errors.append(error)

    if errors:
        msg = f"failed to load {len(errors)} environment file entries"
        raise LoadError(msg, errors)
