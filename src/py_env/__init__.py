"""py-env — read, parse, and temporarily override environment variables.

Re-exports public symbols so callers can write::

    from py_env import load, parse, preserved
    from py_env import convert

    load()                                    # .env into os.environ
    port = parse("PORT", convert.port)        # typed, with clear errors
"""

from py_env import convert
from py_env.config import DEFAULT_FILE, LoaderSettings, SettingsError
from py_env.env import (
    Environment,
    clear,
    get,
    get_vars,
    lookup,
    process_environment,
    set,  # noqa: A004
    unset,
)
from py_env.errors import (
    DurationSyntaxError,
    EnvError,
    FileLoadError,
    InvalidValueError,
    LoadError,
    MalformedLineError,
    NotAnAbsoluteURLError,
    NotSetError,
    NumberSyntaxError,
    ParseError,
    RangeError,
    SetVariableError,
    is_error,
)
from py_env.load import load
from py_env.logging import LogEntry, Logger, LogLevel
from py_env.parse import ConversionFunc, override, parse
from py_env.state import State, capture, preserved
from py_env.vars import Vars

__all__ = [
    "DEFAULT_FILE",
    "ConversionFunc",
    "DurationSyntaxError",
    "EnvError",
    "Environment",
    "FileLoadError",
    "InvalidValueError",
    "LoadError",
    "LogEntry",
    "LogLevel",
    "LoaderSettings",
    "Logger",
    "MalformedLineError",
    "NotAnAbsoluteURLError",
    "NotSetError",
    "NumberSyntaxError",
    "ParseError",
    "RangeError",
    "SetVariableError",
    "SettingsError",
    "State",
    "Vars",
    "capture",
    "clear",
    "convert",
    "get",
    "get_vars",
    "is_error",
    "load",
    "lookup",
    "override",
    "parse",
    "preserved",
    "process_environment",
    "set",
    "unset",
]
