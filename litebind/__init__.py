import logging

from .native import (
    load_library, library_version,
    SQLITE_OPEN_READONLY as OPEN_READONLY,
    SQLITE_OPEN_READWRITE as OPEN_READWRITE,
    SQLITE_OPEN_CREATE as OPEN_CREATE,
    SQLITE_OPEN_MEMORY as OPEN_MEMORY,
    SQLITE_OPEN_NOMUTEX as OPEN_NOMUTEX,
    SQLITE_OPEN_FULLMUTEX as OPEN_FULLMUTEX,
    SQLITE_OPEN_SHAREDCACHE as OPEN_SHAREDCACHE,
    SQLITE_OPEN_PRIVATECACHE as OPEN_PRIVATECACHE,
    SQLITE_OPEN_NOFOLLOW as OPEN_NOFOLLOW,
)
from .errors import (
    Error, EngineError, OpenError, ScriptSyntaxError,
    UnsupportedTypeError, RangeError, InvalidStateError,
)
from .row import Row, RowSchema
from .connection import Connection, Database, open
from .logging_config import setup_logging

__version__ = "2.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

def __getattr__(name):
    # Loading the native library is deferred until it is first needed.
    if name == "sqlite_version":
        return library_version()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "open", "Connection", "Database", "Row", "RowSchema",
    "Error", "EngineError", "OpenError", "ScriptSyntaxError",
    "UnsupportedTypeError", "RangeError", "InvalidStateError",
    "OPEN_READONLY", "OPEN_READWRITE", "OPEN_CREATE", "OPEN_MEMORY",
    "OPEN_NOMUTEX", "OPEN_FULLMUTEX", "OPEN_SHAREDCACHE",
    "OPEN_PRIVATECACHE", "OPEN_NOFOLLOW",
    "load_library", "setup_logging",
]
