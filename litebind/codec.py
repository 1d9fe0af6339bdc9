"""Conversion between Python values and SQLite storage classes."""

import ctypes

from .errors import UnsupportedTypeError, RangeError, error_occurred, raise_error
from .native import (
    SQLITE_INTEGER, SQLITE_FLOAT, SQLITE_TEXT, SQLITE_BLOB, SQLITE_NULL,
    SQLITE_TRANSIENT, INT64_MIN, INT64_MAX, MAX_BIND_LENGTH,
)

_BINARY_TYPES = (bytes, bytearray, memoryview)

def _check_length(data):
    if len(data) > MAX_BIND_LENGTH:
        raise RangeError(f"value of {len(data)} bytes is too large to bind")

def bind_value(lib, stmt, index, value):
    """Bind ``value`` to the 1-based placeholder ``index`` of ``stmt``.

    Returns the engine result code. Values without a mapping raise
    UnsupportedTypeError, integers outside the int64 range raise RangeError.
    """
    # Exact type checks: subclasses (IntEnum, str subclasses, ...) are not
    # silently coerced.
    if value is None:
        return lib.sqlite3_bind_null(stmt, index)
    if value is True:
        return lib.sqlite3_bind_int(stmt, index, 1)
    if value is False:
        return lib.sqlite3_bind_int(stmt, index, 0)
    t = type(value)
    if t is int:
        if value < INT64_MIN or value > INT64_MAX:
            raise RangeError(f"Python int too large to convert to SQLite INTEGER: {value}")
        return lib.sqlite3_bind_int64(stmt, index, value)
    if t is float:
        return lib.sqlite3_bind_double(stmt, index, value)
    if t is str:
        b = value.encode("utf-8")
        _check_length(b)
        return lib.sqlite3_bind_text(stmt, index, b, len(b), SQLITE_TRANSIENT)
    if t in _BINARY_TYPES:
        b = value if t is bytes else bytes(value)
        _check_length(b)
        return lib.sqlite3_bind_blob(stmt, index, b, len(b), SQLITE_TRANSIENT)
    raise UnsupportedTypeError(f"unsupported python type: '{t.__name__}'")

def column_value(lib, db, stmt, index, path=None):
    """Decode column ``index`` of the current row of ``stmt``.

    The storage class is read for the current row, not the declared column
    type, so one column can yield different Python types across rows.
    """
    kind = lib.sqlite3_column_type(stmt, index)
    if kind == SQLITE_INTEGER:
        value = lib.sqlite3_column_int64(stmt, index)
        if error_occurred(db):
            raise_error(db, path)
        return value
    if kind == SQLITE_FLOAT:
        value = lib.sqlite3_column_double(stmt, index)
        if error_occurred(db):
            raise_error(db, path)
        return value
    if kind == SQLITE_TEXT:
        raw = _column_bytes(lib, db, stmt, index, path, lib.sqlite3_column_text)
        return None if raw is None else raw.decode("utf-8")
    if kind == SQLITE_BLOB:
        return _column_bytes(lib, db, stmt, index, path, lib.sqlite3_column_blob)
    if kind == SQLITE_NULL:
        return None
    raise UnsupportedTypeError(f"unknown sqlite3 datatype: {kind}")

def _column_bytes(lib, db, stmt, index, path, accessor):
    # The pointer must be fetched before the byte count.
    ptr = accessor(stmt, index)
    size = lib.sqlite3_column_bytes(stmt, index)
    if ptr:
        return ctypes.string_at(ptr, size)
    # Out of memory also yields a NULL pointer and a zero size.
    if error_occurred(db):
        raise_error(db, path)
    if size == 0:
        # Zero-length blobs come back as a NULL pointer.
        return b""
    return None
