import collections.abc
import json
import logging

from .native import load_library, CLEAN_CODES, SQLITE_NOMEM

logger = logging.getLogger(__name__)

# Exceptions
class Error(Exception):
    pass

class EngineError(Error):
    """Failure reported by the SQLite engine.

    Carries the primary result code, the extended result code, the engine's
    message text and the database path. ``sql`` and ``params`` are set when
    the failure happened while executing a statement.
    """

    def __init__(self, text, *, code=None, extended_code=None, message=None,
                 path=None, sql=None, params=None):
        super().__init__(text)
        self.code = code
        self.extended_code = extended_code
        self.message = message
        self.path = path
        self.sql = sql
        self.params = params

class OpenError(EngineError):
    pass

class ScriptSyntaxError(EngineError):
    """A unit of a script failed to compile.

    ``offset`` is the byte offset of the failing unit in the UTF-8 encoded
    script.
    """

    def __init__(self, text, *, offset=None, **kwargs):
        super().__init__(text, **kwargs)
        self.offset = offset

class UnsupportedTypeError(Error, TypeError):
    pass

class RangeError(Error, OverflowError):
    pass

class InvalidStateError(Error):
    pass

def _format_value_for_error(v, *, max_str=200, max_bytes=64):
    if v is None:
        return None
    if isinstance(v, (bool, int, float)):
        return v
    if isinstance(v, (bytes, bytearray, memoryview)):
        b = bytes(v)
        if len(b) <= max_bytes:
            return {"_type": "bytes", "hex": b.hex(), "len": len(b)}
        head = b[:max_bytes]
        return {"_type": "bytes", "hex_prefix": head.hex(), "len": len(b)}
    if isinstance(v, str):
        if len(v) <= max_str:
            return v
        return v[:max_str] + "…"
    s = repr(v)
    if len(s) <= max_str:
        return s
    return s[:max_str] + "…"

def _format_params_for_error(params, *, max_items=50):
    if params is None:
        return None
    if not isinstance(params, collections.abc.Sequence) or isinstance(params, (str, bytes)):
        return _format_value_for_error(params)
    seq = list(params)
    if len(seq) > max_items:
        seq = seq[:max_items] + ["<truncated>"]
    return [_format_value_for_error(v) for v in seq]

def format_message(extended_code, message, path=None, *, sql=None, params=None):
    text = f"[{extended_code}] {message}"
    if path is not None:
        text = f"{text}: {path!r}"
    if sql is not None:
        ctx = {
            "native_code": extended_code,
            "sql": sql,
            "params": _format_params_for_error(params),
        }
        text = text + "\nContext: " + json.dumps(ctx, ensure_ascii=False)
    return text

def error_occurred(db_handle):
    """Return True if the handle's last result code is an actual error."""
    if not db_handle:
        return False
    return load_library().sqlite3_errcode(db_handle) not in CLEAN_CODES

def build_error(db_handle, path=None, *, sql=None, params=None, kind=EngineError, **extra):
    lib = load_library()
    if db_handle:
        extended = lib.sqlite3_extended_errcode(db_handle)
        # errcode is unmasked once extended result codes are enabled.
        code = extended & 0xFF
    else:
        # Without a handle the engine could only have run out of memory.
        code = extended = SQLITE_NOMEM
    msg = lib.sqlite3_errmsg(db_handle)
    # Native messages should be UTF-8, but don't crash if not.
    msg_str = msg.decode("utf-8", errors="replace") if msg else f"Unknown error {extended}"
    return kind(
        format_message(extended, msg_str, path, sql=sql, params=params),
        code=code,
        extended_code=extended,
        message=msg_str,
        path=path,
        sql=sql,
        params=params,
        **extra,
    )

def raise_error(db_handle, path=None, *, sql=None, params=None, cause=None,
                kind=EngineError, **extra):
    """Raise the error currently recorded on ``db_handle``.

    ``cause``, when given, becomes the new error's ``__cause__``; an
    exception merely being handled by the caller is left as ``__context__``.
    """
    err = build_error(db_handle, path, sql=sql, params=params, kind=kind, **extra)
    logger.debug("engine error: %s", err.args[0].splitlines()[0])
    if cause is not None:
        raise err from cause
    raise err
