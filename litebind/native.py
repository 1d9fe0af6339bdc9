import ctypes
import ctypes.util
import os
import sys
from ctypes import c_int, c_int64, c_double, c_char_p, c_void_p, POINTER

# Result codes (primary). Extended codes carry the primary code in the low byte.
SQLITE_OK = 0
SQLITE_ERROR = 1
SQLITE_INTERNAL = 2
SQLITE_PERM = 3
SQLITE_ABORT = 4
SQLITE_BUSY = 5
SQLITE_LOCKED = 6
SQLITE_NOMEM = 7
SQLITE_READONLY = 8
SQLITE_INTERRUPT = 9
SQLITE_IOERR = 10
SQLITE_CORRUPT = 11
SQLITE_NOTFOUND = 12
SQLITE_FULL = 13
SQLITE_CANTOPEN = 14
SQLITE_PROTOCOL = 15
SQLITE_EMPTY = 16
SQLITE_SCHEMA = 17
SQLITE_TOOBIG = 18
SQLITE_CONSTRAINT = 19
SQLITE_MISMATCH = 20
SQLITE_MISUSE = 21
SQLITE_NOLFS = 22
SQLITE_AUTH = 23
SQLITE_FORMAT = 24
SQLITE_RANGE = 25
SQLITE_NOTADB = 26
SQLITE_ROW = 100
SQLITE_DONE = 101

# Codes that mean "no error" when read back from a handle.
CLEAN_CODES = frozenset((SQLITE_OK, SQLITE_ROW, SQLITE_DONE))

# Open flags (sqlite3_open_v2)
SQLITE_OPEN_READONLY = 0x00000001
SQLITE_OPEN_READWRITE = 0x00000002
SQLITE_OPEN_CREATE = 0x00000004
SQLITE_OPEN_URI = 0x00000040
SQLITE_OPEN_MEMORY = 0x00000080
SQLITE_OPEN_NOMUTEX = 0x00008000
SQLITE_OPEN_FULLMUTEX = 0x00010000
SQLITE_OPEN_SHAREDCACHE = 0x00020000
SQLITE_OPEN_PRIVATECACHE = 0x00040000
SQLITE_OPEN_NOFOLLOW = 0x01000000
SQLITE_OPEN_EXRESCODE = 0x02000000

# Column storage classes (sqlite3_column_type)
SQLITE_INTEGER = 1
SQLITE_FLOAT = 2
SQLITE_TEXT = 3
SQLITE_BLOB = 4
SQLITE_NULL = 5

# Destructor sentinel: the engine makes its own copy of bound buffers.
SQLITE_TRANSIENT = c_void_p(-1)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
# Byte lengths are passed to the engine as a C int.
MAX_BIND_LENGTH = 2 ** 31 - 1

_lib = None

def _candidate_names():
    found = ctypes.util.find_library("sqlite3")
    if found:
        yield found
    if sys.platform == "win32":
        yield "sqlite3.dll"
    elif sys.platform == "darwin":
        yield "libsqlite3.dylib"
        yield "/usr/lib/libsqlite3.dylib"
    else:
        yield "libsqlite3.so.0"
        yield "libsqlite3.so"

def load_library():
    global _lib
    if _lib is not None:
        return _lib

    lib_path = os.environ.get("LITEBIND_NATIVE_LIB")
    candidates = [lib_path] if lib_path else list(_candidate_names())

    errors = []
    lib = None
    for candidate in candidates:
        try:
            # CDLL (not PyDLL) releases the GIL around every native call.
            lib = ctypes.CDLL(candidate)
            break
        except OSError as e:
            errors.append(f"{candidate}: {e}")

    if lib is None:
        detail = "; ".join(errors) or "no candidates"
        raise RuntimeError(
            f"Could not load the sqlite3 native library ({detail}). "
            "Set LITEBIND_NATIVE_LIB env var."
        )

    try:
        _declare(lib)
    except AttributeError as e:
        raise RuntimeError(f"sqlite3 native library is missing a required symbol: {e}")

    _lib = lib
    return _lib

def _declare(lib):
    # Library info
    lib.sqlite3_libversion.argtypes = []
    lib.sqlite3_libversion.restype = c_char_p

    # Connections
    lib.sqlite3_open_v2.argtypes = [c_char_p, POINTER(c_void_p), c_int, c_char_p]
    lib.sqlite3_open_v2.restype = c_int

    lib.sqlite3_close_v2.argtypes = [c_void_p]
    lib.sqlite3_close_v2.restype = c_int

    lib.sqlite3_extended_result_codes.argtypes = [c_void_p, c_int]
    lib.sqlite3_extended_result_codes.restype = c_int

    lib.sqlite3_busy_timeout.argtypes = [c_void_p, c_int]
    lib.sqlite3_busy_timeout.restype = c_int

    lib.sqlite3_db_readonly.argtypes = [c_void_p, c_char_p]
    lib.sqlite3_db_readonly.restype = c_int

    # Error state
    lib.sqlite3_errcode.argtypes = [c_void_p]
    lib.sqlite3_errcode.restype = c_int

    lib.sqlite3_extended_errcode.argtypes = [c_void_p]
    lib.sqlite3_extended_errcode.restype = c_int

    lib.sqlite3_errmsg.argtypes = [c_void_p]
    lib.sqlite3_errmsg.restype = c_char_p

    # Statements. The SQL argument is a raw address so that script mode can
    # prepare from an offset inside one buffer and read back the tail.
    lib.sqlite3_prepare_v2.argtypes = [c_void_p, c_void_p, c_int, POINTER(c_void_p), POINTER(c_void_p)]
    lib.sqlite3_prepare_v2.restype = c_int

    lib.sqlite3_step.argtypes = [c_void_p]
    lib.sqlite3_step.restype = c_int

    lib.sqlite3_finalize.argtypes = [c_void_p]
    lib.sqlite3_finalize.restype = c_int

    lib.sqlite3_next_stmt.argtypes = [c_void_p, c_void_p]
    lib.sqlite3_next_stmt.restype = c_void_p

    # Bindings
    lib.sqlite3_bind_parameter_count.argtypes = [c_void_p]
    lib.sqlite3_bind_parameter_count.restype = c_int

    lib.sqlite3_bind_null.argtypes = [c_void_p, c_int]
    lib.sqlite3_bind_null.restype = c_int

    lib.sqlite3_bind_int.argtypes = [c_void_p, c_int, c_int]
    lib.sqlite3_bind_int.restype = c_int

    lib.sqlite3_bind_int64.argtypes = [c_void_p, c_int, c_int64]
    lib.sqlite3_bind_int64.restype = c_int

    lib.sqlite3_bind_double.argtypes = [c_void_p, c_int, c_double]
    lib.sqlite3_bind_double.restype = c_int

    lib.sqlite3_bind_text.argtypes = [c_void_p, c_int, c_char_p, c_int, c_void_p]
    lib.sqlite3_bind_text.restype = c_int

    lib.sqlite3_bind_blob.argtypes = [c_void_p, c_int, c_char_p, c_int, c_void_p]
    lib.sqlite3_bind_blob.restype = c_int

    # Columns
    lib.sqlite3_column_count.argtypes = [c_void_p]
    lib.sqlite3_column_count.restype = c_int

    lib.sqlite3_column_name.argtypes = [c_void_p, c_int]
    lib.sqlite3_column_name.restype = c_char_p

    lib.sqlite3_column_type.argtypes = [c_void_p, c_int]
    lib.sqlite3_column_type.restype = c_int

    lib.sqlite3_column_int64.argtypes = [c_void_p, c_int]
    lib.sqlite3_column_int64.restype = c_int64

    lib.sqlite3_column_double.argtypes = [c_void_p, c_int]
    lib.sqlite3_column_double.restype = c_double

    # Raw pointers: text and blob values may contain NUL bytes.
    lib.sqlite3_column_text.argtypes = [c_void_p, c_int]
    lib.sqlite3_column_text.restype = c_void_p

    lib.sqlite3_column_blob.argtypes = [c_void_p, c_int]
    lib.sqlite3_column_blob.restype = c_void_p

    lib.sqlite3_column_bytes.argtypes = [c_void_p, c_int]
    lib.sqlite3_column_bytes.restype = c_int

def library_version():
    return load_library().sqlite3_libversion().decode("ascii")
