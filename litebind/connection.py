import collections
import ctypes
import logging
import operator
import os

from . import script, statement
from .errors import Error, OpenError, InvalidStateError, build_error, raise_error
from .native import (
    load_library, SQLITE_OK, SQLITE_CANTOPEN,
    SQLITE_OPEN_READONLY, SQLITE_OPEN_URI, SQLITE_OPEN_EXRESCODE,
)

logger = logging.getLogger(__name__)

class Connection:
    """A SQLite database handle.

    ``flags`` is a combination of the ``OPEN_*`` constants; URI filenames
    and extended result codes are always enabled. ``timeout`` (seconds)
    installs a busy handler; by default a locked database fails at once.

    The handle is released by ``close()``, by leaving a ``with`` block or
    when the object is garbage collected, whichever comes first.
    """

    def __init__(self, path, flags=SQLITE_OPEN_READONLY, *, timeout=None):
        self._db = None
        self._lib = load_library()
        self._stats = collections.Counter()
        self.flags = operator.index(flags)
        self.path = None
        try:
            encoded = os.fsencode(path)
            if b"\x00" in encoded:
                raise ValueError("embedded null byte")
        except (TypeError, ValueError) as e:
            raise OpenError(
                f"[{SQLITE_CANTOPEN}] invalid database path: {path!r}",
                code=SQLITE_CANTOPEN,
                extended_code=SQLITE_CANTOPEN,
                message=str(e),
            ) from e
        self.path = os.fsdecode(encoded)
        self._open(encoded, timeout)

    def _open(self, encoded, timeout):
        lib = self._lib
        db = ctypes.c_void_p()
        flags = self.flags | SQLITE_OPEN_URI | SQLITE_OPEN_EXRESCODE
        rc = lib.sqlite3_open_v2(encoded, ctypes.byref(db), flags, None)
        if rc != SQLITE_OK:
            err = build_error(db.value, self.path, kind=OpenError)
            logger.debug("open %r failed: %s", self.path, err.message)
            if db.value and lib.sqlite3_close_v2(db.value) != SQLITE_OK:
                raise_error(db.value, self.path, kind=OpenError, cause=err)
            raise err
        # Older libraries ignore SQLITE_OPEN_EXRESCODE.
        lib.sqlite3_extended_result_codes(db.value, 1)
        if timeout is not None:
            lib.sqlite3_busy_timeout(db.value, int(timeout * 1000))
        self._db = db.value
        logger.debug("opened %r (flags=0x%x)", self.path, self.flags)

    def _require_open(self):
        if not self._db:
            raise InvalidStateError("Connection closed")
        return self._db

    @property
    def closed(self):
        return not self._db

    @property
    def readonly(self):
        """Whether the engine treats the main database as read-only."""
        return self._lib.sqlite3_db_readonly(self._require_open(), b"main") == 1

    def close(self):
        db, self._db = getattr(self, "_db", None), None
        if not db:
            return
        rc = self._lib.sqlite3_close_v2(db)
        logger.debug("closed %r (rc=%d)", self.path, rc)
        if rc != SQLITE_OK:
            raise_error(db, self.path)

    def execute(self, sql, parameters=None):
        """Execute one SQL statement.

        ``parameters`` is a list or tuple of values for the ``?``
        placeholders, or a list/tuple of such sequences to execute the
        statement once per set (only the last set's result is returned).
        Returns None when the statement produced no rows, otherwise a list
        of rows.
        """
        self._require_open()
        self._stats["execute_count"] += 1
        return statement.execute(self, sql, parameters)

    def execute_script(self, sql):
        """Execute every statement in ``sql``; returns one result per statement."""
        self._require_open()
        self._stats["execute_count"] += 1
        return script.execute_script(self, sql)

    executescript = execute_script

    def _open_statement_count(self):
        lib = self._lib
        db = self._require_open()
        count = 0
        stmt = lib.sqlite3_next_stmt(db, None)
        while stmt:
            count += 1
            stmt = lib.sqlite3_next_stmt(db, stmt)
        return count

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __del__(self):
        try:
            self.close()
        except Error as e:
            logger.warning("failed to close %r: %s", self.path, e)

    def __repr__(self):
        return f"<litebind.{type(self).__name__}({self.path!r})>"

Database = Connection

def open(path, flags=SQLITE_OPEN_READONLY, *, timeout=None):
    return Connection(path, flags, timeout=timeout)
