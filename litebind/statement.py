"""Prepare, bind, step and finalize single SQL statements."""

import ctypes
import itertools
import logging

from .codec import bind_value, column_value
from .errors import EngineError, UnsupportedTypeError, raise_error
from .native import SQLITE_OK, SQLITE_ROW, SQLITE_DONE
from .row import RowSchema

logger = logging.getLogger(__name__)

_PARAMS_TYPES = (list, tuple)

def encode_sql(sql):
    """Encode ``sql`` into a NUL-terminated buffer the engine can read in place."""
    if not isinstance(sql, str):
        raise UnsupportedTypeError(f"sql must be str, not {type(sql).__name__}")
    encoded = sql.encode("utf-8")
    if b"\x00" in encoded:
        raise ValueError("the query contains a null character")
    return ctypes.create_string_buffer(encoded, len(encoded) + 1)

def check_params(params):
    if not isinstance(params, _PARAMS_TYPES):
        raise UnsupportedTypeError(
            f"parameters must be a list or tuple, not {type(params).__name__}"
        )
    return params

def is_batch(params):
    """True when ``params`` is a non-empty sequence of parameter sequences."""
    return bool(params) and all(isinstance(p, _PARAMS_TYPES) for p in params)


class Statement:
    """A prepared statement scoped to one ``with`` block.

    Entering prepares the SQL found at ``offset`` in ``buffer``; leaving
    finalizes it, whatever happened in between. ``tail`` is the offset of
    the first byte the engine did not consume.
    """

    def __init__(self, connection, buffer, offset=0, *, prepare_error=EngineError, error_extra=None):
        self._connection = connection
        self._lib = connection._lib
        self._db = connection._require_open()
        self._buffer = buffer
        self._offset = offset
        self._size = len(buffer) - 1
        self._prepare_error = prepare_error
        self._error_extra = error_extra or {}
        self._stmt = None
        self.compiled = False
        self.tail = self._size
        self.schema = None
        self.params = None

    @property
    def sql(self):
        # Up to the tail once prepared, so a script error shows only its own unit.
        return self._buffer.raw[self._offset:self.tail].decode("utf-8")

    def __enter__(self):
        self.prepare()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.finalize(exc)
        return False

    def _raise(self, **kwargs):
        raise_error(self._db, self._connection.path, sql=self.sql, params=self.params, **kwargs)

    def prepare(self):
        stmt = ctypes.c_void_p()
        tail = ctypes.c_void_p()
        base = ctypes.addressof(self._buffer)
        rc = self._lib.sqlite3_prepare_v2(
            self._db,
            base + self._offset,
            self._size - self._offset + 1,
            ctypes.byref(stmt),
            ctypes.byref(tail),
        )
        self._connection._stats["prepare_count"] += 1
        if rc != SQLITE_OK:
            self._raise(kind=self._prepare_error, **self._error_extra)
        self._stmt = stmt.value
        self.compiled = self._stmt is not None
        if tail.value:
            self.tail = tail.value - base

    def bind(self, params):
        """Bind ``params`` positionally; values beyond the placeholder count are ignored."""
        self.params = params
        count = self._lib.sqlite3_bind_parameter_count(self._stmt)
        for index, value in enumerate(itertools.islice(params, count), 1):
            if bind_value(self._lib, self._stmt, index, value) != SQLITE_OK:
                self._raise()

    def fetch_all(self):
        """Step to completion; returns a list of rows, or None when there are none."""
        lib = self._lib
        stmt = self._stmt
        path = self._connection.path
        rows = []
        while True:
            rc = lib.sqlite3_step(stmt)
            if rc == SQLITE_ROW:
                if self.schema is None:
                    self.schema = RowSchema.from_statement(lib, stmt)
                values = [
                    column_value(lib, self._db, stmt, i, path)
                    for i in range(len(self.schema))
                ]
                rows.append(self.schema.make_row(values))
            elif rc == SQLITE_DONE:
                break
            else:
                self._raise()
        return rows or None

    def finalize(self, exc=None):
        stmt, self._stmt = self._stmt, None
        if stmt is None:
            return
        rc = self._lib.sqlite3_finalize(stmt)
        self._connection._stats["finalize_count"] += 1
        if rc == SQLITE_OK:
            return
        # After a failed step the engine reports the same error again here.
        if isinstance(exc, EngineError) and exc.extended_code == rc:
            return
        logger.debug("finalize failed with %d", rc)
        self._raise(cause=exc)


def run(connection, buffer, offset=0, params=None, **statement_kwargs):
    """Run the statement at ``offset``; returns ``(statement, result)``."""
    result = None
    with Statement(connection, buffer, offset, **statement_kwargs) as statement:
        if statement.compiled:
            if params:
                statement.bind(params)
            result = statement.fetch_all()
    return statement, result

def execute(connection, sql, parameters=None):
    """Execute one statement, or one statement per parameter set in a batch.

    A batch keeps only the result of its last repetition.
    """
    buffer = encode_sql(sql)
    if parameters is None:
        return run(connection, buffer)[1]
    check_params(parameters)
    if is_batch(parameters):
        result = None
        for params in parameters:
            result = run(connection, buffer, 0, params)[1]
        return result
    return run(connection, buffer, 0, parameters)[1]
