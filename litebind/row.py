"""Named rows.

A statement's column names are read once, on its first row, into a
``RowSchema``; every ``Row`` the statement produces shares that schema.
Rows are plain tuples underneath, names are only a convenience: duplicate
and empty column names are kept as-is.
"""


class RowSchema:
    __slots__ = ("names", "_index")

    def __init__(self, names):
        self.names = tuple(names)
        index = {}
        for i, name in enumerate(self.names):
            index.setdefault(name, i)
        self._index = index

    @classmethod
    def from_statement(cls, lib, stmt):
        count = lib.sqlite3_column_count(stmt)
        names = []
        for i in range(count):
            name_ptr = lib.sqlite3_column_name(stmt, i)
            names.append(name_ptr.decode("utf-8") if name_ptr else "")
        return cls(names)

    def __len__(self):
        return len(self.names)

    def __eq__(self, other):
        if not isinstance(other, RowSchema):
            return NotImplemented
        return self.names == other.names

    def __hash__(self):
        return hash(self.names)

    def __repr__(self):
        return f"RowSchema({list(self.names)!r})"

    def index(self, name):
        """Position of the first column called ``name``."""
        return self._index[name]

    def make_row(self, values):
        return Row(values, self)


def _row_schema(row):
    # Read past __getattribute__: a column may itself be called "_schema".
    return tuple.__getattribute__(row, "__dict__").get("_schema")


class Row(tuple):
    """A result row: a tuple with the query's column names attached.

    Column names take precedence over tuple and Row attributes, so a column
    called ``count`` or ``index`` reads as its value.
    """

    def __new__(cls, values, schema):
        self = super().__new__(cls, values)
        if len(self) != len(schema):
            raise ValueError(f"expected {len(schema)} values, got {len(self)}")
        self._schema = schema
        return self

    @property
    def _fields(self):
        return _row_schema(self).names

    def __getattribute__(self, name):
        if not name.startswith("__"):
            schema = _row_schema(self)
            if schema is not None:
                index = schema._index.get(name)
                if index is not None:
                    return self[index]
        return super().__getattribute__(name)

    def __getattr__(self, name):
        raise AttributeError(f"row has no column {name!r}")

    def _asdict(self):
        """Map column names to values; the first of duplicate names wins."""
        out = {}
        for name, value in zip(_row_schema(self).names, self):
            out.setdefault(name, value)
        return out

    def __repr__(self):
        fields = ", ".join(
            f"{name}={value!r}" for name, value in zip(_row_schema(self).names, self)
        )
        return f"Row({fields})"

    def __reduce__(self):
        return (Row, (tuple(self), _row_schema(self)))
