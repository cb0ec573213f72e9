"""
Canonical SQL type codes and value kinds.

SqlType holds the standard (X/Open) SQL type codes that JDBC and most
vendor catalogs report. Dialect strategies translate driver type codes into
these, and the type mapper dispatches on them.
"""
import enum
from dataclasses import dataclass


class SqlType(enum.IntEnum):
    """Standard SQL type codes.
    """
    BIT = -7
    TINYINT = -6
    SMALLINT = 5
    INTEGER = 4
    BIGINT = -5
    FLOAT = 6
    REAL = 7
    DOUBLE = 8
    NUMERIC = 2
    DECIMAL = 3
    CHAR = 1
    VARCHAR = 12
    LONGVARCHAR = -1
    NCHAR = -15
    NVARCHAR = -9
    LONGNVARCHAR = -16
    BOOLEAN = 16
    DATE = 91
    TIME = 92
    TIMESTAMP = 93
    BINARY = -2
    VARBINARY = -3
    LONGVARBINARY = -4
    ROWID = -8
    NULL = 0
    OTHER = 1111
    ARRAY = 2003
    BLOB = 2004
    CLOB = 2005
    NCLOB = 2011
    SQLXML = 2009

    @classmethod
    def from_code(cls, code: int) -> 'SqlType':
        """Return the member for `code`, or OTHER for unknown codes.

        >>> SqlType.from_code(5)
        <SqlType.SMALLINT: 5>
        >>> SqlType.from_code(424242)
        <SqlType.OTHER: 1111>
        """
        try:
            return cls(code)
        except ValueError:
            return cls.OTHER


class ValueKind(enum.Enum):
    """Tag of a mapped column value.
    """
    INTEGER = 'integer'
    LONG = 'long'
    FLOAT = 'float'
    DOUBLE = 'double'
    DECIMAL = 'decimal'
    STRING = 'string'
    BYTES = 'bytes'
    BOOLEAN = 'boolean'
    DATE = 'date'
    TIME = 'time'
    TIMESTAMP = 'timestamp'
    NULL = 'null'
    OBJECT = 'object'


_VALUE_KINDS: dict[SqlType, ValueKind] = {
    SqlType.TINYINT: ValueKind.INTEGER,
    SqlType.SMALLINT: ValueKind.INTEGER,
    SqlType.INTEGER: ValueKind.INTEGER,
    SqlType.BIGINT: ValueKind.LONG,
    SqlType.REAL: ValueKind.FLOAT,
    SqlType.FLOAT: ValueKind.DOUBLE,
    SqlType.DOUBLE: ValueKind.DOUBLE,
    SqlType.NUMERIC: ValueKind.DECIMAL,
    SqlType.DECIMAL: ValueKind.DECIMAL,
    SqlType.CHAR: ValueKind.STRING,
    SqlType.VARCHAR: ValueKind.STRING,
    SqlType.LONGVARCHAR: ValueKind.STRING,
    SqlType.NCHAR: ValueKind.STRING,
    SqlType.NVARCHAR: ValueKind.STRING,
    SqlType.LONGNVARCHAR: ValueKind.STRING,
    SqlType.ROWID: ValueKind.STRING,
    SqlType.CLOB: ValueKind.STRING,
    SqlType.BIT: ValueKind.BOOLEAN,
    SqlType.BOOLEAN: ValueKind.BOOLEAN,
    SqlType.DATE: ValueKind.DATE,
    SqlType.TIME: ValueKind.TIME,
    SqlType.TIMESTAMP: ValueKind.TIMESTAMP,
    SqlType.BINARY: ValueKind.BYTES,
    SqlType.VARBINARY: ValueKind.BYTES,
    SqlType.LONGVARBINARY: ValueKind.BYTES,
    SqlType.BLOB: ValueKind.BYTES,
    SqlType.NULL: ValueKind.NULL,
    }


def value_kind(sql_type: int) -> ValueKind:
    """Get the kind of value the type mapper produces for a SQL type code.

    >>> value_kind(SqlType.SMALLINT)
    <ValueKind.INTEGER: 'integer'>
    >>> value_kind(SqlType.ARRAY)
    <ValueKind.OBJECT: 'object'>
    """
    return _VALUE_KINDS.get(SqlType.from_code(sql_type), ValueKind.OBJECT)


@dataclass(frozen=True)
class ColumnType:
    """A matched result column: expected name, vendor type name, SQL type code.
    """
    name: str
    type_name: str
    sql_type: int

    @property
    def kind(self) -> ValueKind:
        return value_kind(self.sql_type)


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
