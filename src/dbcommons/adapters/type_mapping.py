"""
Type mapping from SQL result values to canonical Python values.

`transform_value` converts one cell of a fetched row according to the
column's standard SQL type code:

- NULL stays None for every type
- SMALLINT/TINYINT are widened to int
- NUMERIC/DECIMAL become Decimal without re-scaling
- DATE/TIME/TIMESTAMP are re-read through the row's typed accessors
- ROWID is read as a string
- BLOB/CLOB are materialized in full
- everything else is returned exactly as the driver produced it

Driver errors propagate unchanged.

`to_parameter` goes the other way, converting a record value to the type of
the column it is written to.
"""
import decimal
import logging
from typing import Any

from dbcommons.adapters.structure import ResultRow, to_date, to_time, to_timestamp
from dbcommons.types import SqlType

logger = logging.getLogger(__name__)


def to_decimal(value: Any) -> decimal.Decimal:
    """Convert a numeric driver value to Decimal, preserving its scale.

    Floats go through their shortest repr so no binary noise is introduced.

    >>> to_decimal(decimal.Decimal('12.500'))
    Decimal('12.500')
    >>> to_decimal(12.5)
    Decimal('12.5')
    >>> to_decimal(7)
    Decimal('7')
    """
    if isinstance(value, decimal.Decimal):
        return value
    if isinstance(value, float):
        return decimal.Decimal(repr(value))
    if isinstance(value, int):
        return decimal.Decimal(value)
    return decimal.Decimal(str(value))


def _read_lob(lob: Any, empty: bytes | str) -> bytes | str:
    """Read a LOB locator in full.

    The length is fetched first, then `read(offset, amount)` (1-based offset)
    is called until that many units have been collected, whatever amount each
    call actually returns.
    """
    size = lob.size()
    chunks = []
    offset = 1
    while offset <= size:
        chunk = lob.read(offset, size - offset + 1)
        if not chunk:
            logger.warning(f'LOB read stopped early at {offset - 1} of {size}')
            break
        chunks.append(chunk)
        offset += len(chunk)
    return empty.join(chunks)


def read_blob(value: Any) -> bytes:
    """Materialize the full content of a binary large object.

    Accepts bytes-like buffers, LOB locators exposing `size()` and
    `read(offset, amount)`, and file-like objects exposing `read()`.

    >>> read_blob(memoryview(b'abc'))
    b'abc'
    """
    if isinstance(value, bytes | bytearray | memoryview):
        return bytes(value)
    if hasattr(value, 'size') and hasattr(value, 'read'):
        return bytes(_read_lob(value, b''))
    if hasattr(value, 'read'):
        return bytes(value.read())
    raise TypeError(f'Cannot read {type(value).__name__} as a BLOB')


def read_clob(value: Any) -> str:
    """Materialize the full content of a character large object.

    >>> read_clob('abc')
    'abc'
    """
    if isinstance(value, str):
        return value
    if hasattr(value, 'size') and hasattr(value, 'read'):
        return str(_read_lob(value, ''))
    if hasattr(value, 'read'):
        return str(value.read())
    raise TypeError(f'Cannot read {type(value).__name__} as a CLOB')


def transform_value(sql_type: int, precision: int | None, scale: int | None,
                    row: ResultRow, index: int) -> Any:
    """Convert one cell of a fetched row to its canonical Python value.

    Args:
        sql_type: Standard SQL type code of the column
        precision: Column precision as reported by the driver
        scale: Column scale as reported by the driver
        row: Fetched row
        index: 0-based column position

    Returns
        Mapped value or None
    """
    original = row.get_object(index)
    if original is None:
        return None

    if sql_type in {SqlType.SMALLINT, SqlType.TINYINT}:
        return int(original)
    if sql_type in {SqlType.NUMERIC, SqlType.DECIMAL}:
        return to_decimal(original)
    if sql_type == SqlType.DATE:
        return row.get_date(index)
    if sql_type == SqlType.TIME:
        return row.get_time(index)
    if sql_type == SqlType.TIMESTAMP:
        return row.get_timestamp(index)
    if sql_type == SqlType.ROWID:
        return row.get_string(index)
    if sql_type == SqlType.BLOB:
        return read_blob(original)
    if sql_type == SqlType.CLOB:
        return read_clob(original)
    return original


_INTEGER_TYPES = {SqlType.TINYINT, SqlType.SMALLINT, SqlType.INTEGER, SqlType.BIGINT}
_FLOAT_TYPES = {SqlType.REAL, SqlType.FLOAT, SqlType.DOUBLE}
_CHARACTER_TYPES = {SqlType.CHAR, SqlType.VARCHAR, SqlType.LONGVARCHAR, SqlType.NCHAR,
                    SqlType.NVARCHAR, SqlType.LONGNVARCHAR, SqlType.CLOB, SqlType.NCLOB,
                    SqlType.ROWID, SqlType.SQLXML}
_BINARY_TYPES = {SqlType.BINARY, SqlType.VARBINARY, SqlType.LONGVARBINARY, SqlType.BLOB}


def to_parameter(sql_type: int, value: Any) -> Any:
    """Convert a record value to the Python type its column is written as.

    The write-side counterpart of `transform_value`. Values with looser types
    than the column declares (a float for DECIMAL, bytes for CLOB) are
    converted to the declared type.

    >>> to_parameter(SqlType.SMALLINT, '7')
    7
    >>> to_parameter(SqlType.DECIMAL, 12.5)
    Decimal('12.5')
    >>> to_parameter(SqlType.CLOB, b'text')
    'text'
    >>> to_parameter(SqlType.DATE, '2023-05-15')
    datetime.date(2023, 5, 15)
    """
    if value is None:
        return None

    if sql_type in _INTEGER_TYPES:
        return int(value)
    if sql_type in _FLOAT_TYPES:
        return float(value)
    if sql_type in {SqlType.NUMERIC, SqlType.DECIMAL}:
        return to_decimal(value)
    if sql_type in {SqlType.BIT, SqlType.BOOLEAN}:
        return bool(value)
    if sql_type == SqlType.DATE:
        return to_date(value)
    if sql_type == SqlType.TIME:
        return to_time(value)
    if sql_type == SqlType.TIMESTAMP:
        return to_timestamp(value)
    if sql_type in _CHARACTER_TYPES:
        if isinstance(value, bytes | bytearray | memoryview):
            return bytes(value).decode()
        return read_clob(value) if hasattr(value, 'read') else str(value)
    if sql_type in _BINARY_TYPES:
        if isinstance(value, str):
            return value.encode()
        return read_blob(value)
    return value


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
