"""
SQLite-specific strategy implementation.

The sqlite3 module reports `None` as the type code of every result column,
so the strategy works from declared type names instead:
- Declared types are read with PRAGMA table_info when a table is known
- Names are mapped following SQLite's column affinity rules, refined for
  the common declared types (SMALLINT, DECIMAL, DATE, CLOB, ...)
"""
import datetime
import decimal
import logging
from typing import Any

from dbcommons.strategy.base import DatabaseStrategy, register_strategy
from dbcommons.types import SqlType

logger = logging.getLogger(__name__)

sqlite_sql_types: dict[str, SqlType] = {
    'TINYINT': SqlType.TINYINT,
    'SMALLINT': SqlType.SMALLINT,
    'INT2': SqlType.SMALLINT,
    'BIGINT': SqlType.BIGINT,
    'INT8': SqlType.BIGINT,
    'REAL': SqlType.REAL,
    'FLOAT': SqlType.FLOAT,
    'DOUBLE': SqlType.DOUBLE,
    'DOUBLE PRECISION': SqlType.DOUBLE,
    'NUMERIC': SqlType.NUMERIC,
    'DECIMAL': SqlType.DECIMAL,
    'BOOLEAN': SqlType.BOOLEAN,
    'DATE': SqlType.DATE,
    'TIME': SqlType.TIME,
    'DATETIME': SqlType.TIMESTAMP,
    'TIMESTAMP': SqlType.TIMESTAMP,
    'CLOB': SqlType.CLOB,
    'BLOB': SqlType.BLOB,
    'CHAR': SqlType.CHAR,
    'NCHAR': SqlType.NCHAR,
    'NVARCHAR': SqlType.NVARCHAR,
    }


def _base_type_name(declared: str) -> str:
    """Strip length/precision arguments from a declared type.

    >>> _base_type_name('decimal(10, 2)')
    'DECIMAL'
    >>> _base_type_name('  varchar (30) ')
    'VARCHAR'
    """
    return declared.split('(', 1)[0].strip().upper()


def affinity_type(declared: str) -> SqlType:
    """Map a declared SQLite column type to a SQL type code.

    >>> affinity_type('SMALLINT')
    <SqlType.SMALLINT: 5>
    >>> affinity_type('MEDIUMINT')
    <SqlType.INTEGER: 4>
    >>> affinity_type('VARCHAR(30)')
    <SqlType.VARCHAR: 12>
    >>> affinity_type('')
    <SqlType.BLOB: 2004>
    """
    name = _base_type_name(declared)
    if name in sqlite_sql_types:
        return sqlite_sql_types[name]

    # https://www.sqlite.org/datatype3.html#determination_of_column_affinity
    if 'INT' in name:
        return SqlType.INTEGER
    if 'CHAR' in name or 'CLOB' in name or 'TEXT' in name:
        return SqlType.VARCHAR
    if not name or 'BLOB' in name:
        return SqlType.BLOB
    if 'REAL' in name or 'FLOA' in name or 'DOUB' in name:
        return SqlType.DOUBLE
    return SqlType.NUMERIC


@register_strategy('sqlite')
class SQLiteStrategy(DatabaseStrategy):
    """SQLite type resolution.
    """

    @property
    def dialect_name(self) -> str:
        """Return the dialect identifier for SQLite."""
        return 'sqlite'

    def resolve_type_code(self, type_code: Any) -> tuple[str, SqlType] | None:
        """Resolve a declared type name or a standard SQL type code."""
        if isinstance(type_code, str):
            return _base_type_name(type_code), affinity_type(type_code)

        if isinstance(type_code, int) and type_code in SqlType._value2member_map_:
            sql_type = SqlType(type_code)
            return sql_type.name, sql_type

        return None

    def declared_types(self, cn: Any, table: str) -> dict[str, str]:
        """Get declared column types for a table using PRAGMA table_info.
        """
        cursor = cn.cursor()
        try:
            cursor.execute(f'PRAGMA table_info({self.quote_identifier(table)})')
            declared = {row[1].lower(): row[2] or '' for row in cursor.fetchall()}
        finally:
            cursor.close()
        logger.debug(f'Declared types for {table}: {declared}')
        return declared

    def adapt_value(self, value: Any) -> Any:
        """Store values sqlite3 cannot bind as ISO strings or integers.

        >>> SQLiteStrategy().adapt_value(datetime.date(2023, 5, 15))
        '2023-05-15'
        >>> SQLiteStrategy().adapt_value(decimal.Decimal('12.50'))
        '12.50'
        >>> SQLiteStrategy().adapt_value(True)
        1
        """
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, decimal.Decimal):
            return str(value)
        if isinstance(value, datetime.date | datetime.time):
            return value.isoformat()
        return value
