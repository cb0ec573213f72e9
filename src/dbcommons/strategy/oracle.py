"""
Oracle-specific strategy implementation.

python-oracledb reports a `DbType` object as the type code of each column,
for example `oracledb.DB_TYPE_NUMBER`. The strategy works from the DbType
name so the driver itself does not need to be importable.
"""
import logging
from typing import Any

from dbcommons.strategy.base import DatabaseStrategy, register_strategy
from dbcommons.types import SqlType

logger = logging.getLogger(__name__)

oracle_sql_types: dict[str, SqlType] = {
    'NUMBER': SqlType.NUMERIC,
    'BINARY_INTEGER': SqlType.INTEGER,
    'BINARY_FLOAT': SqlType.REAL,
    'BINARY_DOUBLE': SqlType.DOUBLE,
    'BOOLEAN': SqlType.BOOLEAN,
    'CHAR': SqlType.CHAR,
    'NCHAR': SqlType.NCHAR,
    'VARCHAR': SqlType.VARCHAR,
    'NVARCHAR': SqlType.NVARCHAR,
    'LONG': SqlType.LONGVARCHAR,
    'LONG_NVARCHAR': SqlType.LONGNVARCHAR,
    'RAW': SqlType.VARBINARY,
    'LONG_RAW': SqlType.LONGVARBINARY,
    'DATE': SqlType.TIMESTAMP,
    'TIMESTAMP': SqlType.TIMESTAMP,
    'TIMESTAMP_TZ': SqlType.TIMESTAMP,
    'TIMESTAMP_LTZ': SqlType.TIMESTAMP,
    'ROWID': SqlType.ROWID,
    'UROWID': SqlType.ROWID,
    'BLOB': SqlType.BLOB,
    'CLOB': SqlType.CLOB,
    'NCLOB': SqlType.NCLOB,
    'BFILE': SqlType.OTHER,
    'JSON': SqlType.OTHER,
    }


def _db_type_name(type_code: Any) -> str | None:
    """Get the Oracle type name from a DbType object or its name.

    >>> _db_type_name('DB_TYPE_NUMBER')
    'NUMBER'
    >>> _db_type_name(42) is None
    True
    """
    name = type_code if isinstance(type_code, str) else getattr(type_code, 'name', None)
    if not isinstance(name, str):
        return None
    return name.upper().removeprefix('DB_TYPE_')


@register_strategy('oracle')
class OracleStrategy(DatabaseStrategy):
    """Oracle type resolution.

    Oracle DATE carries a time of day, so it is reported as TIMESTAMP.
    """

    @property
    def dialect_name(self) -> str:
        """Return the dialect identifier for Oracle."""
        return 'oracle'

    def resolve_type_code(self, type_code: Any) -> tuple[str, SqlType] | None:
        name = _db_type_name(type_code)
        if name is None:
            if isinstance(type_code, int) and type_code in SqlType._value2member_map_:
                sql_type = SqlType(type_code)
                return sql_type.name, sql_type
            return None
        return name, oracle_sql_types.get(name, SqlType.OTHER)

    def placeholder(self, position: int) -> str:
        """Oracle binds by position with numbered markers."""
        return f':{position}'
