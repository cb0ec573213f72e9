"""
PostgreSQL-specific strategy implementation.

psycopg reports the type OID of every result column. OIDs are resolved to
type names through psycopg's built-in type registry and then mapped onto the
standard SQL type codes the way the PostgreSQL JDBC driver reports them
(for instance timestamptz is reported as TIMESTAMP).
"""
import logging
from typing import Any

from dbcommons.strategy.base import DatabaseStrategy, register_strategy
from dbcommons.types import SqlType
from psycopg.postgres import types

logger = logging.getLogger(__name__)

postgres_sql_types: dict[str, SqlType] = {
    'int2': SqlType.SMALLINT,
    'int4': SqlType.INTEGER,
    'int8': SqlType.BIGINT,
    'oid': SqlType.BIGINT,
    'float4': SqlType.REAL,
    'float8': SqlType.DOUBLE,
    'numeric': SqlType.NUMERIC,
    'money': SqlType.DOUBLE,
    'bool': SqlType.BIT,
    '"char"': SqlType.CHAR,
    'bpchar': SqlType.CHAR,
    'varchar': SqlType.VARCHAR,
    'text': SqlType.VARCHAR,
    'name': SqlType.VARCHAR,
    'date': SqlType.DATE,
    'time': SqlType.TIME,
    'timetz': SqlType.TIME,
    'timestamp': SqlType.TIMESTAMP,
    'timestamptz': SqlType.TIMESTAMP,
    'bytea': SqlType.BINARY,
    'xml': SqlType.SQLXML,
    }


@register_strategy('postgresql')
class PostgresStrategy(DatabaseStrategy):
    """PostgreSQL type resolution.
    """

    @property
    def dialect_name(self) -> str:
        """Return the dialect identifier for PostgreSQL."""
        return 'postgresql'

    def resolve_type_code(self, type_code: Any) -> tuple[str, SqlType] | None:
        """Resolve a PostgreSQL type OID.

        Array types resolve to ARRAY; any other known OID without a standard
        counterpart (json, uuid, ...) resolves to OTHER.
        """
        if not isinstance(type_code, int):
            return None

        info = types.get(type_code)
        if info is None:
            return None

        if type_code == info.array_oid:
            return f'_{info.name}', SqlType.ARRAY

        return info.name, postgres_sql_types.get(info.name, SqlType.OTHER)

    def placeholder(self, position: int) -> str:
        return '%s'
