"""Low-level connection utilities with no internal dependencies.

These utilities work with any connection type (SQLAlchemy connections,
pool-proxied DBAPI connections, raw DBAPI connections) and have no imports
from other dbcommons modules, making them safe to import without circular
dependency concerns.
"""
import logging
from typing import Any

logger = logging.getLogger(__name__)

_DRIVER_MODULES = (
    ('psycopg', 'postgresql'),
    ('sqlite3', 'sqlite'),
    ('oracledb', 'oracle'),
    )


def get_dialect_name(obj: Any) -> str:
    """Get dialect name for a database connection or engine.
    """
    if hasattr(obj, 'dialect'):
        dialect = obj.dialect
        if isinstance(dialect, str):
            return dialect.lower()
        return str(dialect.name).lower()

    if hasattr(obj, 'engine') and hasattr(obj.engine, 'dialect'):
        return str(obj.engine.dialect.name).lower()

    if getattr(obj, 'driver_connection', None) is not None:
        return get_dialect_name(obj.driver_connection)

    type_name = f'{type(obj).__module__}.{type(obj).__name__}'
    for module, dialect in _DRIVER_MODULES:
        if module in type_name:
            return dialect

    raise AttributeError(f'Cannot determine dialect for {type(obj)}')


def get_raw_connection(connection: Any) -> Any:
    """Extract the raw DBAPI connection from a wrapper."""
    raw_conn = connection
    if getattr(connection, 'driver_connection', None) is not None:
        raw_conn = connection.driver_connection
    return raw_conn


def ensure_commit(connection: Any) -> None:
    """Force a commit on any database connection if it's not in auto-commit mode.

    Works safely even if the connection is already in auto-commit mode.
    """
    if hasattr(connection, 'commit'):
        try:
            connection.commit()
            return
        except Exception as e:
            logger.debug(f'Could not commit transaction: {e}')

    raw_conn = get_raw_connection(connection)
    if raw_conn is not connection and hasattr(raw_conn, 'commit'):
        raw_conn.commit()
