"""
Database strategy factory for dialect-specific type metadata.
"""
from functools import lru_cache
from typing import Any

from dbcommons.exceptions import ConfigurationError
from dbcommons.strategy.base import _STRATEGY_REGISTRY
from dbcommons.strategy.base import DatabaseStrategy as DatabaseStrategy
from dbcommons.strategy.base import register_strategy as register_strategy
from dbcommons.strategy.oracle import OracleStrategy as OracleStrategy
from dbcommons.strategy.postgres import PostgresStrategy as PostgresStrategy
from dbcommons.strategy.sqlite import SQLiteStrategy as SQLiteStrategy
from dbcommons.utils import get_dialect_name


def get_available_dialects() -> list[str]:
    """Return list of registered dialect names."""
    return list(_STRATEGY_REGISTRY.keys())


def is_supported_dialect(dialect: str) -> bool:
    """Check if a dialect is supported."""
    return dialect in _STRATEGY_REGISTRY


def _validate_dialect(dialect: str) -> None:
    """Raise ValueError if dialect is not registered."""
    if not is_supported_dialect(dialect):
        raise ValueError(f'Unsupported dialect: {dialect}. Available: {get_available_dialects()}')


@lru_cache(maxsize=8)
def _get_strategy(dialect: str) -> DatabaseStrategy:
    """Get cached strategy instance for a dialect."""
    _validate_dialect(dialect)
    return _STRATEGY_REGISTRY[dialect]()


def get_strategy(dialect: str) -> DatabaseStrategy:
    """Get strategy instance for a dialect name.
    """
    return _get_strategy(dialect)


def resolve_dialect(cn: Any, dialect: str | None = None) -> str:
    """Dialect to use for a connection, detected from it unless given.

    Raises
        ConfigurationError: if no strategy is registered for the dialect
    """
    dialect = dialect or get_dialect_name(cn)
    if not is_supported_dialect(dialect):
        raise ConfigurationError(f'Unsupported dialect: {dialect}. '
                                 f'Available: {get_available_dialects()}', field='dialect')
    return dialect
