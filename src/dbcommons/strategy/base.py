"""
Base strategy interface for dialect-specific type metadata.

Each dialect reports column types differently in `cursor.description`:
PostgreSQL gives type OIDs, SQLite gives nothing at all, Oracle gives
`DbType` objects. A strategy translates whatever the driver reports into a
vendor type name plus a standard SqlType code so the rest of the package can
work with any backend through one interface.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any

from dbcommons.types import SqlType

logger = logging.getLogger(__name__)

# Registry of dialect name -> strategy class
# Defined here to avoid circular imports (concrete strategies import from base)
_STRATEGY_REGISTRY: dict[str, type['DatabaseStrategy']] = {}


def register_strategy(dialect: str):
    """Decorator to register a strategy class for a dialect.

    Usage:
        @register_strategy('postgresql')
        class PostgresStrategy(DatabaseStrategy):
            ...
    """
    def decorator(cls: type['DatabaseStrategy']) -> type['DatabaseStrategy']:
        _STRATEGY_REGISTRY[dialect] = cls
        return cls
    return decorator


class DatabaseStrategy(ABC):
    """Base class for dialect-specific type resolution.
    """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the dialect identifier."""

    @abstractmethod
    def resolve_type_code(self, type_code: Any) -> tuple[str, SqlType] | None:
        """Resolve a driver type code to (vendor type name, SqlType).

        Returns None when the code is not recognized.
        """

    def describe_type(self, type_code: Any) -> tuple[str, SqlType]:
        """Describe a driver type code as (vendor type name, SqlType).

        SqlType members are accepted by every dialect. Unrecognized codes map
        to OTHER.
        """
        if type_code is None:
            return '', SqlType.OTHER

        if isinstance(type_code, SqlType):
            return type_code.name, type_code

        resolved = self.resolve_type_code(type_code)
        if resolved is not None:
            return resolved

        logger.debug(f'Unknown {self.dialect_name} type code {type_code!r}, using OTHER')
        return str(type_code), SqlType.OTHER

    def declared_types(self, cn: Any, table: str) -> dict[str, str]:
        """Return declared column types for a table keyed by lowercased name.

        Only needed by dialects whose cursors do not report type codes.
        """
        return {}

    def quote_identifier(self, identifier: str) -> str:
        """Safely quote a table or column name."""
        return '"' + identifier.replace('"', '""') + '"'

    def placeholder(self, position: int) -> str:
        """Bind parameter marker for the 1-based parameter `position`."""
        return '?'

    def adapt_value(self, value: Any) -> Any:
        """Adapt a converted value to a parameter the driver can bind.
        """
        return value
