"""
Column information abstraction across database backends.
"""
import logging
from typing import Any, Self

from dbcommons.strategy import get_strategy
from dbcommons.types import SqlType

logger = logging.getLogger(__name__)


class Column:
    """Representation of a result column with type information and metadata

    Technical implementation details:
    - Encapsulates driver column metadata (type_code, precision, scale, etc.)
    - Resolves type_code from cursor.description to a vendor type name and a
      standard SQL type code through the dialect strategy
    - Keeps the driver type_code next to the resolved codes for diagnostics

    Database compatibility:
    - PostgreSQL: type OIDs
    - SQLite: declared types, looked up by table when the cursor reports none
    - Oracle: DbType objects
    """

    def __init__(self,
                 name: str,
                 type_code: Any,
                 type_name: str = '',
                 sql_type: int = SqlType.OTHER,
                 display_size: int | None = None,
                 internal_size: int | None = None,
                 precision: int | None = None,
                 scale: int | None = None,
                 nullable: bool | None = None):
        """
        Initialize column information

        Args:
            name: Display name of the column
            type_code: Driver-specific type code
            type_name: Vendor type name (e.g. 'int4', 'NUMBER')
            sql_type: Standard SQL type code
            display_size: Maximum display size (character count)
            internal_size: Internal storage size (bytes)
            precision: Numeric precision (for numeric types)
            scale: Numeric scale (for numeric types)
            nullable: Whether the column allows NULL values
        """
        self.name = name
        self.type_code = type_code
        self.type_name = type_name
        self.sql_type = sql_type
        self.display_size = display_size
        self.internal_size = internal_size
        self.precision = precision
        self.scale = scale
        self.nullable = nullable

    @classmethod
    def from_cursor_description(cls, description_item: Any, dialect: str,
                                declared_types: dict[str, str] | None = None) -> Self:
        """Create a Column from cursor description item.

        Args:
            description_item: One item from cursor.description
            dialect: Database dialect ('postgresql', 'sqlite', 'oracle')
            declared_types: Optional declared type names keyed by lowercased
                column name, used when the driver reports no type code

        Returns
            Column instance
        """
        item = tuple(description_item) + (None,) * (7 - len(description_item))
        name, type_code, display_size, internal_size, precision, scale, null_ok = item[:7]

        if type_code is None and declared_types:
            type_code = declared_types.get(str(name).lower())

        type_name, sql_type = get_strategy(dialect).describe_type(type_code)

        return cls(
            name=name,
            type_code=type_code,
            type_name=type_name,
            sql_type=sql_type,
            display_size=display_size,
            internal_size=internal_size,
            precision=precision,
            scale=scale,
            nullable=None if null_ok is None else bool(null_ok),
            )

    def __repr__(self) -> str:
        return (f'Column(name={self.name!r}, type_name={self.type_name!r}, '
                f'sql_type={SqlType.from_code(self.sql_type).name})')

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization.
        """
        return {
            'name': self.name,
            'type_name': self.type_name,
            'sql_type': int(self.sql_type),
            'display_size': self.display_size,
            'internal_size': self.internal_size,
            'precision': self.precision,
            'scale': self.scale,
            'nullable': self.nullable,
            }

    @staticmethod
    def get_names(columns: list[Self]) -> list[str]:
        """Get column names from a list of Column objects.
        """
        return [col.name for col in columns]

    @staticmethod
    def get_column_by_name(columns: list[Self], name: str) -> Self | None:
        """Find a column by name, ignoring case.
        """
        for col in columns:
            if str(col.name).lower() == name.lower():
                return col
        return None


def columns_from_cursor_description(cursor: Any, dialect: str,
                                    table_name: str | None = None,
                                    connection: Any | None = None) -> list[Column]:
    """Create Column objects directly from a cursor description.

    Args:
        cursor: Database cursor with a description attribute
        dialect: Database dialect ('postgresql', 'sqlite', 'oracle')
        table_name: Optional table name for declared type lookup
        connection: Optional connection for declared type lookup

    Returns
        List of Column objects
    """
    if cursor.description is None:
        return []

    declared_types = None
    if table_name and connection is not None \
            and any(item[1] is None for item in cursor.description):
        declared_types = get_strategy(dialect).declared_types(connection, table_name)

    return [Column.from_cursor_description(item, dialect, declared_types)
            for item in cursor.description]
