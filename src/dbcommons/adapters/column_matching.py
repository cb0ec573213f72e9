"""
Reconcile expected column names with result set metadata.

The default policy is strictly positional and case-insensitive: the i-th
expected name must be the i-th result column, so the SELECT list has to
follow schema order. BY_NAME relaxes that for reordered SELECT lists.
"""
import enum
import logging
from collections.abc import Sequence

from dbcommons.adapters.column_info import Column
from dbcommons.exceptions import ConfigurationError
from dbcommons.types import ColumnType

logger = logging.getLogger(__name__)


class MatchPolicy(enum.Enum):
    POSITIONAL = 'positional'
    POSITIONAL_CASE_SENSITIVE = 'positional_case_sensitive'
    BY_NAME = 'by_name'


def _missing(name: str) -> ConfigurationError:
    return ConfigurationError(f"Missing column '{name}' in SQL table", field=name)


def _match_positional(columns: Sequence[Column], expected: Sequence[str],
                      case_sensitive: bool) -> list[ColumnType]:
    def same(a: str, b: str) -> bool:
        return a == b if case_sensitive else a.lower() == b.lower()

    column_types = []
    for i, column in enumerate(columns):
        if i >= len(expected):
            raise ConfigurationError(f"Unexpected column '{column.name}' in SQL result",
                                     field=str(column.name))
        if not same(expected[i], str(column.name)):
            raise _missing(expected[i])
        column_types.append(ColumnType(expected[i], column.type_name, column.sql_type))

    if len(expected) > len(columns):
        raise _missing(expected[len(columns)])

    return column_types


def _match_by_name(columns: Sequence[Column], expected: Sequence[str]) -> list[ColumnType]:
    column_types = []
    for name in expected:
        column = Column.get_column_by_name(list(columns), name)
        if column is None:
            raise _missing(name)
        column_types.append(ColumnType(name, column.type_name, column.sql_type))
    return column_types


def get_matched_column_types(columns: Sequence[Column], expected: Sequence[str],
                             policy: MatchPolicy = MatchPolicy.POSITIONAL) -> list[ColumnType]:
    """Match expected column names against result columns.

    Args:
        columns: Result columns in result set order
        expected: Expected column names
        policy: Matching policy, positional and case-insensitive by default

    Returns
        One ColumnType per expected name, in order, carrying the expected
        name, the vendor type name and the SQL type code

    Raises
        ConfigurationError: naming the first column that does not match
    """
    if policy == MatchPolicy.BY_NAME:
        column_types = _match_by_name(columns, expected)
    else:
        column_types = _match_positional(
            columns, expected, case_sensitive=policy == MatchPolicy.POSITIONAL_CASE_SENSITIVE)
    logger.debug(f'Matched columns: {column_types}')
    return column_types
