"""
Record schemas derived from matched columns.

A schema is an ordered mapping of field name to ValueKind.
"""
import logging
from collections.abc import Mapping, Sequence

from dbcommons.exceptions import ConfigurationError
from dbcommons.types import ColumnType, ValueKind

logger = logging.getLogger(__name__)

SCHEMA = 'schema'


def schema_from_column_types(column_types: Sequence[ColumnType]) -> dict[str, ValueKind]:
    """Build a record schema from matched column types.
    """
    return {col.name: col.kind for col in column_types}


def validate_source_schema(actual: Mapping[str, ValueKind],
                           expected: Mapping[str, ValueKind] | None) -> None:
    """Check that every expected field exists in the actual schema with the same kind.

    Field names are compared exactly. Actual fields not in the expected
    schema are allowed.

    Raises
        ConfigurationError: for a missing schema, a missing field or a kind mismatch
    """
    if not expected:
        raise ConfigurationError('Schema should not be null or empty', field=SCHEMA)

    for name, kind in expected.items():
        if name not in actual:
            raise ConfigurationError(f"Schema field '{name}' is not present in actual record",
                                     field=SCHEMA)
        if actual[name] != kind:
            raise ConfigurationError(
                f"Schema field '{name}' has type '{kind.value}' but found "
                f"'{actual[name].value}' in input record", field=name)
