"""
Write records into a table.

Control flow for one batch of records:
1. read the target columns' metadata with a query returning no rows
2. match the record field names against those columns
3. convert every value to the type its column declares, then let the
   dialect strategy adapt it for binding
4. insert all rows with executemany and commit

Records are mappings keyed by field name. Field names are matched without
regard to case; a field the table does not have fails the batch before
anything is written.
"""
import logging
import time
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from dbcommons.adapters.column_info import columns_from_cursor_description
from dbcommons.adapters.column_matching import get_matched_column_types
from dbcommons.adapters.type_mapping import to_parameter
from dbcommons.strategy import get_strategy, resolve_dialect
from dbcommons.types import ColumnType
from dbcommons.utils import ensure_commit

logger = logging.getLogger(__name__)


def table_column_types(cn: Any, table_name: str, columns: Sequence[str],
                       dialect: str | None = None) -> list[ColumnType]:
    """Matched column types of `columns` in a table.

    Raises
        ConfigurationError: naming the first column the table does not have
    """
    dialect = resolve_dialect(cn, dialect)
    sql = f'SELECT {", ".join(columns)} FROM {table_name} WHERE 1 = 0'
    cursor = cn.cursor()
    try:
        cursor.execute(sql)
        result_columns = columns_from_cursor_description(cursor, dialect, table_name, cn)
    finally:
        cursor.close()
    return get_matched_column_types(result_columns, columns)


def _get_field(record: Mapping[str, Any], name: str) -> Any:
    if name in record:
        return record[name]
    for key, value in record.items():
        if str(key).lower() == name.lower():
            return value
    return None


def write_records(cn: Any, table_name: str, records: Iterable[Mapping[str, Any]],
                  columns: Sequence[str] | None = None, dialect: str | None = None,
                  batch_size: int = 1000) -> int:
    """Insert records into a table.

    Args:
        cn: DBAPI connection
        table_name: Target table
        records: Mappings keyed by field name
        columns: Fields to write, the keys of the first record by default
        dialect: Dialect name, detected from the connection if omitted
        batch_size: Rows sent per executemany call

    Returns
        Number of records written

    Raises
        ConfigurationError: for an unsupported dialect or a column the table
            does not have
    """
    records = list(records)
    if not records:
        logger.debug(f'Skipping insert of empty records into {table_name}')
        return 0

    columns = list(columns or records[0].keys())
    dialect = resolve_dialect(cn, dialect)
    strategy = get_strategy(dialect)
    column_types = table_column_types(cn, table_name, columns, dialect)

    placeholders = ', '.join(strategy.placeholder(i) for i in range(1, len(columns) + 1))
    sql = f'INSERT INTO {table_name} ({", ".join(columns)}) VALUES ({placeholders})'

    rows = [tuple(strategy.adapt_value(to_parameter(col.sql_type, _get_field(record, col.name)))
                  for col in column_types)
            for record in records]

    start = time.time()
    logger.debug(f'SQL:\n{sql}\nrows: {len(rows)}')
    cursor = cn.cursor()
    try:
        for i in range(0, len(rows), batch_size):
            cursor.executemany(sql, rows[i:i + batch_size])
    except Exception:
        logger.error(f'Error inserting into {table_name}:\nSQL:\n{sql}')
        raise
    finally:
        cursor.close()
    ensure_commit(cn)

    logger.debug(f'Insert time: {time.time() - start:.4f}s, {len(rows)} rows')
    return len(rows)
