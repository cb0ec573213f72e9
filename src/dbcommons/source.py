"""
Read query results as records.

Control flow for one query:
1. execute the statement on a DBAPI cursor
2. build Column metadata from cursor.description through the dialect strategy
3. match the expected column names, producing one ColumnType per column
4. for each row, map every cell with transform_value
5. hand the records to a data loader
"""
import logging
import time
from collections.abc import Iterator, Sequence
from typing import Any

from dbcommons.adapters.column_info import Column, columns_from_cursor_description
from dbcommons.adapters.column_matching import MatchPolicy, get_matched_column_types
from dbcommons.adapters.structure import ResultSet
from dbcommons.adapters.type_mapping import transform_value
from dbcommons.options import DataLoader, iterdict_data_loader
from dbcommons.strategy import resolve_dialect
from dbcommons.types import ColumnType

from libb import attrdict

logger = logging.getLogger(__name__)


def read_records(result_set: ResultSet, column_types: Sequence[ColumnType],
                 precisions: Sequence[tuple[int | None, int | None]] | None = None,
                 positions: Sequence[int] | None = None) -> Iterator[attrdict]:
    """Yield one record per remaining row of the result set.

    Args:
        result_set: Forward-only result set positioned before the first row
        column_types: Matched column types
        precisions: Optional (precision, scale) per column type
        positions: Optional row position per column type, in order by default
    """
    precisions = precisions or [(None, None)] * len(column_types)
    positions = positions or range(len(column_types))
    for row in result_set:
        yield attrdict({
            col.name: transform_value(col.sql_type, precision, scale, row, position)
            for col, position, (precision, scale) in zip(column_types, positions, precisions)
            })


def select_records(cn: Any, sql: str, columns: Sequence[str], *args: Any,
                   dialect: str | None = None, table_name: str | None = None,
                   policy: MatchPolicy = MatchPolicy.POSITIONAL,
                   data_loader: DataLoader = iterdict_data_loader) -> Any:
    """Execute a query and load its rows as records.

    Args:
        cn: DBAPI connection
        sql: Query to execute
        columns: Expected column names, in SELECT order unless policy is BY_NAME
        args: Query parameters
        dialect: Dialect name, detected from the connection if omitted
        table_name: Table to read declared types from when the driver reports none
        policy: Column matching policy
        data_loader: Callable receiving (records, column_types)

    Returns
        Whatever the data loader returns, a list of dicts by default

    Raises
        ConfigurationError: for an unsupported dialect or mismatched columns
    """
    dialect = resolve_dialect(cn, dialect)
    cursor = cn.cursor()
    start = time.time()
    logger.debug(f'SQL:\n{sql}\nargs: {args}')
    try:
        if args:
            cursor.execute(sql, args)
        else:
            cursor.execute(sql)
    except Exception:
        logger.error(f'Error with query:\nSQL:\n{sql}\nargs: {args}')
        cursor.close()
        raise

    with ResultSet(cursor) as result_set:
        result_columns = columns_from_cursor_description(cursor, dialect, table_name, cn)
        column_types = get_matched_column_types(result_columns, columns, policy)
        if policy == MatchPolicy.BY_NAME:
            ordered = [Column.get_column_by_name(result_columns, name) for name in columns]
        else:
            ordered = result_columns
        positions = [result_columns.index(col) for col in ordered]
        precisions = [(col.precision, col.scale) for col in ordered]
        records = list(read_records(result_set, column_types, precisions, positions))

    logger.debug(f'Query time: {time.time() - start:.4f}s, {len(records)} rows')
    return data_loader(records, column_types, table_name=table_name)

