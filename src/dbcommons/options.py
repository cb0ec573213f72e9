from collections.abc import Callable, Sequence
from typing import Any

import pandas as pd
import pyarrow as pa
from dbcommons.types import ColumnType

__all__ = [
    'DataLoader',
    'pandas_numpy_data_loader',
    'pandas_pyarrow_data_loader',
    'iterdict_data_loader',
    'get_column_types_dict',
]

DataLoader = Callable[..., Any]


def get_column_types_dict(columns: Sequence[ColumnType]) -> dict[str, dict[str, Any]]:
    """Get a dictionary of column type metadata indexed by name.
    """
    return {
        col.name: {
            'type_name': col.type_name,
            'sql_type': int(col.sql_type),
            'kind': col.kind.value,
            }
        for col in columns
        }


def iterdict_data_loader(data, columns, **kwargs) -> list[dict]:
    """Minimal data loader.

    Accepts additional keyword arguments (like table_name) for compatibility
    with other data loaders, but doesn't use them.
    """
    if not data:
        return []
    return list(data)


def _empty_dataframe(columns) -> pd.DataFrame:
    """Create empty DataFrame with column metadata."""
    df = pd.DataFrame(columns=[col.name for col in columns])
    df.attrs['column_types'] = get_column_types_dict(columns)
    return df


def pandas_numpy_data_loader(data, columns, **kwargs) -> pd.DataFrame:
    """Standard pandas DataFrame loader using NumPy.

    Always returns a DataFrame, never None, with columns preserved for empty results.
    Includes type information in the DataFrame.attrs attribute.
    """
    data = list(data or [])
    if not data:
        return _empty_dataframe(columns)

    df = pd.DataFrame.from_records(data, columns=[col.name for col in columns])
    df.attrs['column_types'] = get_column_types_dict(columns)
    return df


def pandas_pyarrow_data_loader(data, columns, **kwargs) -> pd.DataFrame:
    """PyArrow-based pandas DataFrame loader.

    Always returns a DataFrame, never None, with columns preserved for empty results.
    """
    data = list(data or [])
    if not data:
        return _empty_dataframe(columns)

    column_names = [col.name for col in columns]
    columns_data = [[row[name] for row in data] for name in column_names]
    df = pa.table(columns_data, names=column_names).to_pandas(types_mapper=pd.ArrowDtype)
    df.attrs['column_types'] = get_column_types_dict(columns)
    return df
