"""
Result adapters package.

This package provides the following components:

- column_info: Column metadata resolved from cursor descriptions
- structure: Forward-only result sets and rows with typed accessors
- type_mapping: SQL result values to canonical Python values and back
- column_matching: Expected column names against result metadata

Mapping principles:
1. Dialect strategies resolve type codes; they never convert result values
2. Values are converted once per cell, by transform_value when read and by
   to_parameter when written
3. Column order is decided by the matcher, never by the type mapper
"""
from dbcommons.adapters.column_info import Column, columns_from_cursor_description
from dbcommons.adapters.column_matching import MatchPolicy, get_matched_column_types
from dbcommons.adapters.structure import ResultRow, ResultSet
from dbcommons.adapters.type_mapping import read_blob, read_clob, to_parameter
from dbcommons.adapters.type_mapping import transform_value

__all__ = [
    'Column',
    'columns_from_cursor_description',
    'MatchPolicy',
    'get_matched_column_types',
    'ResultRow',
    'ResultSet',
    'read_blob',
    'read_clob',
    'to_parameter',
    'transform_value',
]
