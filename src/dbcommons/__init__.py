"""
Shared core for relational source, sink and action plugins.

- Type mapping: SQL result values to canonical Python values
- Column matching: expected column names against result metadata
- Driver lifecycle: shim registration, stale-driver deregistration, cleanup

Most callers need only the module-level functions:
- db.ensure_driver_available(driver_class, url) -> DriverCleanup
- db.select_records(cn, sql, columns) -> records
- db.write_records(cn, table, records) -> count
- db.cleanup(driver_class) -> [CleanupResult, ...]
"""
__version__ = '0.1.0'

from dbcommons.action import ArgumentSetter, ArgumentSetterConfig, ConnectionConfig
from dbcommons.action import OracleQueryActionConfig, QueryAction, QueryActionConfig
from dbcommons.adapters import Column, MatchPolicy, ResultRow, ResultSet
from dbcommons.adapters import get_matched_column_types, read_blob, read_clob
from dbcommons.adapters import to_parameter, transform_value
from dbcommons.drivers import CleanupResult, CleanupStatus, Driver, DriverCleanup
from dbcommons.drivers import DriverRegistry, DriverShim, OracleDriver, PostgresDriver
from dbcommons.drivers import RegistrationState, SQLiteDriver, cleanup
from dbcommons.drivers import deregister_all_drivers, ensure_driver_available
from dbcommons.drivers import get_driver_registry, register_cleanup_hook
from dbcommons.exceptions import CardinalityError, ConfigurationError, DataAccessError
from dbcommons.exceptions import DatabaseError, DriverNotFoundError, ValidationError
from dbcommons.options import iterdict_data_loader, pandas_numpy_data_loader
from dbcommons.options import pandas_pyarrow_data_loader
from dbcommons.schema import schema_from_column_types, validate_source_schema
from dbcommons.sink import write_records
from dbcommons.source import read_records, select_records
from dbcommons.types import ColumnType, SqlType, ValueKind, value_kind
from dbcommons.validation import Failure, FailureCollector

__all__ = [
    'SqlType',
    'ValueKind',
    'ColumnType',
    'value_kind',
    'Column',
    'ResultRow',
    'ResultSet',
    'transform_value',
    'read_blob',
    'read_clob',
    'MatchPolicy',
    'get_matched_column_types',
    'read_records',
    'select_records',
    'write_records',
    'to_parameter',
    'iterdict_data_loader',
    'pandas_numpy_data_loader',
    'pandas_pyarrow_data_loader',
    'schema_from_column_types',
    'validate_source_schema',
    'Driver',
    'PostgresDriver',
    'SQLiteDriver',
    'OracleDriver',
    'DriverRegistry',
    'DriverShim',
    'get_driver_registry',
    'DriverCleanup',
    'RegistrationState',
    'ensure_driver_available',
    'deregister_all_drivers',
    'cleanup',
    'register_cleanup_hook',
    'CleanupResult',
    'CleanupStatus',
    'ConnectionConfig',
    'ArgumentSetterConfig',
    'QueryActionConfig',
    'OracleQueryActionConfig',
    'ArgumentSetter',
    'QueryAction',
    'Failure',
    'FailureCollector',
    'DatabaseError',
    'ValidationError',
    'ConfigurationError',
    'CardinalityError',
    'DriverNotFoundError',
    'DataAccessError',
]
