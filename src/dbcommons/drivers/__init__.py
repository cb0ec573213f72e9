"""
Driver registration and lifecycle.

- base: Driver interface and SQLAlchemy-backed drivers
- registry: process-wide DriverRegistry and the delegating DriverShim
- lifecycle: ensure_driver_available and the DriverCleanup handle
- cleanup: best-effort cleanup hooks run when a plugin scope is torn down
"""
from dbcommons.drivers.base import Driver, OracleDriver, PostgresDriver
from dbcommons.drivers.base import SqlAlchemyDriver, SQLiteDriver
from dbcommons.drivers.cleanup import CleanupResult, CleanupStatus, cleanup
from dbcommons.drivers.cleanup import register_cleanup_hook
from dbcommons.drivers.lifecycle import DriverCleanup, RegistrationState
from dbcommons.drivers.lifecycle import deregister_all_drivers, ensure_driver_available
from dbcommons.drivers.registry import DriverRegistry, DriverShim, RegisteredDriver
from dbcommons.drivers.registry import get_driver_registry

__all__ = [
    'Driver',
    'SqlAlchemyDriver',
    'PostgresDriver',
    'SQLiteDriver',
    'OracleDriver',
    'DriverRegistry',
    'DriverShim',
    'RegisteredDriver',
    'get_driver_registry',
    'DriverCleanup',
    'RegistrationState',
    'ensure_driver_available',
    'deregister_all_drivers',
    'CleanupResult',
    'CleanupStatus',
    'cleanup',
    'register_cleanup_hook',
]
