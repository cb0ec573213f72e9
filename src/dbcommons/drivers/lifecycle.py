"""
Driver registration lifecycle.

`ensure_driver_available` makes sure a driver for a connection string is
registered. If the registry already resolves the connection string, nothing
is registered and a no-op handle is returned. Otherwise the driver class is
instantiated, wrapped in a DriverShim and registered, after stale
registrations of the same driver class in the same scope are removed.

The returned DriverCleanup is released exactly once by the connection scope
that asked for it:

    with ensure_driver_available(SQLiteDriver, 'sqlite:///app.db') as handle:
        cn = get_driver_registry().get_connection('sqlite:///app.db')
        ...
"""
import enum
import logging
from typing import Any

from dbcommons.drivers.base import Driver
from dbcommons.drivers.registry import DriverRegistry, DriverShim, get_driver_registry
from dbcommons.drivers.registry import unwrap
from dbcommons.exceptions import DriverNotFoundError

logger = logging.getLogger(__name__)


class RegistrationState(enum.Enum):
    UNREGISTERED = 'unregistered'
    REGISTERED = 'registered'
    RELEASED = 'released'
    NOOP = 'noop'


def default_scope(driver_class: type[Driver]) -> str:
    """Scope token used when the caller does not pass one: the driver's module.
    """
    return driver_class.__module__


def _same_class(a: type, b: type) -> bool:
    """Same class, or the same class re-imported under the same name."""
    return a is b or (a.__module__, a.__qualname__) == (b.__module__, b.__qualname__)


class DriverCleanup:
    """Handle owning a driver registration.

    A handle created without a shim is a no-op. `release` is idempotent and
    never raises, so it is safe in `finally` blocks after partial failures.
    """

    def __init__(self, shim: DriverShim | None = None,
                 registry: DriverRegistry | None = None) -> None:
        self.shim = shim
        self.registry = registry or get_driver_registry()
        self.state = RegistrationState.NOOP if shim is None else RegistrationState.UNREGISTERED

    def _mark_registered(self) -> None:
        self.state = RegistrationState.REGISTERED

    def release(self) -> None:
        """Deregister the shim if this handle registered one."""
        if self.state != RegistrationState.REGISTERED:
            return
        self.state = RegistrationState.RELEASED
        try:
            if not self.registry.deregister(self.shim):
                logger.debug(f'Driver shim {self.shim!r} was already deregistered')
        except Exception as e:
            logger.warning(f'Failed to deregister driver shim {self.shim!r}: {e}')

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return f'DriverCleanup(state={self.state.value}, shim={self.shim!r})'


def deregister_all_drivers(driver_class: type[Driver], scope: Any = None,
                           registry: DriverRegistry | None = None) -> int:
    """Deregister every driver instance of `driver_class` registered in `scope`.

    Entries registered without a scope are left alone. Entries removed by a
    concurrent caller in the meantime are skipped.

    Returns
        Number of entries removed
    """
    registry = registry or get_driver_registry()
    scope = scope if scope is not None else default_scope(driver_class)

    removed = 0
    for entry in registry.drivers():
        if entry.driver is None:
            logger.debug('Found null driver object in drivers list. Ignoring.')
            continue
        if entry.scope is None:
            logger.debug(f'Ignoring unscoped driver {entry.driver!r}')
            continue
        if entry.scope != scope or not _same_class(type(unwrap(entry.driver)), driver_class):
            continue
        if registry.deregister(entry.driver):
            logger.debug(f'Removed stale driver {entry.driver!r} from scope {scope!r}')
            removed += 1
    return removed


def ensure_driver_available(driver_class: type[Driver], connection_string: str,
                            plugin_name: str | None = None, scope: Any = None,
                            registry: DriverRegistry | None = None) -> DriverCleanup:
    """Ensure a driver for the connection string is registered.

    Args:
        driver_class: Driver class to register when none resolves
        connection_string: Connection URL
        plugin_name: Name of the plugin providing the driver, for logging
        scope: Registration scope token, by default the driver's module name
        registry: Driver registry, by default the process-wide one

    The lookup and the registration happen under the registry lock, so
    concurrent callers for the same connection string register one shim.

    Returns
        DriverCleanup handle, a no-op if a driver already resolved
    """
    registry = registry or get_driver_registry()
    scope = scope if scope is not None else default_scope(driver_class)

    with registry.lock:
        try:
            registry.get_driver(connection_string)
            return DriverCleanup(None, registry)
        except DriverNotFoundError:
            logger.debug(f'Plugin Name: {plugin_name}; Driver Class: {driver_class.__qualname__} '
                         f'not found. Registering driver via shim {DriverShim.__name__}')

        shim = DriverShim(driver_class(scope=scope))
        handle = DriverCleanup(shim, registry)
        try:
            deregister_all_drivers(driver_class, scope, registry)
        except Exception as e:
            logger.error(f'Unable to deregister driver class {driver_class.__qualname__}: {e}')
        registry.register(shim, scope)
        handle._mark_registered()
        return handle
