"""
Base class for actions that run SQL inside the driver lifecycle.
"""
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from dbcommons.action.config import ConnectionConfig
from dbcommons.drivers.base import Driver
from dbcommons.drivers.cleanup import CleanupResult, cleanup
from dbcommons.drivers.lifecycle import default_scope, ensure_driver_available
from dbcommons.drivers.registry import DriverRegistry, get_driver_registry
from dbcommons.exceptions import ConfigurationError
from dbcommons.validation import FailureCollector

logger = logging.getLogger(__name__)


class DatabaseAction(ABC):
    """An action bound to a connection config and a driver class.

    Lifecycle: `configure` once when the pipeline is deployed, `run` per
    pipeline run, `destroy` when the action is torn down.
    """

    def __init__(self, config: ConnectionConfig, driver_class: type[Driver] | None,
                 registry: DriverRegistry | None = None, scope: Any = None) -> None:
        self.config = config
        self.driver_class = driver_class
        self.registry = registry or get_driver_registry()
        self.scope = scope

    def configure(self, collector: FailureCollector | None = None) -> FailureCollector:
        """Validate the config and the driver class.

        Raises
            ConfigurationError: for any invalid setting
        """
        if collector is None:
            collector = FailureCollector()
        if self.driver_class is None:
            raise ConfigurationError(
                f"Unable to load driver class for plugin name '{self.config.driver_name}'. "
                'Please make sure that the plugin containing the driver has been '
                'installed correctly.', field='driver_name')
        self.config.validate(collector)
        collector.get_or_raise(ConfigurationError)
        return collector

    @contextmanager
    def connection(self) -> Iterator[Any]:
        """Open a connection inside a driver registration, releasing both on exit."""
        url = self.config.get_connection_string()
        driver_cleanup = ensure_driver_available(
            self.driver_class, url, self.config.driver_name,
            scope=self.scope, registry=self.registry)
        try:
            cn = self.registry.get_connection(url, self.config.connection_properties())
            try:
                yield cn
            finally:
                cn.close()
        finally:
            driver_cleanup.release()

    @abstractmethod
    def run(self, *args: Any, **kwargs: Any) -> Any:
        """Run the action."""

    def destroy(self) -> list[CleanupResult]:
        """Best-effort cleanup of driver resources. Never raises."""
        if self.driver_class is None:
            return []
        scope = self.scope if self.scope is not None else default_scope(self.driver_class)
        return cleanup(self.driver_class, scope)
