"""
Best-effort cleanup of driver resources left behind by a plugin scope.

Cleanup runs during teardown where failures cannot be acted upon, so every
hook reports a CleanupResult instead of raising. A hook that finds nothing
to clean reports NOT_APPLICABLE; an unexpected exception becomes FAILED.
Results are always logged and never escalated.

Vendor-specific hooks are added with the `register_cleanup_hook` decorator:

    @register_cleanup_hook
    def stop_vendor_thread(driver_class, scope) -> CleanupResult:
        ...
"""
import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from dbcommons.drivers import engine
from dbcommons.drivers.base import Driver

logger = logging.getLogger(__name__)


class CleanupStatus(enum.Enum):
    SUCCESS = 'success'
    NOT_APPLICABLE = 'not_applicable'
    FAILED = 'failed'


@dataclass(frozen=True)
class CleanupResult:
    name: str
    status: CleanupStatus
    reason: str | None = None


CleanupHook = Callable[[type[Driver], Any], CleanupResult]

_CLEANUP_HOOKS: list[CleanupHook] = []


def register_cleanup_hook(hook: CleanupHook) -> CleanupHook:
    """Decorator to register a cleanup hook run by `cleanup`."""
    if hook not in _CLEANUP_HOOKS:
        _CLEANUP_HOOKS.append(hook)
    return hook


def get_cleanup_hooks() -> list[CleanupHook]:
    return list(_CLEANUP_HOOKS)


@register_cleanup_hook
def dispose_driver_engines(driver_class: type[Driver], scope: Any) -> CleanupResult:
    """Dispose the SQLAlchemy engines opened for the scope."""
    disposed = engine.dispose_engines(scope)
    if not disposed:
        return CleanupResult('engines', CleanupStatus.NOT_APPLICABLE,
                             'no engines were opened in this scope')
    return CleanupResult('engines', CleanupStatus.SUCCESS)


@register_cleanup_hook
def unregister_exit_handler(driver_class: type[Driver], scope: Any) -> CleanupResult:
    """Remove the scope's atexit handler so it no longer pins the scope."""
    if not engine.unregister_exit_handler(scope):
        return CleanupResult('exit_handler', CleanupStatus.NOT_APPLICABLE,
                             'no exit handler registered for this scope')
    return CleanupResult('exit_handler', CleanupStatus.SUCCESS)


def _run_hook(hook: CleanupHook, driver_class: type[Driver], scope: Any) -> CleanupResult:
    name = getattr(hook, '__name__', repr(hook))
    try:
        result = hook(driver_class, scope)
    except Exception as e:
        logger.warning(f'Cleanup {name} failed for {driver_class.__qualname__}. Ignoring. {e}')
        return CleanupResult(name, CleanupStatus.FAILED, str(e))

    if not isinstance(result, CleanupResult):
        result = CleanupResult(name, CleanupStatus.SUCCESS)
    if result.status == CleanupStatus.FAILED:
        logger.warning(f'Cleanup {result.name} failed for {driver_class.__qualname__}. '
                       f'Ignoring. {result.reason}')
    elif result.status == CleanupStatus.NOT_APPLICABLE:
        logger.debug(f'Cleanup {result.name} not necessary: {result.reason}')
    else:
        logger.debug(f'Cleanup {result.name} succeeded for scope {scope!r}')
    return result


def cleanup(driver_class: type[Driver], scope: Any = None) -> list[CleanupResult]:
    """Perform any driver related cleanup for a scope.

    Args:
        driver_class: Driver class the scope used
        scope: Registration scope token, by default the driver's module name

    Returns
        One CleanupResult per hook; never raises
    """
    if scope is None:
        scope = getattr(driver_class, '__module__', None)
    if scope is None:
        logger.warning(f'No scope for {driver_class!r}. Cleanup not necessary.')
        return []
    return [_run_hook(hook, driver_class, scope) for hook in get_cleanup_hooks()]
