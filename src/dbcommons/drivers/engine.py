"""
SQLAlchemy engine management for driver connections.

Engines are created without pooling and cached per (scope, url, options)
so that the engines a plugin scope created can be disposed when that scope
is cleaned up. Engine options such as `connect_args` are part of the key, so
connections opened with different properties never share an engine. Each
scope registers one `atexit` handler disposing its engines; cleanup
unregisters it again.
"""
import atexit
import functools
import logging
import threading
from collections.abc import Callable
from typing import Any

import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool

__all__ = [
    'get_engine',
    'dispose_engines',
    'dispose_all_engines',
    'has_exit_handler',
    'unregister_exit_handler',
]

logger = logging.getLogger(__name__)

_engine_registry: dict[tuple[Any, str, str], Engine] = {}
_exit_handlers: dict[Any, Callable[[], int]] = {}
_engine_registry_lock = threading.RLock()


def get_engine(url: str, scope: Any = None,
               engine_factory: Callable[..., Engine] = sa.create_engine,
               **kwargs: Any) -> Engine:
    """Get or create an unpooled engine for a connection URL within a scope.
    """
    key = (scope, url, repr(_freeze(kwargs)))

    with _engine_registry_lock:
        if key in _engine_registry:
            logger.debug(f'Using existing engine for scope {scope!r}')
            return _engine_registry[key]

        engine_kwargs: dict[str, Any] = {'echo': False, 'poolclass': NullPool}
        engine_kwargs.update(kwargs)
        engine = engine_factory(url, **engine_kwargs)
        _engine_registry[key] = engine

        if scope is not None and scope not in _exit_handlers:
            handler = functools.partial(dispose_engines, scope)
            atexit.register(handler)
            _exit_handlers[scope] = handler

        logger.debug(f'Created new engine for scope {scope!r}')
        return engine


def _freeze(value: Any) -> Any:
    """Hashable, order-independent rendering of engine options.

    >>> _freeze({'b': [1, 2], 'a': {'x': 1}})
    (('a', (('x', 1),)), ('b', (1, 2)))
    """
    if isinstance(value, dict):
        return tuple(sorted(((str(k), _freeze(v)) for k, v in value.items()),
                            key=lambda item: item[0]))
    if isinstance(value, list | tuple | set):
        items = [_freeze(v) for v in value]
        return tuple(sorted(items, key=repr) if isinstance(value, set) else items)
    return value


def dispose_engines(scope: Any) -> int:
    """Dispose all engines created for a scope. Returns how many were disposed.
    """
    with _engine_registry_lock:
        keys = [key for key in _engine_registry if key[0] == scope]
        for key in keys:
            _engine_registry.pop(key).dispose()
    if keys:
        logger.debug(f'Disposed {len(keys)} engine(s) for scope {scope!r}')
    return len(keys)


def has_exit_handler(scope: Any) -> bool:
    with _engine_registry_lock:
        return scope in _exit_handlers


def unregister_exit_handler(scope: Any) -> bool:
    """Remove the atexit handler of a scope. Returns False if there was none.
    """
    with _engine_registry_lock:
        handler = _exit_handlers.pop(scope, None)
    if handler is None:
        return False
    atexit.unregister(handler)
    return True


def dispose_all_engines() -> None:
    """Dispose all engines in the registry.
    """
    with _engine_registry_lock:
        for engine in list(_engine_registry.values()):
            engine.dispose()
        _engine_registry.clear()
        for handler in _exit_handlers.values():
            atexit.unregister(handler)
        _exit_handlers.clear()
        logger.debug('All driver engines disposed')


atexit.register(dispose_all_engines)
