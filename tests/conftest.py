import pathlib
import site

import pytest
from dbcommons.drivers import get_driver_registry
from dbcommons.drivers.cleanup import _CLEANUP_HOOKS
from dbcommons.drivers.engine import dispose_all_engines

HERE = pathlib.Path(pathlib.Path(__file__).resolve()).parent
site.addsitedir(HERE)


@pytest.fixture(autouse=True)
def clear_driver_state():
    """Reset engines, the process registry and cleanup hooks around each test."""
    hooks = list(_CLEANUP_HOOKS)
    dispose_all_engines()
    get_driver_registry().clear()
    yield
    dispose_all_engines()
    get_driver_registry().clear()
    _CLEANUP_HOOKS[:] = hooks


pytest_plugins = [
    'tests.fixtures.mocks',
    'tests.fixtures.drivers',
    'tests.fixtures.sqlite',
]
