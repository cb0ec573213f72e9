"""
Tests for the argument setter action.
"""
import pytest
from dbcommons.action import ArgumentSetter, ArgumentSetterConfig
from dbcommons.adapters.structure import ResultSet
from dbcommons.drivers import CleanupStatus
from dbcommons.exceptions import CardinalityError, ConfigurationError
from dbcommons.validation import FailureCollector

from tests.fixtures.mocks import FakeCursor

DESCRIPTION = [('feed', 25), ('input_path', 25)]


@pytest.fixture
def config():
    return ArgumentSetterConfig(
        connection_string='fake:arguments',
        database_name='main',
        table_name='pipeline_arguments',
        argument_selection_conditions="feed='sales';env='prod'",
        arguments_column='input_path',
        driver_name='fake',
        )


def _set_arguments(config, rows):
    setter = ArgumentSetter(config, None)
    arguments = {}
    collector = FailureCollector()
    setter.set_arguments(ResultSet(FakeCursor(DESCRIPTION, rows)), collector, arguments)
    return arguments, collector


class TestSetArguments:

    def test_single_row(self, config):
        arguments, collector = _set_arguments(config, [('sales', '/data/sales')])
        assert arguments == {'input_path': '/data/sales'}
        assert collector.failures == []

    def test_no_row(self, config):
        arguments = {}
        collector = FailureCollector()
        with pytest.raises(CardinalityError, match='No record found'):
            ArgumentSetter(config, None).set_arguments(
                ResultSet(FakeCursor(DESCRIPTION, [])), collector, arguments)
        assert arguments == {}
        assert [f.message for f in collector.failures] == ['No record found']

    def test_several_rows(self, config):
        arguments = {}
        collector = FailureCollector()
        rows = [('sales', '/data/sales'), ('sales', '/data/other')]
        with pytest.raises(CardinalityError, match='More than one record found'):
            ArgumentSetter(config, None).set_arguments(
                ResultSet(FakeCursor(DESCRIPTION, rows)), collector, arguments)
        assert arguments == {}

    def test_column_found_by_name_ignoring_case(self, config):
        config.arguments_column = 'INPUT_PATH'
        arguments, _ = _set_arguments(config, [('sales', '/data/sales')])
        assert arguments == {'INPUT_PATH': '/data/sales'}

    def test_missing_column_rejected(self, config):
        config.arguments_column = 'output_path'
        arguments = {}
        with pytest.raises(ConfigurationError, match="Missing column 'output_path'") as exc_info:
            ArgumentSetter(config, None).set_arguments(
                ResultSet(FakeCursor(DESCRIPTION, [('sales', '/data/sales')])),
                FailureCollector(), arguments)
        assert exc_info.value.field == 'output_path'
        assert arguments == {}

    def test_value_read_as_string(self, config):
        arguments, _ = _set_arguments(config, [('sales', 42)])
        assert arguments == {'input_path': '42'}


class TestRun:

    def test_run_sets_argument_and_releases_driver(self, config, fake_driver_class,
                                                   registry, mocker):
        driver_class = fake_driver_class(DESCRIPTION, [('sales', '/data/sales')])
        execute = mocker.spy(FakeCursor, 'execute')
        arguments = {}

        ArgumentSetter(config, driver_class, registry=registry).run(arguments)

        assert arguments == {'input_path': '/data/sales'}
        execute.assert_called_once_with(mocker.ANY, config.query)
        assert execute.call_args.args[0].closed
        assert registry.drivers() == []

    def test_run_failure_still_releases_driver(self, config, fake_driver_class, registry):
        driver_class = fake_driver_class(DESCRIPTION, [])
        arguments = {}

        with pytest.raises(CardinalityError):
            ArgumentSetter(config, driver_class, registry=registry).run(arguments)

        assert arguments == {}
        assert registry.drivers() == []

    def test_credentials_passed_to_driver(self, config, fake_driver_class, registry, mocker):
        config.user, config.password = 'scott', 'tiger'
        driver_class = fake_driver_class(DESCRIPTION, [('sales', '/data/sales')])
        connect = mocker.spy(driver_class, 'connect')

        ArgumentSetter(config, driver_class, registry=registry).run({})

        assert connect.call_args.args[2] == {'user': 'scott', 'password': 'tiger'}


class TestConfigure:

    def test_missing_driver_class(self, config):
        with pytest.raises(ConfigurationError, match="plugin name 'fake'") as exc_info:
            ArgumentSetter(config, None).configure()
        assert exc_info.value.field == 'driver_name'

    def test_invalid_config(self, config, fake_driver_class):
        config.table_name = None
        with pytest.raises(ConfigurationError, match='Invalid table'):
            ArgumentSetter(config, fake_driver_class()).configure()

    def test_valid(self, config, fake_driver_class):
        collector = ArgumentSetter(config, fake_driver_class()).configure()
        assert collector.failures == []


def test_destroy_reports_cleanup(config, fake_driver_class):
    results = ArgumentSetter(config, fake_driver_class(), scope='plugin-a').destroy()
    assert {result.status for result in results} == {CleanupStatus.NOT_APPLICABLE}
    assert ArgumentSetter(config, None).destroy() == []


if __name__ == '__main__':
    __import__('pytest').main([__file__])
