import re
from dataclasses import dataclass, field
from typing import Any

import sqlalchemy as sa
from dbcommons.exceptions import ConfigurationError
from dbcommons.validation import FailureCollector

from libb import ConfigOptions

__all__ = [
    'ConnectionConfig',
    'ArgumentSetterConfig',
    'QueryActionConfig',
    'OracleQueryActionConfig',
    'contains_macro',
]

_MACRO = re.compile(r'\$\{[^}]*\}')


def contains_macro(value: Any) -> bool:
    """Check if a config value is a runtime macro that cannot be validated yet.

    >>> contains_macro('${conditions}')
    True
    >>> contains_macro('feed=marketing')
    False
    """
    return isinstance(value, str) and bool(_MACRO.search(value))


@dataclass
class ConnectionConfig(ConfigOptions):
    """Connection options

    `connection_string` is a SQLAlchemy URL. `connection_arguments` are passed
    to the DBAPI `connect` call together with the credentials.
    """
    connection_string: str = None
    user: str = None
    password: str = None
    connection_arguments: dict[str, Any] = field(default_factory=dict)
    driver_name: str = None

    def __post_init__(self):
        self.connection_arguments = dict(self.connection_arguments or {})

    def get_connection_string(self) -> str:
        return self.connection_string

    def connection_properties(self) -> dict[str, Any]:
        """Arguments for the DBAPI connect call, credentials included."""
        properties = dict(self.connection_arguments)
        if self.user is not None:
            properties['user'] = self.user
        if self.password is not None:
            properties['password'] = self.password
        return properties

    def validate(self, collector: FailureCollector) -> None:
        if self.user is None and self.password is not None:
            raise ConfigurationError(
                'user is null. Please provide both user name and password if database '
                'requires authentication. If not, please remove password and retry.',
                field='user')
        if not contains_macro(self.connection_string) and not self.get_connection_string():
            collector.add_failure('Invalid connection string',
                                  'Connection string must be specified')


@dataclass
class ArgumentSetterConfig(ConnectionConfig):
    """Argument setter options

    `argument_selection_conditions` has the form `col1=v1;col2=v2`; the
    conditions are ANDed and must select exactly one row of `table_name`.
    The value of `arguments_column` in that row becomes the argument.
    """
    database_name: str = None
    table_name: str = None
    argument_selection_conditions: str = None
    arguments_column: str = None

    @property
    def query(self) -> str:
        conditions = ' AND '.join(
            c.strip() for c in self.argument_selection_conditions.split(';') if c.strip())
        return f'SELECT {self.arguments_column} FROM {self.table_name} WHERE {conditions}'

    def validate(self, collector: FailureCollector) -> None:
        super().validate(collector)
        checks = (
            (self.database_name, 'Invalid database', 'Invalid database is specified'),
            (self.table_name, 'Invalid table', 'Invalid table is specified'),
            (self.arguments_column, 'Invalid argument column',
             'Argument column name must be specified'),
            (self.argument_selection_conditions, 'Invalid conditions',
             'Filter conditions must be specified'),
            )
        for value, message, corrective_action in checks:
            if not contains_macro(value) and not value:
                collector.add_failure(message, corrective_action)
        collector.get_or_raise(ConfigurationError)


@dataclass
class QueryActionConfig(ConnectionConfig):
    """Query action options
    """
    query: str = None

    def cursor_options(self) -> dict[str, Any]:
        """Attributes set on the cursor before the query runs."""
        return {}

    def validate(self, collector: FailureCollector) -> None:
        super().validate(collector)
        if not contains_macro(self.query) and not self.query:
            collector.add_failure('Invalid query', 'Query must be specified')
        collector.get_or_raise(ConfigurationError)


@dataclass
class OracleQueryActionConfig(QueryActionConfig):
    """Oracle query action options

    The connection string is built from host, port and database (the SID or
    service name) unless one is given explicitly.
    """
    host: str = None
    port: int = 1521
    database: str = None
    arraysize: int = None

    def get_connection_string(self) -> str:
        if self.connection_string:
            return self.connection_string
        if not self.host:
            return None
        return sa.URL.create(
            drivername='oracle+oracledb',
            host=self.host,
            port=self.port,
            database=self.database,
            ).render_as_string(hide_password=False)

    def cursor_options(self) -> dict[str, Any]:
        if self.arraysize is None:
            return {}
        return {'arraysize': self.arraysize}
