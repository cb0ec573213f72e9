"""
Driver interface and SQLAlchemy-backed drivers.

A driver decides whether it can serve a connection string and opens DBAPI
connections for it. Connection strings are SQLAlchemy URLs, for example
`postgresql+psycopg://user@host/db` or `sqlite:///path.db`.
"""
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import sqlalchemy as sa
from dbcommons.drivers.engine import get_engine

logger = logging.getLogger(__name__)


class Driver(ABC):
    """Base class for database drivers.

    `scope` is the registration scope the driver was created for.
    """

    def __init__(self, scope: Any = None) -> None:
        self.scope = scope

    @abstractmethod
    def accepts_url(self, url: str) -> bool:
        """Return True if this driver can connect to the connection string."""

    @abstractmethod
    def connect(self, url: str, properties: Mapping[str, Any] | None = None) -> Any:
        """Open a DBAPI connection."""


class SqlAlchemyDriver(Driver):
    """Driver for one SQLAlchemy backend.

    Connections are opened through an unpooled engine, so closing the
    returned connection closes the underlying DBAPI connection.
    """

    dialect: str = ''

    def __init__(self, scope: Any = None) -> None:
        super().__init__(scope if scope is not None else type(self).__module__)

    def accepts_url(self, url: str) -> bool:
        try:
            return sa.make_url(url).get_backend_name() == self.dialect
        except sa.exc.ArgumentError:
            return False

    def connect(self, url: str, properties: Mapping[str, Any] | None = None) -> Any:
        engine = get_engine(url, self.scope, connect_args=dict(properties or {}))
        logger.debug(f'Opening {self.dialect} connection')
        return engine.raw_connection()

    def __repr__(self) -> str:
        return f'{type(self).__name__}(dialect={self.dialect!r})'


class PostgresDriver(SqlAlchemyDriver):
    dialect = 'postgresql'


class SQLiteDriver(SqlAlchemyDriver):
    dialect = 'sqlite'


class OracleDriver(SqlAlchemyDriver):
    dialect = 'oracle'
