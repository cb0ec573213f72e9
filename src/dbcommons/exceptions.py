"""
Exception classes for database plugins.
"""
import sqlite3

import psycopg
import sqlalchemy as sa


class DatabaseError(Exception):
    """Base class for all dbcommons errors.
    """


class DriverNotFoundError(DatabaseError):
    """No registered driver accepts the connection string.
    """


class ValidationError(DatabaseError):
    """Error in input validation.

    Carries the failures gathered by a FailureCollector, if any.
    """

    def __init__(self, message: str, failures: list | None = None) -> None:
        super().__init__(message)
        self.failures = list(failures or [])


class ConfigurationError(ValidationError):
    """Invalid plugin configuration (missing field, column drift).

    Never retried; `field` names the offending property or column.
    """

    def __init__(self, message: str, field: str | None = None,
                 failures: list | None = None) -> None:
        super().__init__(message, failures)
        self.field = field


class CardinalityError(ValidationError):
    """A single-row query returned zero or several rows.
    """


DataAccessError = (
    sqlite3.Error,
    psycopg.Error,
    sa.exc.DBAPIError,
    DriverNotFoundError,
    )
