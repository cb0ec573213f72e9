"""
Action that reads pipeline arguments from a database table.

The configured conditions must select exactly one row. The value of the
arguments column in that row is published under the column's name. Zero
rows or several rows fail the run with a CardinalityError and publish
nothing.
"""
import logging
from collections.abc import MutableMapping
from typing import Any

from dbcommons.action.base import DatabaseAction
from dbcommons.action.config import ArgumentSetterConfig
from dbcommons.adapters.structure import ResultSet
from dbcommons.exceptions import CardinalityError, ConfigurationError
from dbcommons.validation import FailureCollector

logger = logging.getLogger(__name__)


def _column_index(description: Any, name: str) -> int:
    """Position of `name` in a cursor description, ignoring case.

    Raises
        ConfigurationError: if the result has no such column
    """
    for i, item in enumerate(description or []):
        if str(item[0]).lower() == name.lower():
            return i
    raise ConfigurationError(f"Missing column '{name}' in the argument selection result",
                             field=name)


class ArgumentSetter(DatabaseAction):
    """Set a pipeline argument from a single database row.
    """

    config: ArgumentSetterConfig

    def run(self, arguments: MutableMapping[str, Any],
            collector: FailureCollector | None = None) -> None:
        """Run the argument selection query and set the argument.

        Args:
            arguments: Settable pipeline arguments
            collector: Failure collector, a fresh one by default

        Raises
            CardinalityError: if the query returns no row or more than one row
        """
        if collector is None:
            collector = FailureCollector()
        with self.connection() as cn:
            cursor = cn.cursor()
            logger.debug(f'SQL:\n{self.config.query}')
            cursor.execute(self.config.query)
            with ResultSet(cursor) as result_set:
                self.set_arguments(result_set, collector, arguments)

    def set_arguments(self, result_set: ResultSet, collector: FailureCollector,
                      arguments: MutableMapping[str, Any]) -> None:
        """Convert the single result row into a pipeline argument.
        """
        column = self.config.arguments_column

        if not result_set.next():
            collector.add_failure('No record found',
                                  'No data is returned for the argument selection conditions')
            collector.get_or_raise(CardinalityError)

        value = result_set.row.get_string(_column_index(result_set.description, column))

        if result_set.next():
            collector.add_failure('More than one record found',
                                  'The argument selection conditions return multiple rows')
            collector.get_or_raise(CardinalityError)

        arguments[column] = value
        logger.debug(f'Set argument {column}')
