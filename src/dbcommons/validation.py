"""
Failure collection for configuration and runtime validation.

Validation code records every problem it finds and raises once, so a
pipeline author sees all invalid fields together:

    collector = FailureCollector()
    if not config.table_name:
        collector.add_failure('Invalid table', 'Invalid table is specified')
    collector.get_or_raise()
"""
import logging
from dataclasses import dataclass

from dbcommons.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Failure:
    message: str
    corrective_action: str | None = None

    def __str__(self) -> str:
        if self.corrective_action:
            return f'{self.message}: {self.corrective_action}'
        return self.message


class FailureCollector:
    """Collects validation failures.
    """

    def __init__(self) -> None:
        self.failures: list[Failure] = []

    def add_failure(self, message: str, corrective_action: str | None = None) -> Failure:
        failure = Failure(message, corrective_action)
        self.failures.append(failure)
        logger.debug(f'Validation failure: {failure}')
        return failure

    def get_or_raise(self, error_class: type[ValidationError] = ValidationError) -> None:
        """Raise `error_class` carrying every collected failure, if there are any.
        """
        if not self.failures:
            return
        errors = '; '.join(str(failure) for failure in self.failures)
        raise error_class(f'Errors were encountered during validation. {errors}',
                          failures=self.failures)
