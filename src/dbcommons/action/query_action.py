"""
Action that runs a single SQL statement, such as a cleanup query after a
pipeline run.
"""
import logging
import time

from dbcommons.action.base import DatabaseAction
from dbcommons.action.config import QueryActionConfig
from dbcommons.utils import ensure_commit

logger = logging.getLogger(__name__)


class QueryAction(DatabaseAction):
    """Run the configured query and commit.
    """

    config: QueryActionConfig

    def run(self) -> int:
        """Execute the query. Returns the driver's row count."""
        start = time.time()
        with self.connection() as cn:
            cursor = cn.cursor()
            try:
                for name, value in self.config.cursor_options().items():
                    setattr(cursor, name, value)
                logger.debug(f'SQL:\n{self.config.query}')
                cursor.execute(self.config.query)
                rowcount = cursor.rowcount
            finally:
                cursor.close()
            ensure_commit(cn)
        logger.debug(f'Query time: {time.time() - start:.4f}s')
        return rowcount
