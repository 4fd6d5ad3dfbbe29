"""
Query execution coordinator.

Handles execution of queries through database-specific executors.
"""

import logging
from typing import Any, Dict, List, Optional

from bootcamp_api.core.errors import BootcampApiError, InternalError
from bootcamp_api.core.interfaces import IQueryExecutor
from bootcamp_api.core.models import PopulateSpec

logger = logging.getLogger(__name__)


class QueryExecutor:
    """
    Coordinates query execution.

    Wraps a database-specific query executor and turns driver failures into
    InternalError so the web layer renders them uniformly.
    """

    def __init__(self, executor: IQueryExecutor):
        """
        Initialize query executor.

        Args:
            executor: Database-specific query executor implementation
        """
        self.executor = executor

    def count(self, filter: Dict[str, Any]) -> int:
        """Total documents matching the filter."""
        try:
            return self.executor.count(filter)
        except BootcampApiError:
            raise
        except Exception as e:
            logger.exception("Count failed for filter %s", filter)
            raise InternalError("Query execution failed") from e

    def find(
        self,
        query: Dict[str, Any],
        populate: Optional[List[PopulateSpec]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Execute a translated query.

        Args:
            query: Database-specific query object
            populate: Related documents to attach

        Returns:
            List of serialized documents
        """
        try:
            return self.executor.find(query, populate)
        except BootcampApiError:
            raise
        except Exception as e:
            logger.exception("Query failed: %s", query)
            raise InternalError("Query execution failed") from e
