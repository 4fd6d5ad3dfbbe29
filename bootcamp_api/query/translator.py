"""
Query translation coordinator.

Delegates filter, projection and sort translation to database-specific
translators and owns the page bounds.
"""

import logging
from typing import Any, Dict

from bootcamp_api.core.interfaces import IQueryTranslator
from bootcamp_api.core.models import FilterCriteria, QueryOptions

logger = logging.getLogger(__name__)


class QueryTranslator:
    """
    Coordinates query translation from criteria to database queries.

    This class wraps a database-specific query translator and provides
    common pre/post-processing logic.
    """

    def __init__(self, translator: IQueryTranslator):
        """
        Initialize query translator.

        Args:
            translator: Database-specific query translator implementation
        """
        self.translator = translator

    def translate(
        self, criteria: FilterCriteria, options: QueryOptions
    ) -> Dict[str, Any]:
        """
        Translate criteria and options to a database-specific query.

        Args:
            criteria: Validated filter conditions
            options: Projection, sort and pagination

        Returns:
            Query object with filter, projection, sort, skip and limit
        """
        query = self.translator.translate(criteria, options)

        # Page bounds are database-independent
        query["skip"] = options.start_index
        query["limit"] = options.limit

        logger.debug("Translated query: %s", query)
        return query
