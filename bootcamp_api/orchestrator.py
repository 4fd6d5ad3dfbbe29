"""
Advanced results orchestrator - main entry point for list endpoints.

Coordinates filter building, query translation, execution and result
formatting into one call per request.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pymongo.database import Database

from bootcamp_api.core.interfaces import IQueryExecutor, IQueryTranslator
from bootcamp_api.core.models import (
    DEFAULT_PAGE_LIMIT,
    FilterCriteria,
    PopulateSpec,
    QueryOptions,
    QueryResultEnvelope,
)
from bootcamp_api.execution.executor import QueryExecutor
from bootcamp_api.execution.result_formatter import ResultFormatter
from bootcamp_api.query.filter_builder import FilterCriteriaBuilder
from bootcamp_api.query.translator import QueryTranslator

logger = logging.getLogger(__name__)


class ResultsOrchestrator:
    """
    Filtered, sorted, projected and paginated listing of one collection.

    Read-only: running it twice with the same input and no intervening write
    yields the same envelope.
    """

    def __init__(
        self,
        query_translator: IQueryTranslator,
        query_executor: IQueryExecutor,
        populate: Optional[List[PopulateSpec]] = None,
        hidden_fields: Optional[List[str]] = None,
        default_limit: int = DEFAULT_PAGE_LIMIT,
        field_types: Optional[Dict[str, type]] = None,
    ):
        """
        Initialize the orchestrator with database adapters.

        Args:
            query_translator: Database-specific query translator
            query_executor: Database-specific query executor
            populate: Related documents attached to every result
            hidden_fields: Fields stripped from every result
            default_limit: Page size when the request gives none
            field_types: Number and boolean fields, for query-string coercion
        """
        self.filter_builder = FilterCriteriaBuilder(
            default_limit=default_limit, field_types=field_types
        )
        self.query_translator = QueryTranslator(query_translator)
        self.query_executor = QueryExecutor(query_executor)
        self.populate = populate or []
        self.hidden_fields = hidden_fields or []

    @classmethod
    def from_mongodb(
        cls,
        database: Database,
        collection_name: str,
        populate: Optional[List[PopulateSpec]] = None,
        hidden_fields: Optional[List[str]] = None,
        default_limit: int = DEFAULT_PAGE_LIMIT,
        field_types: Optional[Dict[str, type]] = None,
    ) -> "ResultsOrchestrator":
        """
        Create orchestrator for a MongoDB collection.

        Args:
            database: Connected database handle
            collection_name: Name of the collection to list
            populate: Related documents attached to every result
            hidden_fields: Fields stripped from every result
            default_limit: Page size when the request gives none
            field_types: Number and boolean fields, for query-string coercion

        Returns:
            Configured ResultsOrchestrator for MongoDB
        """
        from bootcamp_api.adapters.mongodb import MongoQueryExecutor, MongoQueryTranslator

        return cls(
            query_translator=MongoQueryTranslator(),
            query_executor=MongoQueryExecutor(database, collection_name),
            populate=populate,
            hidden_fields=hidden_fields,
            default_limit=default_limit,
            field_types=field_types,
        )

    def run(
        self,
        pairs: Iterable[Tuple[str, str]],
        scope: Optional[Dict[str, Any]] = None,
    ) -> QueryResultEnvelope:
        """
        List documents for raw query-string pairs.

        Args:
            pairs: Request query parameters as (key, value) pairs
            scope: Fixed equality conditions that override request filters,
                e.g. ``{"bootcamp": bootcamp_id}`` on nested routes

        Returns:
            QueryResultEnvelope for the requested page
        """
        pairs = list(pairs)
        criteria = self.filter_builder.from_pairs(pairs)
        for field, value in (scope or {}).items():
            criteria = criteria.with_condition(field, value)

        options = self.filter_builder.options_from_pairs(pairs)
        return self.run_criteria(criteria, options)

    def run_criteria(
        self, criteria: FilterCriteria, options: QueryOptions
    ) -> QueryResultEnvelope:
        """
        List documents for already-validated criteria and options.
        """
        query = self.query_translator.translate(criteria, options)

        # Total reflects the filters, not the whole collection
        total_count = self.query_executor.count(query["filter"])
        documents = self.query_executor.find(query, self.populate)

        logger.debug(
            "Page %s of %s results (limit %s)", options.page, total_count, options.limit
        )
        return ResultFormatter.format_result(
            documents, options, total_count, self.hidden_fields
        )
