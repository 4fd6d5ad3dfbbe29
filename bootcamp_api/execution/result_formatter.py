"""
Result formatting utilities.

Wraps executed query results in the list envelope returned by the API.
"""

from typing import Any, Dict, Iterable, List

from bootcamp_api.core.models import (
    PageLink,
    Pagination,
    QueryOptions,
    QueryResultEnvelope,
)


class ResultFormatter:
    """
    Formats query results into a consistent structure.
    """

    @staticmethod
    def build_pagination(options: QueryOptions, total_count: int) -> Pagination:
        """
        Compute page links.

        A next page exists while ``page * limit < total_count``; a previous
        page exists whenever ``page > 1``.
        """
        pagination = Pagination()

        if options.end_index < total_count:
            pagination.next_page = PageLink(
                page=options.page + 1, limit=options.limit, total_count=total_count
            )

        if options.start_index > 0:
            pagination.prev_page = PageLink(
                page=options.page - 1, limit=options.limit, total_count=total_count
            )

        return pagination

    @staticmethod
    def format_result(
        documents: List[Dict[str, Any]],
        options: QueryOptions,
        total_count: int,
        hidden_fields: Iterable[str] = (),
    ) -> QueryResultEnvelope:
        """
        Build the result envelope.

        Args:
            documents: Serialized documents of the current page
            options: Options the query ran with
            total_count: Matches ignoring pagination
            hidden_fields: Fields never returned to callers

        Returns:
            QueryResultEnvelope
        """
        hidden = set(hidden_fields)
        data = [
            {k: v for k, v in doc.items() if k not in hidden} for doc in documents
        ]

        return QueryResultEnvelope(
            success=True,
            count=len(data),
            pagination=ResultFormatter.build_pagination(options, total_count),
            data=data,
        )
