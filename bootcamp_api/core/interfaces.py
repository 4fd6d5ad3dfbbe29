"""
Abstract interfaces for persistence adapters.

These protocols define the contract the services and the advanced-results
pipeline rely on. The MongoDB adapters implement them in production; tests
provide in-memory implementations.
"""

from typing import Any, Dict, List, Optional, Protocol

from bootcamp_api.core.models import FilterCriteria, GeoLocation, PopulateSpec, QueryOptions


class IQueryTranslator(Protocol):
    """
    Translate validated filter criteria to a database-specific query.
    """

    def translate(
        self, criteria: FilterCriteria, options: QueryOptions
    ) -> Dict[str, Any]:
        """
        Convert criteria and control options to a query object.

        Args:
            criteria: Validated filter conditions
            options: Projection, sort and page bounds

        Returns:
            Query object with keys ``filter``, ``projection``, ``sort``,
            ``skip`` and ``limit``
        """
        ...


class IQueryExecutor(Protocol):
    """
    Execute translated queries against one collection.
    """

    def count(self, filter: Dict[str, Any]) -> int:
        """
        Count documents matching a filter, ignoring pagination.
        """
        ...

    def find(
        self,
        query: Dict[str, Any],
        populate: Optional[List[PopulateSpec]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Run a translated query and return serialized documents.

        Args:
            query: Query object produced by an IQueryTranslator
            populate: Related documents to attach to each result

        Returns:
            JSON-ready documents, ids rendered as strings
        """
        ...


class IRepository(Protocol):
    """
    Document CRUD for one collection. Ids are exchanged as strings.
    """

    def get(
        self, doc_id: str, populate: Optional[List[PopulateSpec]] = None
    ) -> Optional[Dict[str, Any]]:
        ...

    def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ...

    def find_many(self, filter: Dict[str, Any]) -> List[Dict[str, Any]]:
        ...

    def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def update(self, doc_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ...

    def delete(self, doc_id: str) -> bool:
        ...

    def delete_many(self, filter: Dict[str, Any]) -> int:
        ...


class IAggregateStore(Protocol):
    """
    Grouping and write-back primitives used by the aggregate maintainer.
    """

    def average(
        self, collection: str, match_field: str, match_value: str, value_field: str
    ) -> Optional[float]:
        """
        Mean of ``value_field`` over documents where ``match_field`` equals
        ``match_value``; None when no document matches.
        """
        ...

    def set_field(self, collection: str, doc_id: str, field: str, value: Any) -> None:
        """Set a field on one document; NotFoundError if it does not exist."""
        ...

    def unset_field(self, collection: str, doc_id: str, field: str) -> None:
        """Remove a field from one document; NotFoundError if it does not exist."""
        ...


class IGeocoder(Protocol):
    """
    Address and zipcode lookup.
    """

    def geocode(self, address: str) -> Optional[GeoLocation]:
        """
        Resolve a free-form address or zipcode.

        Returns:
            The best match, or None when nothing matches

        Raises:
            ExternalServiceError: If the lookup service cannot be reached
        """
        ...
