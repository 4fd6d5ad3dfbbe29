"""
MongoDB query executor.

Executes translated find() queries and returns serialized documents.
"""

from typing import Any, Dict, List, Optional

from pymongo.collection import Collection
from pymongo.database import Database

from bootcamp_api.adapters.mongodb.documents import populate_documents, serialize_document
from bootcamp_api.core.models import PopulateSpec


class MongoQueryExecutor:
    """
    Executes MongoDB queries against one collection.

    Implements the IQueryExecutor interface for MongoDB.
    """

    def __init__(self, database: Database, collection_name: str):
        """
        Initialize MongoDB query executor.

        Args:
            database: Connected database handle
            collection_name: Name of the collection
        """
        self.database = database
        self.collection_name = collection_name
        self.collection: Collection = database[collection_name]

    def count(self, filter: Dict[str, Any]) -> int:
        """Count matching documents, ignoring pagination."""
        return self.collection.count_documents(filter)

    def find(
        self,
        query: Dict[str, Any],
        populate: Optional[List[PopulateSpec]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Execute a translated query.

        Args:
            query: Query object with filter, projection, sort, skip and limit
            populate: Related documents to attach to each result

        Returns:
            List of documents with ObjectIds converted to strings
        """
        cursor = self.collection.find(query.get("filter", {}), query.get("projection"))

        if query.get("sort"):
            cursor = cursor.sort(query["sort"])

        cursor = cursor.skip(query.get("skip", 0)).limit(query.get("limit", 0))
        documents = list(cursor)

        for spec in populate or []:
            populate_documents(self.database, documents, spec)

        return [serialize_document(doc) for doc in documents]
