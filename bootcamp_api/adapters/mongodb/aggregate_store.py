"""
MongoDB grouping and write-back primitives for denormalized aggregates.
"""

from typing import Any, Dict, List, Optional

from pymongo.database import Database

from bootcamp_api.adapters.mongodb.documents import parse_object_id, to_object_id
from bootcamp_api.core.errors import NotFoundError


class MongoAggregateStore:
    """
    Computes child averages and writes them onto parent documents.

    Implements the IAggregateStore interface for MongoDB.
    """

    def __init__(self, database: Database):
        self.database = database

    def average(
        self, collection: str, match_field: str, match_value: str, value_field: str
    ) -> Optional[float]:
        """
        Run a $match/$group pipeline and return the mean.

        Returns:
            The mean, or None when no document matches
        """
        pipeline: List[Dict[str, Any]] = [
            {"$match": {match_field: to_object_id(match_value)}},
            {
                "$group": {
                    "_id": f"${match_field}",
                    "average": {"$avg": f"${value_field}"},
                }
            },
        ]
        results = list(self.database[collection].aggregate(pipeline))

        if not results or results[0].get("average") is None:
            return None
        return float(results[0]["average"])

    def set_field(self, collection: str, doc_id: str, field: str, value: Any) -> None:
        self._update(collection, doc_id, {"$set": {field: value}})

    def unset_field(self, collection: str, doc_id: str, field: str) -> None:
        self._update(collection, doc_id, {"$unset": {field: ""}})

    def _update(self, collection: str, doc_id: str, update: Dict[str, Any]) -> None:
        object_id = parse_object_id(doc_id)
        if object_id is None:
            raise NotFoundError.for_resource(collection, doc_id)

        result = self.database[collection].update_one({"_id": object_id}, update)
        if result.matched_count == 0:
            raise NotFoundError.for_resource(collection, doc_id)
