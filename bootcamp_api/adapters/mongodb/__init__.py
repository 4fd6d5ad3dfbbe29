"""MongoDB adapter for the bootcamp API."""

from bootcamp_api.adapters.mongodb.query_translator import MongoQueryTranslator
from bootcamp_api.adapters.mongodb.executor import MongoQueryExecutor
from bootcamp_api.adapters.mongodb.repository import MongoRepository
from bootcamp_api.adapters.mongodb.aggregate_store import MongoAggregateStore
from bootcamp_api.adapters.mongodb.indexes import ensure_indexes

__all__ = [
    "MongoQueryTranslator",
    "MongoQueryExecutor",
    "MongoRepository",
    "MongoAggregateStore",
    "ensure_indexes",
]
