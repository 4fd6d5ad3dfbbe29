"""
MongoDB document repository.

Implements IRepository for one collection. Invalid ids behave like missing
documents; duplicate keys surface as ConflictError.
"""

from typing import Any, Dict, Iterable, List, Optional

from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from bootcamp_api.adapters.mongodb.documents import (
    REFERENCE_FIELDS,
    coerce_references,
    parse_object_id,
    populate_documents,
    serialize_document,
)
from bootcamp_api.core.errors import ConflictError
from bootcamp_api.core.models import PopulateSpec


class MongoRepository:
    """CRUD access to a single MongoDB collection."""

    def __init__(
        self,
        database: Database,
        collection_name: str,
        reference_fields: Iterable[str] = REFERENCE_FIELDS,
    ):
        self.database = database
        self.collection_name = collection_name
        self.collection: Collection = database[collection_name]
        self.reference_fields = tuple(reference_fields)

    def get(
        self, doc_id: str, populate: Optional[List[PopulateSpec]] = None
    ) -> Optional[Dict[str, Any]]:
        object_id = parse_object_id(doc_id)
        if object_id is None:
            return None

        document = self.collection.find_one({"_id": object_id})
        if document is None:
            return None

        for spec in populate or []:
            populate_documents(self.database, [document], spec)
        return serialize_document(document)

    def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        document = self.collection.find_one(self._coerce(filter))
        return serialize_document(document) if document is not None else None

    def find_many(self, filter: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [serialize_document(doc) for doc in self.collection.find(self._coerce(filter))]

    def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        to_store = self._coerce(document)
        try:
            result = self.collection.insert_one(to_store)
        except DuplicateKeyError as e:
            raise ConflictError(self._duplicate_message(e)) from e

        to_store["_id"] = result.inserted_id
        return serialize_document(to_store)

    def update(self, doc_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        object_id = parse_object_id(doc_id)
        if object_id is None:
            return None
        if not patch:
            return self.get(doc_id)

        try:
            document = self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": self._coerce(patch)},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise ConflictError(self._duplicate_message(e)) from e

        return serialize_document(document) if document is not None else None

    def delete(self, doc_id: str) -> bool:
        object_id = parse_object_id(doc_id)
        if object_id is None:
            return False
        return self.collection.delete_one({"_id": object_id}).deleted_count == 1

    def delete_many(self, filter: Dict[str, Any]) -> int:
        return self.collection.delete_many(self._coerce(filter)).deleted_count

    def _coerce(self, document: Dict[str, Any]) -> Dict[str, Any]:
        return coerce_references(document, self.reference_fields)

    def _duplicate_message(self, error: DuplicateKeyError) -> str:
        key_value = (error.details or {}).get("keyValue") or {}
        fields = ", ".join(sorted(key_value)) or "unique key"
        return f"Duplicate value entered for {self.collection_name}: {fields}"
