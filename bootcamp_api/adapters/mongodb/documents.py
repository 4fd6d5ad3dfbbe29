"""
Helpers for moving documents between MongoDB and the API.

Ids travel as strings outside the adapter and as ObjectId inside MongoDB.
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from pymongo.database import Database

from bootcamp_api.core.models import PopulateSpec


REFERENCE_FIELDS = ("_id", "bootcamp", "user")


def to_object_id(value: Any) -> Any:
    """Convert a 24-hex string to ObjectId; anything else is returned as-is."""
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def parse_object_id(doc_id: Any) -> Optional[ObjectId]:
    """Parse a document id, None when it is not a valid ObjectId."""
    if isinstance(doc_id, ObjectId):
        return doc_id
    if isinstance(doc_id, str) and ObjectId.is_valid(doc_id):
        return ObjectId(doc_id)
    return None


def coerce_references(
    document: Dict[str, Any], reference_fields: Iterable[str] = REFERENCE_FIELDS
) -> Dict[str, Any]:
    """Return a copy with reference fields converted to ObjectId."""
    coerced = dict(document)
    for field in reference_fields:
        if field in coerced:
            value = coerced[field]
            if isinstance(value, list):
                coerced[field] = [to_object_id(v) for v in value]
            else:
                coerced[field] = to_object_id(value)
    return coerced


def serialize_document(value: Any) -> Any:
    """Convert ObjectId values (at any depth) to strings for JSON output."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: serialize_document(v) for k, v in value.items()}
    if isinstance(value, list):
        return [serialize_document(v) for v in value]
    return value


def populate_documents(
    database: Database, documents: List[Dict[str, Any]], spec: PopulateSpec
) -> None:
    """
    Attach related documents in place, one query per populate spec.

    Args:
        database: Database holding the related collection
        documents: Raw documents (ObjectIds not yet serialized)
        spec: What to join and where to put it
    """
    keys = {
        doc.get(spec.local_field)
        for doc in documents
        if doc.get(spec.local_field) is not None
    }

    related: List[Dict[str, Any]] = []
    if keys:
        projection = None
        if spec.select:
            projection = {field: 1 for field in spec.select}
            projection[spec.foreign_field] = 1
        related = list(
            database[spec.collection].find(
                {spec.foreign_field: {"$in": list(keys)}}, projection
            )
        )

    # Documents whose local field was projected away are left untouched
    selected = [doc for doc in documents if spec.local_field in doc]

    if spec.just_one:
        by_key = {doc[spec.foreign_field]: doc for doc in related}
        for doc in selected:
            doc[spec.target_field] = by_key.get(doc[spec.local_field])
    else:
        grouped: Dict[Any, List[Dict[str, Any]]] = defaultdict(list)
        for doc in related:
            grouped[doc.get(spec.foreign_field)].append(doc)
        for doc in selected:
            doc[spec.target_field] = grouped.get(doc[spec.local_field], [])
