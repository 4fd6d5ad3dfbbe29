"""
In-memory implementations of the persistence protocols.

Filters use the MongoDB query-document shape produced by MongoQueryTranslator
(equality plus $eq/$gt/$gte/$lt/$lte/$in and $geoWithin with $centerSphere),
so list endpoints can be tested without a database. Generated ids are plain
strings that are never valid ObjectIds.
"""

import copy
import itertools
import math
from collections import defaultdict
from typing import Any, Dict, List, Optional, Tuple

from bootcamp_api.core.errors import ConflictError, NotFoundError
from bootcamp_api.core.models import GeoLocation, PopulateSpec


def _within_sphere(location: Any, operand: Dict[str, Any]) -> bool:
    if not location:
        return False
    (center_lng, center_lat), radius = operand["$centerSphere"]
    lng, lat = location["coordinates"]

    phi1, phi2 = math.radians(center_lat), math.radians(lat)
    d_phi = phi2 - phi1
    d_lambda = math.radians(lng - center_lng)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * math.asin(math.sqrt(a)) <= radius


def _resolve(document: Dict[str, Any], field: str) -> Any:
    value: Any = document
    for part in field.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _compare(op: str, value: Any, operand: Any) -> bool:
    if op == "$eq":
        return value == operand
    if op == "$geoWithin":
        return _within_sphere(value, operand)
    if op == "$in":
        if isinstance(value, list):
            return any(item in operand for item in value)
        return value in operand
    if value is None:
        return False
    if op == "$gt":
        return value > operand
    if op == "$gte":
        return value >= operand
    if op == "$lt":
        return value < operand
    if op == "$lte":
        return value <= operand
    raise ValueError(f"Unsupported operator {op}")


def matches(document: Dict[str, Any], filter: Dict[str, Any]) -> bool:
    for field, condition in filter.items():
        value = _resolve(document, field)
        if isinstance(condition, dict):
            if not all(_compare(op, value, operand) for op, operand in condition.items()):
                return False
        elif isinstance(value, list):
            if condition not in value:
                return False
        elif value != condition:
            return False
    return True


class InMemoryDatabase:
    def __init__(self):
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = defaultdict(dict)
        self._ids = itertools.count(1)

    def next_id(self, collection: str) -> str:
        return f"{collection}-{next(self._ids)}"

    def populate(self, documents: List[Dict[str, Any]], spec: PopulateSpec) -> None:
        related = list(self.collections[spec.collection].values())
        for doc in documents:
            if spec.local_field not in doc:
                continue
            key = doc[spec.local_field]
            found = [r for r in related if r.get(spec.foreign_field) == key]
            if spec.select:
                keep = set(spec.select) | {"_id", spec.foreign_field}
                found = [{k: v for k, v in r.items() if k in keep} for r in found]
            found = copy.deepcopy(found)
            if spec.just_one:
                doc[spec.target_field] = found[0] if found else None
            else:
                doc[spec.target_field] = found


class InMemoryRepository:
    def __init__(
        self,
        database: InMemoryDatabase,
        name: str,
        unique: Tuple[Tuple[str, ...], ...] = (),
    ):
        self.database = database
        self.name = name
        self.unique = unique

    @property
    def documents(self) -> Dict[str, Dict[str, Any]]:
        return self.database.collections[self.name]

    def get(self, doc_id, populate: Optional[List[PopulateSpec]] = None):
        document = self.documents.get(doc_id)
        if document is None:
            return None
        document = copy.deepcopy(document)
        for spec in populate or []:
            self.database.populate([document], spec)
        return document

    def find_one(self, filter):
        for document in self.documents.values():
            if matches(document, filter):
                return copy.deepcopy(document)
        return None

    def find_many(self, filter):
        return [copy.deepcopy(d) for d in self.documents.values() if matches(d, filter)]

    def insert(self, document):
        self._check_unique(document)
        stored = dict(document)
        stored["_id"] = document.get("_id") or self.database.next_id(self.name)
        self.documents[stored["_id"]] = stored
        return copy.deepcopy(stored)

    def update(self, doc_id, patch):
        if doc_id not in self.documents:
            return None
        merged = {**self.documents[doc_id], **patch}
        self._check_unique(merged, exclude=doc_id)
        self.documents[doc_id] = merged
        return copy.deepcopy(merged)

    def delete(self, doc_id):
        return self.documents.pop(doc_id, None) is not None

    def delete_many(self, filter):
        doomed = [i for i, d in self.documents.items() if matches(d, filter)]
        for doc_id in doomed:
            del self.documents[doc_id]
        return len(doomed)

    def _check_unique(self, document, exclude=None):
        for fields in self.unique:
            key = tuple(document.get(f) for f in fields)
            for doc_id, other in self.documents.items():
                if doc_id != exclude and tuple(other.get(f) for f in fields) == key:
                    raise ConflictError(f"Duplicate value entered for {self.name}")


class InMemoryQueryExecutor:
    def __init__(self, database: InMemoryDatabase, name: str):
        self.database = database
        self.name = name
        self.queries: List[Dict[str, Any]] = []

    def count(self, filter):
        return sum(1 for d in self.database.collections[self.name].values() if matches(d, filter))

    def find(self, query, populate=None):
        self.queries.append(query)
        documents = [
            copy.deepcopy(d)
            for d in self.database.collections[self.name].values()
            if matches(d, query.get("filter", {}))
        ]

        for field, direction in reversed(query.get("sort") or []):
            documents.sort(
                key=lambda d: (d.get(field) is not None, d.get(field)),
                reverse=direction < 0,
            )

        skip = query.get("skip", 0)
        limit = query.get("limit") or len(documents)
        documents = documents[skip:skip + limit]

        projection = query.get("projection")
        if projection:
            keep = set(projection) | {"_id"}
            documents = [{k: v for k, v in d.items() if k in keep} for d in documents]

        for spec in populate or []:
            self.database.populate(documents, spec)
        return documents


class InMemoryAggregateStore:
    def __init__(self, database: InMemoryDatabase):
        self.database = database
        self.fail_writes = False

    def average(self, collection, match_field, match_value, value_field):
        values = [
            d[value_field]
            for d in self.database.collections[collection].values()
            if d.get(match_field) == match_value
        ]
        if not values:
            return None
        return sum(values) / len(values)

    def set_field(self, collection, doc_id, field, value):
        self._target(collection, doc_id)[field] = value

    def unset_field(self, collection, doc_id, field):
        self._target(collection, doc_id).pop(field, None)

    def _target(self, collection, doc_id):
        if self.fail_writes:
            raise RuntimeError("write failed")
        document = self.database.collections[collection].get(doc_id)
        if document is None:
            raise NotFoundError.for_resource(collection, doc_id)
        return document


class FakeGeocoder:
    """Geocoder answering from a fixed address table."""

    def __init__(self, locations: Dict[str, GeoLocation]):
        self.locations = locations
        self.lookups: List[str] = []

    def geocode(self, address):
        self.lookups.append(address)
        return self.locations.get(address)
