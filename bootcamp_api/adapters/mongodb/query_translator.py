"""
MongoDB query translator.

Converts validated filter criteria to a MongoDB find() filter, projection and
sort list.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from bootcamp_api.adapters.mongodb.documents import REFERENCE_FIELDS, to_object_id
from bootcamp_api.core.models import ComparisonOperator, FilterCriteria, QueryOptions


class MongoQueryTranslator:
    """
    Translates filter criteria to MongoDB query documents.

    Implements the IQueryTranslator interface for MongoDB.
    """

    OPERATORS = {
        ComparisonOperator.GT: "$gt",
        ComparisonOperator.GTE: "$gte",
        ComparisonOperator.LT: "$lt",
        ComparisonOperator.LTE: "$lte",
        ComparisonOperator.IN: "$in",
    }

    def __init__(self, reference_fields: Iterable[str] = REFERENCE_FIELDS):
        """
        Initialize MongoDB query translator.

        Args:
            reference_fields: Fields whose string values are ObjectId references
        """
        self.reference_fields = set(reference_fields)

    def translate(
        self, criteria: FilterCriteria, options: QueryOptions
    ) -> Dict[str, Any]:
        """
        Convert criteria and options to a MongoDB query object.

        Args:
            criteria: Validated filter conditions
            options: Projection and sort

        Returns:
            Dictionary with ``filter``, ``projection`` and ``sort`` keys
        """
        return {
            "filter": self.build_filter(criteria),
            "projection": self._build_projection(options.select),
            "sort": self._build_sort(options),
        }

    def build_filter(self, criteria: FilterCriteria) -> Dict[str, Any]:
        """Build the find() filter; every condition is translated."""
        mongo_filter: Dict[str, Any] = {}

        for condition in criteria.conditions:
            field = self._field_name(condition.field)
            value = self._convert_value(field, condition.value)
            existing = mongo_filter.get(field)

            if condition.operator == ComparisonOperator.EQ:
                if isinstance(existing, dict):
                    existing["$eq"] = value
                else:
                    mongo_filter[field] = value
                continue

            if field in mongo_filter and not isinstance(existing, dict):
                mongo_filter[field] = {"$eq": existing}
            mongo_filter.setdefault(field, {})[self.OPERATORS[condition.operator]] = value

        return mongo_filter

    def _build_projection(self, select: Optional[List[str]]) -> Optional[Dict[str, int]]:
        if not select:
            return None
        return {self._field_name(field): 1 for field in select}

    def _build_sort(self, options: QueryOptions) -> List[Tuple[str, int]]:
        return [(self._field_name(s.field), s.direction.value) for s in options.sort]

    @staticmethod
    def _field_name(field: str) -> str:
        return "_id" if field == "id" else field

    def _convert_value(self, field: str, value: Any) -> Any:
        if field not in self.reference_fields:
            return value
        if isinstance(value, list):
            return [to_object_id(v) for v in value]
        return to_object_id(value)
