"""
Build validated filter criteria and query options from request input.

Request query strings arrive as loose key/value pairs such as
``tuition[gt]=100&careers[in]=Business,UI/UX&select=name&page=2``. This module
turns them into ``FilterCriteria`` and ``QueryOptions`` before anything reaches
a database translator.
"""

import json
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from bootcamp_api.core.errors import BadRequestError
from bootcamp_api.core.models import (
    RESERVED_KEYS,
    DEFAULT_PAGE_LIMIT,
    ComparisonOperator,
    FilterCondition,
    FilterCriteria,
    QueryOptions,
    SortDirection,
    SortField,
)


_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*$")
_BRACKET_KEY = re.compile(r"^(?P<field>[^\[\]]+)\[(?P<op>[^\[\]]*)\]$")
_INT_VALUE = re.compile(r"^-?\d+$")
_FLOAT_VALUE = re.compile(r"^-?\d+\.\d+$")

# page and limit end up as 32-bit skip/limit values in the database driver
MAX_PAGE_VALUE = 2**31 - 1


class FilterCriteriaBuilder:
    """
    Parses raw request parameters into typed filter criteria and options.

    Reserved control keys (select, sort, page, limit) never become filter
    conditions. Every comparison keyword is translated, however many appear.
    """

    def __init__(
        self,
        default_limit: int = DEFAULT_PAGE_LIMIT,
        field_types: Optional[Dict[str, type]] = None,
    ):
        """
        Initialize the builder.

        Args:
            default_limit: Page size used when the request gives none
            field_types: Number and boolean fields of the listed collection;
                values of every other field stay strings
        """
        self.default_limit = default_limit
        self.field_types = field_types or {}

    def from_pairs(self, pairs: Iterable[Tuple[str, str]]) -> FilterCriteria:
        """
        Build criteria from query-string pairs.

        Args:
            pairs: Raw (key, value) pairs, in request order

        Returns:
            FilterCriteria with one condition per non-reserved pair
        """
        conditions: List[FilterCondition] = []

        for key, raw_value in pairs:
            if key in RESERVED_KEYS:
                continue

            match = _BRACKET_KEY.match(key)
            if match:
                field = match.group("field")
                operator = self._parse_operator(match.group("op"))
            else:
                field = key
                operator = ComparisonOperator.EQ

            self._check_field(field)
            conditions.append(
                FilterCondition(
                    field=field,
                    operator=operator,
                    value=self._parse_value(field, raw_value, operator),
                )
            )

        return FilterCriteria(conditions=self._merge_repeated_equality(conditions))

    def from_mapping(self, mapping: Dict[str, Any]) -> FilterCriteria:
        """
        Build criteria from a nested mapping such as ``{"tuition": {"gt": 100}}``.

        Args:
            mapping: Field name to literal value or operator mapping

        Returns:
            FilterCriteria
        """
        conditions: List[FilterCondition] = []

        for field, value in mapping.items():
            if field in RESERVED_KEYS:
                continue
            self._check_field(field)

            if isinstance(value, dict):
                if not value:
                    raise BadRequestError(f"Empty operator object for field '{field}'")
                for op, operand in value.items():
                    operator = self._parse_operator(op)
                    conditions.append(
                        FilterCondition(
                            field=field,
                            operator=operator,
                            value=self._normalize_operand(field, operand, operator),
                        )
                    )
            else:
                conditions.append(
                    FilterCondition(
                        field=field,
                        value=self._normalize_operand(field, value, ComparisonOperator.EQ),
                    )
                )

        return FilterCriteria(conditions=conditions)

    def from_json(self, text: str) -> FilterCriteria:
        """
        Build criteria from a serialized filter object.

        Raises:
            BadRequestError: If the text is not a JSON object
        """
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as e:
            raise BadRequestError(f"Malformed filter: {e.msg}") from e

        if not isinstance(parsed, dict):
            raise BadRequestError("Filter must be a JSON object")

        return self.from_mapping(parsed)

    def options_from_pairs(self, pairs: Iterable[Tuple[str, str]]) -> QueryOptions:
        """
        Extract projection, sort and pagination from query-string pairs.

        The last occurrence of a control key wins.
        """
        control: Dict[str, str] = {}
        for key, value in pairs:
            if key in RESERVED_KEYS:
                control[key] = value

        options: Dict[str, Any] = {
            "page": self._parse_positive_int(control.get("page"), "page", 1),
            "limit": self._parse_positive_int(
                control.get("limit"), "limit", self.default_limit
            ),
        }

        if control.get("select") is not None:
            options["select"] = self._split_fields(control["select"], "select")

        if control.get("sort") is not None:
            options["sort"] = self._parse_sort(control["sort"])

        return QueryOptions(**options)

    def _parse_operator(self, op: str) -> ComparisonOperator:
        """Map an operator keyword (with or without a leading '$')."""
        keyword = op[1:] if op.startswith("$") else op
        try:
            return ComparisonOperator(keyword)
        except ValueError:
            raise BadRequestError(f"Unsupported filter operator '{op}'") from None

    def _check_field(self, field: str) -> None:
        if not _FIELD_NAME.match(field):
            raise BadRequestError(f"Invalid filter field '{field}'")

    def _parse_value(self, field: str, raw: str, operator: ComparisonOperator) -> Any:
        if operator == ComparisonOperator.IN:
            return [
                self._coerce(field, item.strip()) for item in raw.split(",") if item.strip()
            ]
        return self._coerce(field, raw)

    def _normalize_operand(
        self, field: str, operand: Any, operator: ComparisonOperator
    ) -> Any:
        if operator == ComparisonOperator.IN:
            if isinstance(operand, list):
                return [self._coerce(field, v) if isinstance(v, str) else v for v in operand]
            if isinstance(operand, str):
                return self._parse_value(field, operand, operator)
            raise BadRequestError("The 'in' operator expects a list of values")
        if isinstance(operand, (dict, list)):
            raise BadRequestError("Filter values must be scalars")
        return self._coerce(field, operand) if isinstance(operand, str) else operand

    def _coerce(self, field: str, raw: str) -> Any:
        """
        Convert a query-string value according to the field's type.

        Phone numbers, zipcodes and names stay strings even when all digits.

        Raises:
            BadRequestError: If a number or boolean field gets another value
        """
        kind = self.field_types.get(field)

        if kind is bool:
            lowered = raw.lower()
            if lowered not in ("true", "false"):
                raise BadRequestError(f"'{field}' expects true or false, got '{raw}'")
            return lowered == "true"

        if kind in (int, float):
            if _INT_VALUE.match(raw):
                return int(raw)
            if _FLOAT_VALUE.match(raw):
                return float(raw)
            raise BadRequestError(f"'{field}' expects a number, got '{raw}'")

        return raw

    @staticmethod
    def _merge_repeated_equality(
        conditions: List[FilterCondition],
    ) -> List[FilterCondition]:
        """Turn ``careers=a&careers=b`` into a single membership condition."""
        merged: List[FilterCondition] = []
        equality: Dict[str, FilterCondition] = {}

        for condition in conditions:
            if condition.operator != ComparisonOperator.EQ:
                merged.append(condition)
                continue

            previous = equality.get(condition.field)
            if previous is None:
                equality[condition.field] = condition
                merged.append(condition)
            elif previous.operator == ComparisonOperator.EQ:
                previous.operator = ComparisonOperator.IN
                previous.value = [previous.value, condition.value]
            else:
                previous.value.append(condition.value)

        return merged

    def _split_fields(self, raw: str, param: str) -> List[str]:
        fields = [f.strip() for f in raw.split(",")]
        if not fields or any(not f for f in fields):
            raise BadRequestError(f"Empty field name in '{param}'")
        for field in fields:
            # One leading sign at most: "--name" is not a field
            name = field[1:] if param == "sort" and field[0] in "+-" else field
            if not _FIELD_NAME.match(name):
                raise BadRequestError(f"Invalid field '{field}' in '{param}'")
        return fields

    def _parse_sort(self, raw: str) -> List[SortField]:
        sort_fields = []
        for token in self._split_fields(raw, "sort"):
            if token.startswith("-"):
                sort_fields.append(SortField(field=token[1:], direction=SortDirection.DESC))
            else:
                sort_fields.append(SortField(field=token[1:] if token[0] == "+" else token))
        return sort_fields

    @staticmethod
    def _parse_positive_int(raw: Optional[str], name: str, default: int) -> int:
        if raw is None or raw == "":
            return default
        try:
            value = int(raw)
        except ValueError:
            raise BadRequestError(f"'{name}' must be an integer") from None
        if value < 1:
            raise BadRequestError(f"'{name}' must be at least 1")
        if value > MAX_PAGE_VALUE:
            raise BadRequestError(f"'{name}' must be at most {MAX_PAGE_VALUE}")
        return value
