"""
Shared data models for query translation and result envelopes.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


RESERVED_KEYS = ("select", "sort", "page", "limit")
DEFAULT_SORT_FIELD = "createdAt"
DEFAULT_PAGE_LIMIT = 100


class ComparisonOperator(str, Enum):
    """Operators accepted in request filters."""

    EQ = "eq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"


class SortDirection(int, Enum):
    ASC = 1
    DESC = -1


class FilterCondition(BaseModel):
    """A single field constraint."""

    field: str
    operator: ComparisonOperator = ComparisonOperator.EQ
    value: Any


class FilterCriteria(BaseModel):
    """Validated filter criteria, one condition per field/operator pair."""

    conditions: List[FilterCondition] = Field(default_factory=list)

    def with_condition(
        self,
        field: str,
        value: Any,
        operator: ComparisonOperator = ComparisonOperator.EQ,
    ) -> "FilterCriteria":
        """Return a copy with an extra condition appended."""
        condition = FilterCondition(field=field, operator=operator, value=value)
        return FilterCriteria(conditions=[*self.conditions, condition])

    def is_empty(self) -> bool:
        return not self.conditions


class SortField(BaseModel):
    """One field to sort by, with its direction."""

    field: str
    direction: SortDirection = SortDirection.ASC


def _default_sort() -> List[SortField]:
    return [SortField(field=DEFAULT_SORT_FIELD, direction=SortDirection.DESC)]


class QueryOptions(BaseModel):
    """Control parameters: projection, sort order and page bounds."""

    select: Optional[List[str]] = None
    sort: List[SortField] = Field(default_factory=_default_sort)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1)

    @property
    def start_index(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def end_index(self) -> int:
        return self.page * self.limit


class PopulateSpec(BaseModel):
    """
    Describes how to attach related documents to each result.

    With ``just_one`` the local field holds a reference that is replaced by the
    referenced document (a course's bootcamp). Without it, every document of
    ``collection`` whose ``foreign_field`` equals the local field is attached as
    a list (a bootcamp's courses).
    """

    collection: str
    local_field: str = "_id"
    foreign_field: str = "_id"
    as_field: Optional[str] = None
    select: Optional[List[str]] = None
    just_one: bool = True

    @property
    def target_field(self) -> str:
        return self.as_field or self.local_field


class PageLink(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total_count: int = Field(alias="totalCount")


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    next_page: Optional[PageLink] = Field(default=None, alias="nextPage")
    prev_page: Optional[PageLink] = Field(default=None, alias="prevPage")


class QueryResultEnvelope(BaseModel):
    """Standardized list response with pagination metadata."""

    success: bool = True
    count: int = 0
    pagination: Pagination = Field(default_factory=Pagination)
    data: List[Dict[str, Any]] = Field(default_factory=list)

    def to_response(self, include_pagination: bool = True) -> Dict[str, Any]:
        """
        Render the envelope as a JSON-ready body.

        Page links are only present when the page exists.
        """
        body: Dict[str, Any] = {"success": self.success, "count": self.count}
        if include_pagination:
            body["pagination"] = self.pagination.model_dump(
                by_alias=True, exclude_none=True
            )
        body["data"] = self.data
        return body


class GeoLocation(BaseModel):
    """A geocoded address."""

    latitude: float
    longitude: float
    formatted_address: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None
    country: Optional[str] = None

    def to_geojson(self) -> Dict[str, Any]:
        """GeoJSON point as stored in a bootcamp's ``location`` field."""
        point: Dict[str, Any] = {
            "type": "Point",
            "coordinates": [self.longitude, self.latitude],
            "formattedAddress": self.formatted_address,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zipcode": self.zipcode,
            "country": self.country,
        }
        return {k: v for k, v in point.items() if v is not None}
