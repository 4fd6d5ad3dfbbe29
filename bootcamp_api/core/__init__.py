"""Core interfaces, models and errors for the bootcamp API."""

from bootcamp_api.core.interfaces import (
    IQueryTranslator,
    IQueryExecutor,
    IRepository,
    IAggregateStore,
    IGeocoder,
)
from bootcamp_api.core.models import (
    ComparisonOperator,
    FilterCondition,
    FilterCriteria,
    SortDirection,
    SortField,
    QueryOptions,
    PopulateSpec,
    PageLink,
    Pagination,
    QueryResultEnvelope,
    GeoLocation,
)
from bootcamp_api.core.errors import (
    BootcampApiError,
    BadRequestError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    InternalError,
    ExternalServiceError,
)

__all__ = [
    "IQueryTranslator",
    "IQueryExecutor",
    "IRepository",
    "IAggregateStore",
    "IGeocoder",
    "ComparisonOperator",
    "FilterCondition",
    "FilterCriteria",
    "SortDirection",
    "SortField",
    "QueryOptions",
    "PopulateSpec",
    "PageLink",
    "Pagination",
    "QueryResultEnvelope",
    "GeoLocation",
    "BootcampApiError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
    "ExternalServiceError",
]
