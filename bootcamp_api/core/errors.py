"""
Error types raised across the API.

Every error carries the HTTP status code it maps to, so the web layer can
render any of them with a single exception handler.
"""

from typing import Any, Dict, Optional


class BootcampApiError(Exception):
    """Base exception for all bootcamp API errors."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message}


class BadRequestError(BootcampApiError):
    """Malformed filter, selection, sort or pagination input."""

    status_code = 400
    code = "BAD_REQUEST"


class UnauthorizedError(BootcampApiError):
    """Missing or invalid credentials."""

    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Not authorized to access this route"):
        super().__init__(message)


class ForbiddenError(BootcampApiError):
    """Authenticated user lacks the role or ownership required."""

    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(BootcampApiError):
    """Referenced document does not exist."""

    status_code = 404
    code = "NOT_FOUND"

    @classmethod
    def for_resource(cls, resource: str, resource_id: Any) -> "NotFoundError":
        return cls(f"{resource} not found with id of {resource_id}")


class ConflictError(BootcampApiError):
    """Unique constraint violation."""

    status_code = 409
    code = "CONFLICT"


class InternalError(BootcampApiError):
    """Persistence failure that is not the caller's fault."""

    status_code = 500
    code = "INTERNAL_ERROR"


class ExternalServiceError(BootcampApiError):
    """An upstream service such as the geocoder failed."""

    status_code = 502
    code = "BAD_GATEWAY"
