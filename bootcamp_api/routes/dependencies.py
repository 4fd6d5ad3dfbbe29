"""
FastAPI dependencies: service container, current user, role checks.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bootcamp_api.container import ServiceContainer
from bootcamp_api.core.errors import ForbiddenError, UnauthorizedError

bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def query_pairs(request: Request) -> List[Tuple[str, str]]:
    """Raw query-string pairs, in request order."""
    return request.query_params.multi_items()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    if credentials is None:
        raise UnauthorizedError()
    return container.auth.current_user(credentials.credentials)


def authorize(*roles: str) -> Callable[..., Dict[str, Any]]:
    """Dependency that only lets users with one of ``roles`` through."""

    def dependency(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if user.get("role") not in roles:
            raise ForbiddenError(
                f"User role {user.get('role')} is not authorized to access this route"
            )
        return user

    return dependency
