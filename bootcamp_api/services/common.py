"""
Helpers shared by the service classes.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict

from bootcamp_api.core.errors import ForbiddenError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def slugify(text: str) -> str:
    """'Devworks Bootcamp!' -> 'devworks-bootcamp'"""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def ensure_owner(document: Dict[str, Any], user: Dict[str, Any], resource: str) -> None:
    """
    Only the user who created a document, or an admin, may change it.

    Raises:
        ForbiddenError: If the user is neither
    """
    if user.get("role") == "admin":
        return
    if document.get("user") != user.get("_id"):
        raise ForbiddenError(
            f"User {user.get('_id')} is not authorized to modify {resource} {document.get('_id')}"
        )


def public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """User document without its password hash."""
    return {k: v for k, v in user.items() if k != "password"}
