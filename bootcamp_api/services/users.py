"""
User accounts: authentication for everyone, administration for admins.
"""

from typing import Any, Dict

from bootcamp_api.core.config import Settings
from bootcamp_api.core.errors import ConflictError, NotFoundError, UnauthorizedError
from bootcamp_api.core.interfaces import IRepository
from bootcamp_api.core.schemas import (
    LoginRequest,
    RegisterRequest,
    UpdateDetailsRequest,
    UpdatePasswordRequest,
    UserCreate,
    UserUpdate,
)
from bootcamp_api.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from bootcamp_api.services.common import public_user, utcnow


class UserService:
    """Admin CRUD on user accounts. Password hashes never leave this class."""

    def __init__(self, users: IRepository):
        self.users = users

    def get(self, user_id: str) -> Dict[str, Any]:
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError.for_resource("User", user_id)
        return public_user(user)

    def create(self, payload: UserCreate) -> Dict[str, Any]:
        if self.users.find_one({"email": payload.email}):
            raise ConflictError(f"Email {payload.email} is already registered")

        document = payload.model_dump()
        document.update(password=hash_password(payload.password), createdAt=utcnow())
        return public_user(self.users.insert(document))

    def update(self, user_id: str, payload: UserUpdate) -> Dict[str, Any]:
        updated = self.users.update(user_id, payload.model_dump(exclude_unset=True))
        if updated is None:
            raise NotFoundError.for_resource("User", user_id)
        return public_user(updated)

    def delete(self, user_id: str) -> None:
        if not self.users.delete(user_id):
            raise NotFoundError.for_resource("User", user_id)


class AuthService:
    """Registration, login and the current user's own account."""

    def __init__(self, users: IRepository, settings: Settings):
        self.users = users
        self.settings = settings

    def register(self, payload: RegisterRequest) -> str:
        """Create an account and return a signed token for it."""
        if self.users.find_one({"email": payload.email}):
            raise ConflictError(f"Email {payload.email} is already registered")

        document = payload.model_dump()
        document.update(password=hash_password(payload.password), createdAt=utcnow())
        user = self.users.insert(document)
        return create_access_token(user["_id"], self.settings)

    def login(self, payload: LoginRequest) -> str:
        user = self.users.find_one({"email": payload.email})
        if user is None or not verify_password(payload.password, user.get("password", "")):
            raise UnauthorizedError("Invalid credentials")
        return create_access_token(user["_id"], self.settings)

    def current_user(self, token: str) -> Dict[str, Any]:
        """
        Resolve a bearer token to the user it was issued for.

        Raises:
            UnauthorizedError: If the token is invalid or the user is gone
        """
        claims = decode_access_token(token, self.settings)
        user = self.users.get(claims["id"])
        if user is None:
            raise UnauthorizedError()
        return public_user(user)

    def update_details(
        self, user: Dict[str, Any], payload: UpdateDetailsRequest
    ) -> Dict[str, Any]:
        patch = payload.model_dump(exclude_unset=True)
        if patch.get("email") and patch["email"] != user.get("email"):
            if self.users.find_one({"email": patch["email"]}):
                raise ConflictError(f"Email {patch['email']} is already registered")

        updated = self.users.update(user["_id"], patch)
        if updated is None:
            raise NotFoundError.for_resource("User", user["_id"])
        return public_user(updated)

    def update_password(
        self, user: Dict[str, Any], payload: UpdatePasswordRequest
    ) -> str:
        """Change the password after checking the current one; returns a fresh token."""
        stored = self.users.get(user["_id"])
        if stored is None:
            raise NotFoundError.for_resource("User", user["_id"])
        if not verify_password(payload.currentPassword, stored.get("password", "")):
            raise UnauthorizedError("Password is incorrect")

        self.users.update(user["_id"], {"password": hash_password(payload.newPassword)})
        return create_access_token(user["_id"], self.settings)
