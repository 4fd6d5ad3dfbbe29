from typing import Any, Dict

from fastapi import APIRouter, Depends

from bootcamp_api.container import ServiceContainer
from bootcamp_api.core.schemas import (
    LoginRequest,
    RegisterRequest,
    UpdateDetailsRequest,
    UpdatePasswordRequest,
)
from bootcamp_api.routes.dependencies import get_container, get_current_user

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", status_code=201)
def register(
    payload: RegisterRequest, container: ServiceContainer = Depends(get_container)
) -> Dict[str, Any]:
    return {"success": True, "token": container.auth.register(payload)}


@router.post("/login")
def login(
    payload: LoginRequest, container: ServiceContainer = Depends(get_container)
) -> Dict[str, Any]:
    return {"success": True, "token": container.auth.login(payload)}


@router.get("/me")
def get_me(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    return {"success": True, "data": user}


@router.put("/updatedetails")
def update_details(
    payload: UpdateDetailsRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    return {"success": True, "data": container.auth.update_details(user, payload)}


@router.put("/updatepassword")
def update_password(
    payload: UpdatePasswordRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    return {"success": True, "token": container.auth.update_password(user, payload)}
