from typing import Any, Dict, List, Tuple

from fastapi import APIRouter, Depends

from bootcamp_api.container import ServiceContainer
from bootcamp_api.core.schemas import UserCreate, UserUpdate
from bootcamp_api.routes.dependencies import authorize, get_container, query_pairs

# Every user-administration route is admin only
router = APIRouter(
    prefix="/users", tags=["Users"], dependencies=[Depends(authorize("admin"))]
)


@router.get("")
def get_users(
    pairs: List[Tuple[str, str]] = Depends(query_pairs),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    return container.listings["users"].run(pairs).to_response()


@router.get("/{user_id}")
def get_user(
    user_id: str, container: ServiceContainer = Depends(get_container)
) -> Dict[str, Any]:
    return {"success": True, "data": container.users.get(user_id)}


@router.post("", status_code=201)
def create_user(
    payload: UserCreate, container: ServiceContainer = Depends(get_container)
) -> Dict[str, Any]:
    return {"success": True, "data": container.users.create(payload)}


@router.put("/{user_id}")
def update_user(
    user_id: str,
    payload: UserUpdate,
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    return {"success": True, "data": container.users.update(user_id, payload)}


@router.delete("/{user_id}")
def delete_user(
    user_id: str, container: ServiceContainer = Depends(get_container)
) -> Dict[str, Any]:
    container.users.delete(user_id)
    return {"success": True, "data": {}}
