from typing import Any, Dict, List, Tuple

from fastapi import APIRouter, Depends, Path

from bootcamp_api.container import ServiceContainer
from bootcamp_api.core.schemas import BootcampCreate, BootcampUpdate
from bootcamp_api.routes.dependencies import authorize, get_container, query_pairs

router = APIRouter(tags=["Bootcamps"])


@router.get("/bootcamps")
def get_bootcamps(
    pairs: List[Tuple[str, str]] = Depends(query_pairs),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    """List bootcamps with filtering, selection, sorting and pagination."""
    return container.listings["bootcamps"].run(pairs).to_response()


@router.get("/bootcamps/radius/{zipcode}/{distance}")
def get_bootcamps_in_radius(
    zipcode: str,
    distance: float = Path(gt=0, description="Radius in miles"),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    bootcamps = container.bootcamps.within_radius(zipcode, distance)
    return {"success": True, "count": len(bootcamps), "data": bootcamps}


@router.get("/bootcamps/{bootcamp_id}")
def get_bootcamp(
    bootcamp_id: str, container: ServiceContainer = Depends(get_container)
) -> Dict[str, Any]:
    return {"success": True, "data": container.bootcamps.get(bootcamp_id)}


@router.post("/bootcamps", status_code=201)
def create_bootcamp(
    payload: BootcampCreate,
    user: Dict[str, Any] = Depends(authorize("publisher", "admin")),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    return {"success": True, "data": container.bootcamps.create(payload, user)}


@router.put("/bootcamps/{bootcamp_id}")
def update_bootcamp(
    bootcamp_id: str,
    payload: BootcampUpdate,
    user: Dict[str, Any] = Depends(authorize("publisher", "admin")),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    return {"success": True, "data": container.bootcamps.update(bootcamp_id, payload, user)}


@router.delete("/bootcamps/{bootcamp_id}")
def delete_bootcamp(
    bootcamp_id: str,
    user: Dict[str, Any] = Depends(authorize("publisher", "admin")),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    container.bootcamps.delete(bootcamp_id, user)
    return {"success": True, "data": {}}
