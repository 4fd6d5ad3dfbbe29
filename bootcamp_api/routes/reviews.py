from typing import Any, Dict, List, Tuple

from fastapi import APIRouter, Depends

from bootcamp_api.container import ServiceContainer
from bootcamp_api.core.schemas import ReviewCreate, ReviewUpdate
from bootcamp_api.routes.dependencies import authorize, get_container, query_pairs

router = APIRouter(tags=["Reviews"])


@router.get("/reviews")
def get_reviews(
    pairs: List[Tuple[str, str]] = Depends(query_pairs),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    return container.listings["reviews"].run(pairs).to_response()


@router.get("/bootcamps/{bootcamp_id}/reviews")
def get_bootcamp_reviews(
    bootcamp_id: str,
    pairs: List[Tuple[str, str]] = Depends(query_pairs),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    envelope = container.listings["reviews"].run(pairs, scope={"bootcamp": bootcamp_id})
    return envelope.to_response(include_pagination=False)


@router.get("/reviews/{review_id}")
def get_review(
    review_id: str, container: ServiceContainer = Depends(get_container)
) -> Dict[str, Any]:
    return {"success": True, "data": container.reviews.get(review_id)}


@router.post("/bootcamps/{bootcamp_id}/reviews", status_code=201)
def add_review(
    bootcamp_id: str,
    payload: ReviewCreate,
    user: Dict[str, Any] = Depends(authorize("user", "admin")),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    return {"success": True, "data": container.reviews.add(bootcamp_id, payload, user)}


@router.put("/reviews/{review_id}")
def update_review(
    review_id: str,
    payload: ReviewUpdate,
    user: Dict[str, Any] = Depends(authorize("user", "admin")),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    return {"success": True, "data": container.reviews.update(review_id, payload, user)}


@router.delete("/reviews/{review_id}")
def delete_review(
    review_id: str,
    user: Dict[str, Any] = Depends(authorize("user", "admin")),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    container.reviews.delete(review_id, user)
    return {"success": True, "data": {}}
