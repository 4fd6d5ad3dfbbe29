from typing import Any, Dict, List, Tuple

from fastapi import APIRouter, Depends

from bootcamp_api.container import ServiceContainer
from bootcamp_api.core.schemas import CourseCreate, CourseUpdate
from bootcamp_api.routes.dependencies import authorize, get_container, query_pairs

router = APIRouter(tags=["Courses"])


@router.get("/courses")
def get_courses(
    pairs: List[Tuple[str, str]] = Depends(query_pairs),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    return container.listings["courses"].run(pairs).to_response()


@router.get("/bootcamps/{bootcamp_id}/courses")
def get_bootcamp_courses(
    bootcamp_id: str,
    pairs: List[Tuple[str, str]] = Depends(query_pairs),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    """All courses of one bootcamp; the response carries no pagination block."""
    envelope = container.listings["courses"].run(pairs, scope={"bootcamp": bootcamp_id})
    return envelope.to_response(include_pagination=False)


@router.get("/courses/{course_id}")
def get_course(
    course_id: str, container: ServiceContainer = Depends(get_container)
) -> Dict[str, Any]:
    return {"success": True, "data": container.courses.get(course_id)}


@router.post("/bootcamps/{bootcamp_id}/courses", status_code=201)
def add_course(
    bootcamp_id: str,
    payload: CourseCreate,
    user: Dict[str, Any] = Depends(authorize("publisher", "admin")),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    return {"success": True, "data": container.courses.add(bootcamp_id, payload, user)}


@router.put("/courses/{course_id}")
def update_course(
    course_id: str,
    payload: CourseUpdate,
    user: Dict[str, Any] = Depends(authorize("publisher", "admin")),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    return {"success": True, "data": container.courses.update(course_id, payload, user)}


@router.delete("/courses/{course_id}")
def delete_course(
    course_id: str,
    user: Dict[str, Any] = Depends(authorize("publisher", "admin")),
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    container.courses.delete(course_id, user)
    return {"success": True, "data": {}}
