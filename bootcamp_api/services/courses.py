"""
Course service. Every confirmed write refreshes the bootcamp's average cost.
"""

from typing import Any, Dict

from bootcamp_api.aggregates.maintainer import AggregateMaintainer
from bootcamp_api.core.errors import NotFoundError
from bootcamp_api.core.interfaces import IRepository
from bootcamp_api.core.models import PopulateSpec
from bootcamp_api.core.schemas import CourseCreate, CourseUpdate
from bootcamp_api.services.common import ensure_owner, utcnow

BOOTCAMP_SUMMARY_POPULATE = PopulateSpec(
    collection="bootcamps",
    local_field="bootcamp",
    select=["name", "description"],
)


class CourseService:
    def __init__(
        self,
        courses: IRepository,
        bootcamps: IRepository,
        average_cost: AggregateMaintainer,
    ):
        self.courses = courses
        self.bootcamps = bootcamps
        self.average_cost = average_cost

    def get(self, course_id: str) -> Dict[str, Any]:
        course = self.courses.get(course_id, populate=[BOOTCAMP_SUMMARY_POPULATE])
        if course is None:
            raise NotFoundError.for_resource("Course", course_id)
        return course

    def add(
        self, bootcamp_id: str, payload: CourseCreate, user: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Add a course to an existing bootcamp owned by the user.

        Raises:
            NotFoundError: If the bootcamp does not exist; nothing is written
            ForbiddenError: If the user neither owns the bootcamp nor is admin
        """
        bootcamp = self.bootcamps.get(bootcamp_id)
        if bootcamp is None:
            raise NotFoundError.for_resource("Bootcamp", bootcamp_id)
        ensure_owner(bootcamp, user, "bootcamp")

        document = payload.model_dump()
        document.update(bootcamp=bootcamp_id, user=user["_id"], createdAt=utcnow())
        course = self.courses.insert(document)

        self.average_cost.recompute(bootcamp_id)
        return course

    def update(
        self, course_id: str, payload: CourseUpdate, user: Dict[str, Any]
    ) -> Dict[str, Any]:
        course = self._get_plain(course_id)
        ensure_owner(course, user, "course")

        updated = self.courses.update(course_id, payload.model_dump(exclude_unset=True))
        if updated is None:
            raise NotFoundError.for_resource("Course", course_id)

        self.average_cost.recompute(course["bootcamp"])
        return updated

    def delete(self, course_id: str, user: Dict[str, Any]) -> None:
        course = self._get_plain(course_id)
        ensure_owner(course, user, "course")

        if self.courses.delete(course_id):
            self.average_cost.recompute(course["bootcamp"])

    def _get_plain(self, course_id: str) -> Dict[str, Any]:
        course = self.courses.get(course_id)
        if course is None:
            raise NotFoundError.for_resource("Course", course_id)
        return course
