"""
Bootcamp service: the parent entity of courses and reviews.
"""

import logging
from typing import Any, Dict, List

from bootcamp_api.core.errors import BadRequestError, NotFoundError
from bootcamp_api.core.interfaces import IGeocoder, IRepository
from bootcamp_api.core.models import PopulateSpec
from bootcamp_api.core.schemas import BootcampCreate, BootcampUpdate
from bootcamp_api.services.common import ensure_owner, slugify, utcnow

logger = logging.getLogger(__name__)

COURSES_POPULATE = PopulateSpec(
    collection="courses",
    local_field="_id",
    foreign_field="bootcamp",
    as_field="courses",
    just_one=False,
)

EARTH_RADIUS_MILES = 3963


class BootcampService:
    """Bootcamp CRUD with geocoded addresses, radius search and cascading delete."""

    def __init__(
        self,
        bootcamps: IRepository,
        courses: IRepository,
        reviews: IRepository,
        geocoder: IGeocoder,
    ):
        self.bootcamps = bootcamps
        self.courses = courses
        self.reviews = reviews
        self.geocoder = geocoder

    def get(self, bootcamp_id: str) -> Dict[str, Any]:
        bootcamp = self.bootcamps.get(bootcamp_id, populate=[COURSES_POPULATE])
        if bootcamp is None:
            raise NotFoundError.for_resource("Bootcamp", bootcamp_id)
        return bootcamp

    def create(self, payload: BootcampCreate, user: Dict[str, Any]) -> Dict[str, Any]:
        document = payload.model_dump()
        document.update(
            slug=slugify(payload.name),
            location=self._locate(payload.address),
            user=user["_id"],
            createdAt=utcnow(),
        )
        return self.bootcamps.insert(document)

    def update(
        self, bootcamp_id: str, payload: BootcampUpdate, user: Dict[str, Any]
    ) -> Dict[str, Any]:
        bootcamp = self._get_plain(bootcamp_id)
        ensure_owner(bootcamp, user, "bootcamp")

        patch = payload.model_dump(exclude_unset=True)
        if patch.get("name"):
            patch["slug"] = slugify(patch["name"])
        if patch.get("address"):
            patch["location"] = self._locate(patch["address"])

        updated = self.bootcamps.update(bootcamp_id, patch)
        if updated is None:
            raise NotFoundError.for_resource("Bootcamp", bootcamp_id)
        return updated

    def delete(self, bootcamp_id: str, user: Dict[str, Any]) -> None:
        """Delete a bootcamp together with its courses and reviews."""
        bootcamp = self._get_plain(bootcamp_id)
        ensure_owner(bootcamp, user, "bootcamp")

        removed_courses = self.courses.delete_many({"bootcamp": bootcamp_id})
        removed_reviews = self.reviews.delete_many({"bootcamp": bootcamp_id})
        self.bootcamps.delete(bootcamp_id)

        logger.info(
            "Deleted bootcamp %s with %d courses and %d reviews",
            bootcamp_id,
            removed_courses,
            removed_reviews,
        )

    def _get_plain(self, bootcamp_id: str) -> Dict[str, Any]:
        bootcamp = self.bootcamps.get(bootcamp_id)
        if bootcamp is None:
            raise NotFoundError.for_resource("Bootcamp", bootcamp_id)
        return bootcamp

    def within_radius(self, zipcode: str, distance: float) -> List[Dict[str, Any]]:
        """
        Bootcamps within ``distance`` miles of a zipcode.

        Raises:
            NotFoundError: If the zipcode cannot be geocoded
        """
        center = self.geocoder.geocode(zipcode)
        if center is None:
            raise NotFoundError(f"No location found for zipcode {zipcode}")

        # $centerSphere takes the radius in radians
        radius = distance / EARTH_RADIUS_MILES
        return self.bootcamps.find_many(
            {
                "location": {
                    "$geoWithin": {
                        "$centerSphere": [[center.longitude, center.latitude], radius]
                    }
                }
            }
        )

    def _locate(self, address: str) -> Dict[str, Any]:
        location = self.geocoder.geocode(address)
        if location is None:
            raise BadRequestError(f"Could not geocode address '{address}'")
        return location.to_geojson()
