"""
Review service. Every confirmed write refreshes the bootcamp's average rating.
"""

from typing import Any, Dict

from bootcamp_api.aggregates.maintainer import AggregateMaintainer
from bootcamp_api.core.errors import ConflictError, NotFoundError
from bootcamp_api.core.interfaces import IRepository
from bootcamp_api.core.schemas import ReviewCreate, ReviewUpdate
from bootcamp_api.services.common import ensure_owner, utcnow
from bootcamp_api.services.courses import BOOTCAMP_SUMMARY_POPULATE


class ReviewService:
    def __init__(
        self,
        reviews: IRepository,
        bootcamps: IRepository,
        average_rating: AggregateMaintainer,
    ):
        self.reviews = reviews
        self.bootcamps = bootcamps
        self.average_rating = average_rating

    def get(self, review_id: str) -> Dict[str, Any]:
        review = self.reviews.get(review_id, populate=[BOOTCAMP_SUMMARY_POPULATE])
        if review is None:
            raise NotFoundError.for_resource("Review", review_id)
        return review

    def add(
        self, bootcamp_id: str, payload: ReviewCreate, user: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Add the user's review of a bootcamp.

        Raises:
            NotFoundError: If the bootcamp does not exist
            ConflictError: If the user already reviewed this bootcamp
        """
        if self.bootcamps.get(bootcamp_id) is None:
            raise NotFoundError.for_resource("Bootcamp", bootcamp_id)

        if self.reviews.find_one({"bootcamp": bootcamp_id, "user": user["_id"]}):
            raise ConflictError("User has already submitted a review for this bootcamp")

        document = payload.model_dump()
        document.update(bootcamp=bootcamp_id, user=user["_id"], createdAt=utcnow())
        # The unique (bootcamp, user) index still guards concurrent submissions
        review = self.reviews.insert(document)

        self.average_rating.recompute(bootcamp_id)
        return review

    def update(
        self, review_id: str, payload: ReviewUpdate, user: Dict[str, Any]
    ) -> Dict[str, Any]:
        review = self._get_plain(review_id)
        ensure_owner(review, user, "review")

        updated = self.reviews.update(review_id, payload.model_dump(exclude_unset=True))
        if updated is None:
            raise NotFoundError.for_resource("Review", review_id)

        self.average_rating.recompute(review["bootcamp"])
        return updated

    def delete(self, review_id: str, user: Dict[str, Any]) -> None:
        review = self._get_plain(review_id)
        ensure_owner(review, user, "review")

        if self.reviews.delete(review_id):
            self.average_rating.recompute(review["bootcamp"])

    def _get_plain(self, review_id: str) -> Dict[str, Any]:
        review = self.reviews.get(review_id)
        if review is None:
            raise NotFoundError.for_resource("Review", review_id)
        return review
