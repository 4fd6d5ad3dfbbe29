"""
Derived aggregate maintenance.

Bootcamps carry denormalized averages of their courses' tuition and their
reviews' rating. The service layer calls ``recompute`` after every confirmed
child write; the aggregate is best-effort and never fails the request that
triggered it.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional

from pydantic import BaseModel

from bootcamp_api.core.interfaces import IAggregateStore

logger = logging.getLogger(__name__)


def round_up_to_ten(value: float) -> float:
    """Round up to the nearest multiple of 10 (average cost)."""
    return float(math.ceil(value / 10) * 10)


def round_two_places(value: float) -> float:
    """Round half-up to two decimal places (average rating)."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class AggregateSpec(BaseModel):
    """Which child field feeds which parent field, and how it is rounded."""

    child_collection: str
    parent_collection: str
    parent_field: str
    value_field: str
    target_field: str
    rounding: Callable[[float], float]


AVERAGE_COST = AggregateSpec(
    child_collection="courses",
    parent_collection="bootcamps",
    parent_field="bootcamp",
    value_field="tuition",
    target_field="averageCost",
    rounding=round_up_to_ten,
)

AVERAGE_RATING = AggregateSpec(
    child_collection="reviews",
    parent_collection="bootcamps",
    parent_field="bootcamp",
    value_field="rating",
    target_field="averageRating",
    rounding=round_two_places,
)


class AggregateMaintainer:
    """
    Recomputes one denormalized aggregate on a parent document.
    """

    def __init__(self, store: IAggregateStore, spec: AggregateSpec):
        """
        Args:
            store: Grouping and write-back primitives
            spec: Child/parent field mapping and rounding policy
        """
        self.store = store
        self.spec = spec

    def recompute(self, parent_id: str) -> Optional[float]:
        """
        Recompute the aggregate for one parent and write it back.

        The field is unset when the parent has no children left. Failures are
        logged and swallowed; a missed recomputation leaves the value stale
        until the next contributing write.

        Args:
            parent_id: Id of the parent whose children changed

        Returns:
            The value written, or None if the field was unset or the
            recomputation failed
        """
        spec = self.spec
        try:
            mean = self.store.average(
                spec.child_collection, spec.parent_field, parent_id, spec.value_field
            )

            if mean is None:
                self.store.unset_field(spec.parent_collection, parent_id, spec.target_field)
                logger.info("Cleared %s on %s %s", spec.target_field, spec.parent_collection, parent_id)
                return None

            value = spec.rounding(mean)
            self.store.set_field(spec.parent_collection, parent_id, spec.target_field, value)
            logger.info(
                "Set %s=%s on %s %s", spec.target_field, value, spec.parent_collection, parent_id
            )
            return value
        except Exception:
            logger.exception(
                "Failed to recompute %s for %s %s",
                spec.target_field,
                spec.parent_collection,
                parent_id,
            )
            return None
