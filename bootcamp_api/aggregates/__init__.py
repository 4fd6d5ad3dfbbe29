"""Denormalized aggregate maintenance."""

from bootcamp_api.aggregates.maintainer import (
    AVERAGE_COST,
    AVERAGE_RATING,
    AggregateMaintainer,
    AggregateSpec,
    round_two_places,
    round_up_to_ten,
)

__all__ = [
    "AVERAGE_COST",
    "AVERAGE_RATING",
    "AggregateMaintainer",
    "AggregateSpec",
    "round_two_places",
    "round_up_to_ten",
]
