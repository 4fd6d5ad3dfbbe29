"""
Bootcamp API - bootcamp directory backed by MongoDB.

Main entry points: the advanced-results orchestrator for filtered, paginated
listings and the aggregate maintainer for denormalized bootcamp averages.
"""

from bootcamp_api.aggregates import AggregateMaintainer
from bootcamp_api.orchestrator import ResultsOrchestrator

__all__ = ["AggregateMaintainer", "ResultsOrchestrator"]
