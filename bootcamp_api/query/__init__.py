"""Query building and translation components."""

from bootcamp_api.query.filter_builder import FilterCriteriaBuilder
from bootcamp_api.query.translator import QueryTranslator

__all__ = ["FilterCriteriaBuilder", "QueryTranslator"]
