"""Query execution and result formatting."""

from bootcamp_api.execution.executor import QueryExecutor
from bootcamp_api.execution.result_formatter import ResultFormatter

__all__ = ["QueryExecutor", "ResultFormatter"]
