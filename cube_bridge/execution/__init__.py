"""Query execution and result formatting."""

from cube_bridge.execution.executor import QueryExecutor
from cube_bridge.execution.result_formatter import ResultFormatter

__all__ = ["QueryExecutor", "ResultFormatter"]
