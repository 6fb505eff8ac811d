"""
Query execution coordinator.

Handles execution of queries through backend-specific executors.
"""

import logging
from typing import Any, Dict, List

from cube_bridge.core.interfaces import IQueryExecutor
from cube_bridge.core.models import QueryResult

logger = logging.getLogger(__name__)


class QueryExecutor:
    """
    Coordinates query execution.

    Wraps a backend-specific query executor and turns unexpected
    exceptions into failed results. No retries are attempted.
    """

    def __init__(self, executor: IQueryExecutor):
        """
        Initialize query executor.

        Args:
            executor: Backend-specific query executor implementation
        """
        self.executor = executor

    def execute(self, queries: List[Dict[str, Any]]) -> List[QueryResult]:
        """
        Execute multiple queries.

        Args:
            queries: List of backend query objects

        Returns:
            List of results
        """
        if not queries:
            return []

        try:
            return [QueryResult(**result) for result in self.executor.execute(queries)]
        except Exception as e:
            logger.exception("Query execution failed")
            return [QueryResult(error=str(e), success=False) for _ in queries]

    def execute_raw(self, query: Dict[str, Any]) -> QueryResult:
        """
        Execute a single backend query.

        Args:
            query: Backend query object

        Returns:
            Query result
        """
        try:
            return QueryResult(**self.executor.execute_raw(query))
        except Exception as e:
            logger.exception("Query execution failed")
            return QueryResult(error=str(e), success=False, metadata={"query": query})
