"""
Cube.js query executor.

Executes Cube.js load queries and returns normalized results.
"""

import logging
import time
from typing import Any, Callable, Dict, List

from cube_bridge.config import CubeConfig
from cube_bridge.core.errors import ConnectivityError
from cube_bridge.core.interfaces import IRequestClient

logger = logging.getLogger(__name__)


class CubeQueryExecutor:
    """
    Executes Cube.js queries.

    Implements the IQueryExecutor interface for Cube.js.
    """

    LOAD_PATH = "v1/load"

    # Cube.js answers with this error while the query is still running
    CONTINUE_WAIT = "Continue wait"

    def __init__(
        self,
        client: IRequestClient,
        config: CubeConfig,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize Cube.js query executor.

        Args:
            client: Request client bound to a Cube.js deployment
            config: Connection configuration (wait attempts and interval)
            sleep: Function used to wait between polls
        """
        self.client = client
        self.config = config
        self.sleep = sleep

    def execute(self, queries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Execute multiple Cube.js queries.

        Args:
            queries: List of Cube.js query objects

        Returns:
            List of result dictionaries
        """
        if not queries:
            return []

        return [self.execute_raw(query) for query in queries]

    def execute_raw(self, query: Dict[str, Any]) -> Dict[str, Any]:
        """
        Execute a single Cube.js query.

        Args:
            query: Cube.js query object

        Returns:
            Result dictionary
        """
        for attempt in range(1, self.config.max_wait_attempts + 1):
            try:
                body = self.client.make_request(self.LOAD_PATH, json_body={"query": query})
            except ConnectivityError as e:
                return self._error_result(str(e), query)

            error = body.get("error")
            if error == self.CONTINUE_WAIT:
                logger.debug("Query still running (attempt %s)", attempt)
                if attempt < self.config.max_wait_attempts:
                    self.sleep(self.config.wait_interval)
                continue
            if error:
                return self._error_result(str(error), query)

            documents = body.get("data") or []
            return {
                "total_hits": len(documents),
                "documents": documents,
                "success": True,
                "metadata": {
                    "query": query,
                    "annotation": body.get("annotation", {}),
                },
            }

        return self._error_result(
            f"Query did not finish after {self.config.max_wait_attempts} attempts", query
        )

    @staticmethod
    def _error_result(error: str, query: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "total_hits": 0,
            "documents": [],
            "error": error,
            "success": False,
            "metadata": {"query": query},
        }
