"""
Abstract interfaces for the Cube.js bridge.

These protocols define the contracts between the translation core and the
collaborators it is wired to: the HTTP transport, schema discovery, query
translation and execution, and the host's field store and metric catalog.
"""

from typing import Any, Dict, List, Optional, Protocol

from cube_bridge.core.models import (
    Cube,
    MetricDefinition,
    NativeQuery,
    StoredField,
)


class IRequestClient(Protocol):
    """
    Issue authenticated requests against the Cube.js REST API.
    """

    def make_request(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Send a request and return the decoded JSON body.

        Args:
            path: API path relative to the base URL (e.g. "v1/meta")
            params: Optional query string parameters
            json_body: Optional JSON body; when given the request is a POST

        Returns:
            Decoded JSON body

        Raises:
            ConnectivityError: On transport failure, bad status or malformed body
        """
        ...


class ISchemaExtractor(Protocol):
    """
    Discover the cubes exposed by the backend.
    """

    def fetch_cubes(self) -> List[Cube]:
        """
        Fetch every cube with its normalized measures and dimensions.

        Returns:
            List of cubes, regenerated on each call

        Raises:
            ConnectivityError: If the metadata endpoint cannot be read
        """
        ...


class IQueryTranslator(Protocol):
    """
    Translate a generic MBQL query into a backend-native query.
    """

    def translate(self, query: Dict[str, Any]) -> NativeQuery:
        """
        Convert an MBQL inner query into the backend's query shape.

        Args:
            query: MBQL inner query ("source-table", "fields", "breakout", ...)

        Returns:
            Native query wrapping the backend request
        """
        ...


class IQueryExecutor(Protocol):
    """
    Execute native queries and return normalized results.
    """

    def execute(self, queries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Execute multiple backend queries.

        Args:
            queries: List of backend query objects

        Returns:
            List of result dictionaries with format:
            {
                "total_hits": int,
                "documents": [...],
                "error": str,  # Optional, if execution failed
                "success": bool,
                "metadata": {...},
            }
        """
        ...

    def execute_raw(self, query: Dict[str, Any]) -> Dict[str, Any]:
        """
        Execute a single backend query.

        Args:
            query: Backend query object

        Returns:
            Result dictionary with same format as execute()
        """
        ...


class IFieldStore(Protocol):
    """
    Query-time field store owned by the host query engine.
    """

    def lookup(self, field_id: int) -> Optional[StoredField]:
        """
        Look up a field by its opaque identifier.

        Args:
            field_id: Identifier assigned by the host

        Returns:
            Stored field (name and role tag) or None if unknown
        """
        ...


class IMetricCatalog(Protocol):
    """
    Host catalog of derived-metric definitions.
    """

    def retrieve_all(self, table_id: int) -> List[MetricDefinition]:
        """Return every metric registered for a table."""
        ...

    def insert(self, metric: MetricDefinition) -> None:
        """Persist a new metric definition."""
        ...
