"""
Cube.js query assembly.
"""

from typing import Any, Dict, List, Optional

from cube_bridge.core.models import BackendQuery
from cube_bridge.query.matcher import Extraction


class BackendQueryBuilder:
    """
    Assembles an extraction into a Cube.js query.

    No cross-field validation happens here: a partially resolved query
    still yields a best-effort request.
    """

    @staticmethod
    def build(
        extraction: Extraction,
        limit: Optional[int] = None,
        filters: Optional[List[Dict[str, Any]]] = None,
    ) -> BackendQuery:
        """
        Build the backend query.

        Args:
            extraction: Members recovered from the source query
            limit: Row limit of the source query; 0 is a real limit
            filters: Cube.js filters, defaults to the extraction's filters

        Returns:
            Backend query; serialize with to_wire() to drop empty keys
        """
        return BackendQuery(
            measures=list(extraction.measures),
            dimensions=list(extraction.dimensions),
            time_dimensions=list(extraction.time_dimensions),
            order=dict(extraction.order),
            filters=list(extraction.filters if filters is None else filters),
            limit=limit,
        )
