"""
Query translation coordinator.

Delegates translation to backend-specific translators.
"""

import logging
from typing import Any, Dict

from cube_bridge.core.interfaces import IQueryTranslator
from cube_bridge.core.models import NativeQuery

logger = logging.getLogger(__name__)


class QueryTranslator:
    """
    Coordinates query translation from MBQL to backend queries.

    This class wraps a backend-specific query translator and provides
    common pre/post-processing logic.
    """

    def __init__(self, translator: IQueryTranslator):
        """
        Initialize query translator.

        Args:
            translator: Backend-specific query translator implementation
        """
        self.translator = translator

    def translate(self, query: Dict[str, Any]) -> NativeQuery:
        """
        Translate an MBQL query to a native query.

        Accepts either an inner query or an outer query holding it under
        the "query" key.

        Args:
            query: MBQL query

        Returns:
            Native query
        """
        inner_query = query["query"] if isinstance(query.get("query"), dict) else query

        logger.debug("MBQL: %s", inner_query)
        native = self.translator.translate(inner_query)
        logger.debug("Native query: %s", native.query)

        return native
