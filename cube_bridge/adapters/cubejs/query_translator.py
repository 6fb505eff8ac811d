"""
Cube.js query translator.

Converts MBQL inner queries to Cube.js load queries.
"""

from typing import Any, Dict

from cube_bridge.core.interfaces import IFieldStore
from cube_bridge.core.models import NativeQuery
from cube_bridge.query.builder import BackendQueryBuilder
from cube_bridge.query.matcher import QueryTreeMatcher
from cube_bridge.query.mbql import GenericQuery
from cube_bridge.query.resolver import FieldResolver


class CubeQueryTranslator:
    """
    Translates MBQL to the Cube.js query format.

    Implements the IQueryTranslator interface for Cube.js.
    """

    def __init__(self, field_store: IFieldStore):
        """
        Initialize Cube.js query translator.

        Args:
            field_store: Host field store used to resolve field IDs
        """
        self.resolver = FieldResolver(field_store)
        self.matcher = QueryTreeMatcher(self.resolver)
        self.builder = BackendQueryBuilder()

    def translate(self, query: Dict[str, Any]) -> NativeQuery:
        """
        Convert an MBQL inner query to a Cube.js query.

        Args:
            query: MBQL inner query

        Returns:
            Native query holding the Cube.js JSON query and a description of
            every reference dropped along the way
        """
        parsed = GenericQuery.parse(query)
        extraction = self.matcher.extract(parsed)

        backend_query = self.builder.build(extraction, limit=parsed.limit)

        return NativeQuery(
            query=backend_query.to_wire(),
            aggregation=bool(parsed.aggregation),
            warnings=[str(warning) for warning in extraction.warnings],
        )
