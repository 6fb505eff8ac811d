"""
Query tree matching.

Recovers the semantic roles of an MBQL query (measures, dimensions, time
dimensions, ordering, filters) independently of whether the query lists
fields directly or is built from aggregations and breakouts.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from cube_bridge.core.errors import UnresolvedReferenceWarning
from cube_bridge.core.models import FieldRole, TimeDimension
from cube_bridge.query.filters import FilterTranslator
from cube_bridge.query.mbql import (
    AggregationOptions,
    AggregationRef,
    DatetimeField,
    FieldId,
    GenericQuery,
    OrderBy,
)
from cube_bridge.query.resolver import FieldResolver

logger = logging.getLogger(__name__)


def _dedupe(items: List[Any]) -> List[Any]:
    """Drop repeated items, keeping the first occurrence."""
    seen = set()
    unique = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


@dataclass
class Extraction:
    """Everything recovered from one query."""

    measures: List[str] = field(default_factory=list)
    dimensions: List[str] = field(default_factory=list)
    time_dimensions: List[TimeDimension] = field(default_factory=list)
    order: Dict[str, str] = field(default_factory=dict)
    filters: List[Dict[str, Any]] = field(default_factory=list)
    warnings: List[UnresolvedReferenceWarning] = field(default_factory=list)


class QueryTreeMatcher:
    """
    Walks a parsed MBQL query and extracts its Cube.js members.

    Unresolvable references never stop the translation: they are dropped
    and reported in Extraction.warnings.
    """

    def __init__(self, resolver: FieldResolver):
        """
        Initialize query tree matcher.

        Args:
            resolver: Field resolver bound to the host field store
        """
        self.resolver = resolver
        self.filter_translator = FilterTranslator(resolver)

    def extract(self, query: GenericQuery) -> Extraction:
        """
        Extract measures, dimensions, time dimensions, order and filters.

        Args:
            query: Parsed MBQL inner query

        Returns:
            Extraction with deduplicated members
        """
        extraction = Extraction()
        aggregations = query.find_all(AggregationOptions)

        flat_fields = self._resolve_flat_fields(query, extraction.warnings)

        extraction.measures = self._get_measures(flat_fields, aggregations)
        extraction.dimensions = self._get_dimensions(query, flat_fields, extraction.warnings)
        extraction.time_dimensions = self._get_time_dimensions(query, extraction.warnings)
        extraction.order = self._get_order(query, aggregations, extraction.warnings)
        extraction.filters, filter_warnings = self.filter_translator.translate(query.filter)
        extraction.warnings.extend(filter_warnings)

        for warning in extraction.warnings:
            logger.debug("%s", warning)

        return extraction

    def _resolve_flat_fields(
        self, query: GenericQuery, warnings: List[UnresolvedReferenceWarning]
    ) -> List[Tuple[str, Optional[str]]]:
        """Resolve the plain field IDs of the "fields" clause to (name, role)."""
        resolved = []
        for reference in query.fields:
            if not isinstance(reference, FieldId):
                continue
            result = self.resolver.resolve(reference)
            if result is None:
                warnings.append(UnresolvedReferenceWarning("fields", reference))
                continue
            resolved.append((result.name, result.role))
        return resolved

    def _get_measures(
        self,
        flat_fields: List[Tuple[str, Optional[str]]],
        aggregations: List[AggregationOptions],
    ) -> List[str]:
        # Plain field lists name measures directly; metric-based queries
        # carry them as named aggregations anywhere in the tree.
        measures = [name for name, role in flat_fields if role == FieldRole.MEASURE.value]
        measures.extend(
            aggregation.display_name
            for aggregation in aggregations
            if aggregation.display_name is not None
        )
        return _dedupe(measures)

    def _get_dimensions(
        self,
        query: GenericQuery,
        flat_fields: List[Tuple[str, Optional[str]]],
        warnings: List[UnresolvedReferenceWarning],
    ) -> List[str]:
        dimensions = [
            name for name, role in flat_fields if role == FieldRole.DIMENSION.value
        ]

        # Bucketed breakouts become time dimensions instead
        for reference in query.breakout:
            if not isinstance(reference, FieldId):
                continue
            name = self.resolver.resolve_name(reference)
            if name is None:
                warnings.append(UnresolvedReferenceWarning("breakout", reference))
                continue
            dimensions.append(name)

        return _dedupe(dimensions)

    def _get_time_dimensions(
        self, query: GenericQuery, warnings: List[UnresolvedReferenceWarning]
    ) -> List[TimeDimension]:
        time_dimensions = []
        for reference in query.find_all(DatetimeField):
            resolved = self.resolver.resolve(reference)
            if resolved is None:
                warnings.append(UnresolvedReferenceWarning("time-dimension", reference))
                continue
            time_dimensions.append(
                TimeDimension(dimension=resolved.name, granularity=resolved.granularity)
            )
        return _dedupe(time_dimensions)

    def _get_order(
        self,
        query: GenericQuery,
        aggregations: List[AggregationOptions],
        warnings: List[UnresolvedReferenceWarning],
    ) -> Dict[str, str]:
        order: Dict[str, str] = {}
        for entry in query.order_by:
            if not isinstance(entry, OrderBy):
                warnings.append(UnresolvedReferenceWarning("order-by", entry))
                continue

            name = self._order_name(entry.reference, aggregations)
            if name is None:
                warnings.append(UnresolvedReferenceWarning("order-by", entry.reference))
                continue
            order[name] = entry.direction
        return order

    def _order_name(
        self, reference: Any, aggregations: List[AggregationOptions]
    ) -> Optional[str]:
        if isinstance(reference, AggregationRef):
            # Ordinals count named aggregations only
            names = [a.display_name for a in aggregations if a.display_name is not None]
            if 0 <= reference.index < len(names):
                return names[reference.index]
            return None
        return self.resolver.resolve_name(reference)
