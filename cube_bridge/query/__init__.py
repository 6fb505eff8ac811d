"""MBQL parsing, field resolution and Cube.js query translation."""

from cube_bridge.query.mbql import GenericQuery, find_all, parse_clause
from cube_bridge.query.resolver import DEFAULT_GRANULARITY, FieldResolver, ResolvedField
from cube_bridge.query.filters import FilterTranslator
from cube_bridge.query.matcher import Extraction, QueryTreeMatcher
from cube_bridge.query.builder import BackendQueryBuilder
from cube_bridge.query.translator import QueryTranslator

__all__ = [
    "GenericQuery",
    "find_all",
    "parse_clause",
    "DEFAULT_GRANULARITY",
    "FieldResolver",
    "ResolvedField",
    "FilterTranslator",
    "Extraction",
    "QueryTreeMatcher",
    "BackendQueryBuilder",
    "QueryTranslator",
]
