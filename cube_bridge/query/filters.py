"""
MBQL filter translation.

Converts an MBQL filter clause to Cube.js filter objects
({"member", "operator", "values"}), the way the other translators turn
conditions into backend clauses.
"""

from typing import Any, Dict, List, Optional, Tuple

from cube_bridge.core.errors import UnresolvedReferenceWarning
from cube_bridge.query.mbql import Clause, DatetimeField
from cube_bridge.query.resolver import FieldResolver

# MBQL operator -> Cube.js operator, for clauses of the form [op, field, *values]
VALUE_OPERATORS = {
    "=": "equals",
    "!=": "notEquals",
    ">": "gt",
    "<": "lt",
    ">=": "gte",
    "<=": "lte",
    "contains": "contains",
    "does-not-contain": "notContains",
    "starts-with": "startsWith",
    "ends-with": "endsWith",
}

# MBQL operator -> Cube.js operator, for clauses of the form [op, field]
UNARY_OPERATORS = {
    "is-null": "notSet",
    "not-null": "set",
}


def _to_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FilterTranslator:
    """
    Translates MBQL filters to Cube.js filters.

    Unsupported operators and unresolvable members are dropped; each drop
    is reported as an UnresolvedReferenceWarning.
    """

    def __init__(self, resolver: FieldResolver):
        self.resolver = resolver

    def translate(
        self, filter_clause: Any
    ) -> Tuple[List[Dict[str, Any]], List[UnresolvedReferenceWarning]]:
        """
        Translate a whole filter clause.

        A top-level "and" is flattened, since Cube.js combines the entries of
        its filter list with AND.

        Args:
            filter_clause: Parsed MBQL filter (or None)

        Returns:
            Tuple of (Cube.js filters, warnings for dropped parts)
        """
        warnings: List[UnresolvedReferenceWarning] = []
        if filter_clause is None:
            return [], warnings

        if isinstance(filter_clause, Clause) and filter_clause.tag == "and":
            parts = list(filter_clause.args)
        else:
            parts = [filter_clause]

        filters = []
        for part in parts:
            translated = self._translate_condition(part, warnings)
            if translated:
                filters.append(translated)
        return filters, warnings

    def _translate_condition(
        self, condition: Any, warnings: List[UnresolvedReferenceWarning]
    ) -> Optional[Dict[str, Any]]:
        """Translate a single condition to a Cube.js filter object."""
        if not isinstance(condition, Clause):
            warnings.append(UnresolvedReferenceWarning("filter", condition))
            return None

        operator = condition.tag

        if operator in ("and", "or"):
            nested = [self._translate_condition(arg, warnings) for arg in condition.args]
            nested = [item for item in nested if item]
            if not nested:
                return None
            return nested[0] if len(nested) == 1 else {operator: nested}

        if not condition.args:
            warnings.append(UnresolvedReferenceWarning("filter", condition))
            return None

        reference, values = condition.args[0], list(condition.args[1:])
        member = self.resolver.resolve_name(reference)
        if member is None:
            warnings.append(UnresolvedReferenceWarning("filter", reference))
            return None

        if operator in UNARY_OPERATORS:
            return {"member": member, "operator": UNARY_OPERATORS[operator]}

        if operator in VALUE_OPERATORS and values:
            # String operators carry a trailing options map ({"case-sensitive": ...})
            values = [value for value in values if not isinstance(value, dict)]
            return {
                "member": member,
                "operator": VALUE_OPERATORS[operator],
                "values": [_to_value(value) for value in values],
            }

        if operator == "between" and len(values) == 2:
            low, high = (_to_value(value) for value in values)
            if isinstance(reference, DatetimeField):
                return {"member": member, "operator": "inDateRange", "values": [low, high]}
            return {
                "and": [
                    {"member": member, "operator": "gte", "values": [low]},
                    {"member": member, "operator": "lte", "values": [high]},
                ]
            }

        warnings.append(UnresolvedReferenceWarning("filter", condition))
        return None
