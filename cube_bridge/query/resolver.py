"""
Field resolution.

Maps abstract MBQL field references to Cube.js member names and roles.
"""

from typing import Any, NamedTuple, Optional

from cube_bridge.core.interfaces import IFieldStore
from cube_bridge.query.mbql import DEFAULT_UNIT, DatetimeField, FieldId

# A full-table query buckets timestamps with the "default" unit, which
# Cube.js does not accept.
DEFAULT_GRANULARITY = "day"


def to_granularity(unit: Optional[str]) -> str:
    """Translate an MBQL bucketing unit to a Cube.js granularity."""
    if not unit or unit == DEFAULT_UNIT:
        return DEFAULT_GRANULARITY
    return unit


class ResolvedField(NamedTuple):
    name: str
    role: Optional[str]
    granularity: Optional[str] = None


class FieldResolver:
    """
    Resolves field references against the host field store.

    Handles plain field IDs, breakout entries (which are plain or bucketed
    field references) and datetime-bucketed fields. Anything else resolves
    to None.
    """

    def __init__(self, field_store: IFieldStore):
        """
        Initialize field resolver.

        Args:
            field_store: Host field store indexed by field ID
        """
        self.field_store = field_store

    def resolve(self, reference: Any) -> Optional[ResolvedField]:
        """
        Resolve a reference to a member name and role.

        Args:
            reference: Parsed MBQL node

        Returns:
            Resolved field, or None when the reference is unknown
        """
        if isinstance(reference, FieldId):
            stored = self.field_store.lookup(reference.id)
            if stored is None:
                return None
            return ResolvedField(name=stored.name, role=stored.description)

        if isinstance(reference, DatetimeField):
            inner = self.resolve(reference.field)
            if inner is None:
                return None
            return ResolvedField(
                name=inner.name,
                role=inner.role,
                granularity=to_granularity(reference.unit),
            )

        return None

    def resolve_name(self, reference: Any) -> Optional[str]:
        resolved = self.resolve(reference)
        return resolved.name if resolved else None
