"""
MBQL expression tree.

Parses the nested list form of an MBQL inner query into tagged node types
and provides a depth-first search over the resulting tree.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Unit the host sends when the user picked no explicit bucket
DEFAULT_UNIT = "default"

NodeT = TypeVar("NodeT", bound="Node")


class Node(BaseModel):
    """Base class of every parsed MBQL clause."""

    model_config = ConfigDict(frozen=True)

    def children(self) -> Iterator[Any]:
        """Yield sub-expressions in source order."""
        return iter(())


class FieldId(Node):
    """["field-id", id]"""

    id: int


class DatetimeField(Node):
    """["datetime-field", field, unit]"""

    field: Any
    unit: Optional[str] = None

    def children(self) -> Iterator[Any]:
        yield self.field


class AggregationOptions(Node):
    """["aggregation-options", aggregation, {"display-name": ...}]"""

    aggregation: Any
    display_name: Optional[str] = None

    def children(self) -> Iterator[Any]:
        yield self.aggregation


class AggregationRef(Node):
    """["aggregation", index]: points at the index-th aggregation, 0-based."""

    index: int


class OrderBy(Node):
    """["asc" | "desc", reference]"""

    direction: str
    reference: Any

    def children(self) -> Iterator[Any]:
        yield self.reference


class Clause(Node):
    """Any other tagged clause (aggregations, filters, expressions, ...)."""

    tag: str
    args: Tuple[Any, ...] = ()

    def children(self) -> Iterator[Any]:
        return iter(self.args)


def normalize_tag(tag: str) -> str:
    """MBQL tags are case-insensitive and accept snake_case."""
    return tag.strip().lower().replace("_", "-")


def _options(value: List[Any], position: int) -> Dict[str, Any]:
    if len(value) > position and isinstance(value[position], dict):
        return value[position]
    return {}


def parse_clause(value: Any) -> Any:
    """
    Parse an MBQL value into nodes.

    Args:
        value: A clause vector, a list of clauses, or a literal

    Returns:
        A Node for tagged vectors, a list for untagged lists, the value
        itself for literals. The input is never modified.
    """
    if isinstance(value, (list, tuple)):
        if not value or not isinstance(value[0], str):
            return [parse_clause(item) for item in value]
        return _parse_tagged(normalize_tag(value[0]), list(value))
    return value


def _parse_tagged(tag: str, value: List[Any]) -> Node:
    if tag == "field-id" and len(value) > 1 and isinstance(value[1], int):
        return FieldId(id=value[1])

    if tag == "field" and len(value) > 1 and isinstance(value[1], int):
        # Newer MBQL: ["field", id, {"temporal-unit": "month"}]
        options = _options(value, 2)
        unit = options.get("temporal-unit")
        if unit:
            return DatetimeField(field=FieldId(id=value[1]), unit=unit)
        return FieldId(id=value[1])

    if tag == "datetime-field" and len(value) > 1:
        # Legacy ["datetime-field", field, "as", unit] carries the unit last too
        unit = value[-1] if len(value) > 2 and isinstance(value[-1], str) else None
        return DatetimeField(field=parse_clause(value[1]), unit=unit)

    if tag == "aggregation-options" and len(value) > 1:
        options = _options(value, 2)
        return AggregationOptions(
            aggregation=parse_clause(value[1]),
            display_name=options.get("display-name"),
        )

    if tag == "aggregation" and len(value) > 1 and isinstance(value[1], int):
        return AggregationRef(index=value[1])

    if tag in ("asc", "desc") and len(value) > 1:
        return OrderBy(direction=tag, reference=parse_clause(value[1]))

    return Clause(tag=tag, args=tuple(parse_clause(arg) for arg in value[1:]))


def find_all(tree: Any, node_type: Type[NodeT]) -> List[NodeT]:
    """
    Collect every node of a type, depth-first and pre-order.

    Args:
        tree: A node, a list of nodes, or a literal
        node_type: Node class to look for

    Returns:
        Matches in traversal order
    """
    matches: List[NodeT] = []
    stack = [tree]
    while stack:
        current = stack.pop()
        if isinstance(current, Node):
            if isinstance(current, node_type):
                matches.append(current)
            stack.extend(reversed(list(current.children())))
        elif isinstance(current, list):
            stack.extend(reversed(current))
    return matches


class GenericQuery(BaseModel):
    """
    An MBQL inner query.

    Clauses are parsed on construction; the raw input is left untouched.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    source_table: Optional[int] = Field(default=None, alias="source-table")
    fields: List[Any] = Field(default_factory=list)
    breakout: List[Any] = Field(default_factory=list)
    aggregation: List[Any] = Field(default_factory=list)
    filter: Optional[Any] = None
    order_by: List[Any] = Field(default_factory=list, alias="order-by")
    limit: Optional[int] = None

    @field_validator("fields", "breakout", "aggregation", "order_by", mode="before")
    @classmethod
    def parse_clause_list(cls, value: Any) -> List[Any]:
        if value is None:
            return []
        parsed = parse_clause(value)
        return parsed if isinstance(parsed, list) else [parsed]

    @field_validator("filter", mode="before")
    @classmethod
    def parse_filter(cls, value: Any) -> Any:
        return parse_clause(value) if value is not None else None

    @classmethod
    def parse(cls, query: Dict[str, Any]) -> "GenericQuery":
        """Parse an MBQL inner query dictionary (kebab-case or snake_case keys)."""
        return cls.model_validate({key.replace("_", "-"): value for key, value in query.items()})

    def walk_order(self) -> List[Any]:
        """Clauses in the order tree searches visit them."""
        return [self.fields, self.breakout, self.aggregation, self.filter, self.order_by]

    def find_all(self, node_type: Type[NodeT]) -> List[NodeT]:
        """Search the whole query for nodes of a type."""
        return find_all(self.walk_order(), node_type)
