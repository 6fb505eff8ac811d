"""
Shared data models for the Cube.js bridge.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FieldRole(str, Enum):
    """Role of a cube member, stored by the host as the field description."""

    MEASURE = "measure"
    DIMENSION = "dimension"


class FieldDescriptor(BaseModel):
    """A normalized cube member (measure or dimension)."""

    model_config = ConfigDict(frozen=True)

    name: str
    database_type: str  # Cube.js declared type: string, number, time, boolean, ...
    role: FieldRole
    description: Optional[str] = None
    base_type: str = "type/*"
    special_type: Optional[str] = None  # type/CreationTime for Cube "time" members

    def to_table_field(self) -> Dict[str, Any]:
        """
        Return the descriptor as a table field for the host.

        The role is exposed as the field comment and the description is
        dropped, so the host can store the role as the field description.
        """
        table_field: Dict[str, Any] = {
            "name": self.name,
            "database_type": self.database_type,
            "field_comment": self.role.value,
            "base_type": self.base_type,
        }
        if self.special_type:
            table_field["special_type"] = self.special_type
        return table_field


class Cube(BaseModel):
    """A backend-exposed queryable entity, roughly a table."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    title: Optional[str] = None
    schema_name: Optional[str] = Field(default=None, alias="schema")
    measures: List[FieldDescriptor] = Field(default_factory=list)
    dimensions: List[FieldDescriptor] = Field(default_factory=list)

    @property
    def fields(self) -> List[FieldDescriptor]:
        """Measures followed by dimensions."""
        return [*self.measures, *self.dimensions]


class StoredField(BaseModel):
    """Field as known by the host field store."""

    name: str
    description: Optional[str] = None  # role tag: "measure" or "dimension"


class MetricDefinition(BaseModel):
    """A derived measure persisted in the host catalog."""

    table_id: int
    creator_id: int
    name: str
    description: Optional[str] = None
    definition: Dict[str, Any] = Field(default_factory=dict)


class TimeDimension(BaseModel):
    """A dimension bucketed by a time granularity."""

    model_config = ConfigDict(frozen=True)

    dimension: str
    granularity: str


class BackendQuery(BaseModel):
    """
    A Cube.js load query.

    Empty collections are kept on the model but never serialized: the
    wire format requires absent keys instead of empty ones.
    """

    measures: List[str] = Field(default_factory=list)
    dimensions: List[str] = Field(default_factory=list)
    time_dimensions: List[TimeDimension] = Field(default_factory=list)
    order: Dict[str, str] = Field(default_factory=dict)
    filters: List[Dict[str, Any]] = Field(default_factory=list)
    limit: Optional[int] = None

    def to_wire(self) -> Dict[str, Any]:
        """
        Serialize to the Cube.js JSON query shape.

        Returns:
            Dictionary holding only the non-empty keys
        """
        wire: Dict[str, Any] = {}
        if self.measures:
            wire["measures"] = list(self.measures)
        if self.dimensions:
            wire["dimensions"] = list(self.dimensions)
        if self.time_dimensions:
            wire["timeDimensions"] = [td.model_dump() for td in self.time_dimensions]
        if self.order:
            wire["order"] = dict(self.order)
        if self.filters:
            wire["filters"] = [dict(f) for f in self.filters]
        if self.limit is not None:
            wire["limit"] = self.limit
        return wire


class NativeQuery(BaseModel):
    """Translated query handed to the executor."""

    query: Dict[str, Any]
    aggregation: bool = False  # the source query carried an aggregation clause
    mbql: bool = True
    warnings: List[str] = Field(default_factory=list)  # references dropped in translation


class TableInfo(BaseModel):
    """Table entry returned by database description."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    schema_name: Optional[str] = Field(default=None, alias="schema")


class TableRef(BaseModel):
    """Host-side reference to a table being described."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    schema_name: Optional[str] = Field(default=None, alias="schema")


class TableDescription(BaseModel):
    """Field inventory of a described table."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    schema_name: Optional[str] = Field(default=None, alias="schema")
    fields: List[Dict[str, Any]] = Field(default_factory=list)


class QueryResult(BaseModel):
    """Standardized query result format."""

    total_hits: int = 0
    documents: List[Dict[str, Any]] = Field(default_factory=list)
    aggregations: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    success: bool = True
    metadata: Dict[str, Any] = Field(default_factory=dict)
