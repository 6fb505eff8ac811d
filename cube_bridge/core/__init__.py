"""Core interfaces, models and errors for the Cube.js bridge."""

from cube_bridge.core.interfaces import (
    IRequestClient,
    ISchemaExtractor,
    IQueryTranslator,
    IQueryExecutor,
    IFieldStore,
    IMetricCatalog,
)
from cube_bridge.core.models import (
    FieldRole,
    FieldDescriptor,
    Cube,
    StoredField,
    MetricDefinition,
    TimeDimension,
    BackendQuery,
    NativeQuery,
    TableInfo,
    TableRef,
    TableDescription,
    QueryResult,
)
from cube_bridge.core.errors import (
    CubeBridgeError,
    ConnectivityError,
    SchemaMismatchError,
    UnresolvedReferenceWarning,
)

__all__ = [
    "IRequestClient",
    "ISchemaExtractor",
    "IQueryTranslator",
    "IQueryExecutor",
    "IFieldStore",
    "IMetricCatalog",
    "FieldRole",
    "FieldDescriptor",
    "Cube",
    "StoredField",
    "MetricDefinition",
    "TimeDimension",
    "BackendQuery",
    "NativeQuery",
    "TableInfo",
    "TableRef",
    "TableDescription",
    "QueryResult",
    "CubeBridgeError",
    "ConnectivityError",
    "SchemaMismatchError",
    "UnresolvedReferenceWarning",
]
