"""Schema discovery, type mapping and metric synchronization."""

from cube_bridge.schema.type_mappings import TypeMapper
from cube_bridge.schema.extractor import SchemaExtractor
from cube_bridge.schema.catalog import InMemoryFieldStore, InMemoryMetricCatalog
from cube_bridge.schema.synchronizer import MetricSynchronizer

__all__ = [
    "TypeMapper",
    "SchemaExtractor",
    "InMemoryFieldStore",
    "InMemoryMetricCatalog",
    "MetricSynchronizer",
]
