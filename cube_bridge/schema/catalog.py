"""
In-memory field store and metric catalog.

Default implementations of IFieldStore and IMetricCatalog for hosts that do
not bring their own. Not synchronized: callers sharing an instance across
threads must serialize access themselves.
"""

from typing import Any, Dict, Iterable, List, Optional

from cube_bridge.core.models import MetricDefinition, StoredField


class InMemoryFieldStore:
    """
    Field store keyed by integer field IDs.

    Implements the IFieldStore interface.
    """

    def __init__(self, fields: Optional[Dict[int, StoredField]] = None):
        self._fields: Dict[int, StoredField] = dict(fields or {})

    def lookup(self, field_id: int) -> Optional[StoredField]:
        return self._fields.get(field_id)

    def add(self, field_id: int, name: str, description: Optional[str] = None) -> None:
        """Register a field under an explicit identifier."""
        self._fields[field_id] = StoredField(name=name, description=description)

    def register(self, table_fields: Iterable[Dict[str, Any]]) -> Dict[str, int]:
        """
        Register described table fields under fresh identifiers.

        The field comment (role tag) is stored as the field description,
        the way a host persists the output of table description.

        Args:
            table_fields: Fields from TableDescription.fields

        Returns:
            Mapping of field name to assigned identifier
        """
        next_id = max(self._fields, default=0) + 1
        assigned: Dict[str, int] = {}
        for table_field in table_fields:
            self.add(next_id, table_field["name"], table_field.get("field_comment"))
            assigned[table_field["name"]] = next_id
            next_id += 1
        return assigned

    def __len__(self) -> int:
        return len(self._fields)


class InMemoryMetricCatalog:
    """
    Append-only metric catalog.

    Implements the IMetricCatalog interface.
    """

    def __init__(self):
        self._metrics: List[MetricDefinition] = []

    def retrieve_all(self, table_id: int) -> List[MetricDefinition]:
        return [metric for metric in self._metrics if metric.table_id == table_id]

    def insert(self, metric: MetricDefinition) -> None:
        self._metrics.append(metric)

    def __len__(self) -> int:
        return len(self._metrics)
