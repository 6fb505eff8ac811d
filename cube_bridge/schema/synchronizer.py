"""
Metric synchronization.

Registers every discovered Cube.js measure as a metric in the host catalog.
"""

import logging
from typing import Iterable, List

from cube_bridge.core.interfaces import IMetricCatalog
from cube_bridge.core.models import FieldDescriptor, MetricDefinition

logger = logging.getLogger(__name__)


class MetricSynchronizer:
    """
    One-way reconciliation of measures into the metric catalog.

    Missing metrics are inserted; existing ones are never updated or deleted.
    """

    DEFAULT_AGGREGATION = [["count"]]

    def __init__(self, catalog: IMetricCatalog, creator_id: int):
        """
        Initialize metric synchronizer.

        Args:
            catalog: Host metric catalog
            creator_id: System-actor identity recorded as creator of new metrics
        """
        self.catalog = catalog
        self.creator_id = creator_id

    def sync(
        self, table_id: int, measures: Iterable[FieldDescriptor]
    ) -> List[MetricDefinition]:
        """
        Insert a metric for every measure the table does not have yet.

        Args:
            table_id: Host identifier of the table
            measures: Discovered measures of the table's cube

        Returns:
            The metrics inserted by this call (empty on a repeated run)
        """
        known = {metric.name for metric in self.catalog.retrieve_all(table_id)}
        inserted: List[MetricDefinition] = []

        for measure in measures:
            if measure.name in known:
                continue

            metric = MetricDefinition(
                table_id=table_id,
                creator_id=self.creator_id,
                name=measure.name,
                description=measure.description,
                definition={
                    "source-table": table_id,
                    "aggregation": [list(agg) for agg in self.DEFAULT_AGGREGATION],
                },
            )
            self.catalog.insert(metric)
            known.add(measure.name)
            inserted.append(metric)
            logger.info("Registered metric '%s' for table %s", measure.name, table_id)

        return inserted
