"""Tests for metric synchronization."""

from cube_bridge.core.models import FieldDescriptor, FieldRole, MetricDefinition
from cube_bridge.schema.catalog import InMemoryFieldStore, InMemoryMetricCatalog
from cube_bridge.schema.synchronizer import MetricSynchronizer


def measure(name, description=None):
    return FieldDescriptor(
        name=name, database_type="number", role=FieldRole.MEASURE, description=description
    )


def test_sync_inserts_missing_metrics(metric_catalog):
    synchronizer = MetricSynchronizer(metric_catalog, creator_id=7)

    inserted = synchronizer.sync(10, [measure("count", "Number of orders"), measure("revenue")])

    assert [metric.name for metric in inserted] == ["count", "revenue"]
    assert inserted[0] == MetricDefinition(
        table_id=10,
        creator_id=7,
        name="count",
        description="Number of orders",
        definition={"source-table": 10, "aggregation": [["count"]]},
    )
    assert metric_catalog.retrieve_all(10) == inserted


def test_sync_is_idempotent(metric_catalog):
    synchronizer = MetricSynchronizer(metric_catalog, creator_id=1)
    measures = [measure("count"), measure("revenue")]

    synchronizer.sync(10, measures)
    second = synchronizer.sync(10, measures)

    assert second == []
    assert len(metric_catalog.retrieve_all(10)) == 2


def test_sync_only_fills_gaps_and_never_updates(metric_catalog):
    existing = MetricDefinition(
        table_id=10, creator_id=99, name="count", description="custom", definition={}
    )
    metric_catalog.insert(existing)

    inserted = MetricSynchronizer(metric_catalog, creator_id=1).sync(
        10, [measure("count", "changed"), measure("revenue")]
    )

    assert [metric.name for metric in inserted] == ["revenue"]
    assert metric_catalog.retrieve_all(10)[0] == existing


def test_sync_is_scoped_per_table(metric_catalog):
    synchronizer = MetricSynchronizer(metric_catalog, creator_id=1)

    synchronizer.sync(10, [measure("count")])
    inserted = synchronizer.sync(11, [measure("count")])

    assert len(inserted) == 1
    assert len(metric_catalog) == 2


def test_duplicate_measures_in_one_run_insert_once():
    catalog = InMemoryMetricCatalog()

    MetricSynchronizer(catalog, creator_id=1).sync(10, [measure("count"), measure("count")])

    assert len(catalog) == 1


def test_field_store_register_assigns_ids():
    store = InMemoryFieldStore()
    store.add(1, "existing", "dimension")

    assigned = store.register(
        [
            measure("count").to_table_field(),
            {"name": "status", "database_type": "string", "field_comment": "dimension"},
        ]
    )

    assert assigned == {"count": 2, "status": 3}
    assert store.lookup(2).description == "measure"
    assert store.lookup(3).name == "status"
    assert len(store) == 3
