"""Pytest configuration and fixtures."""

import pytest

from cube_bridge.adapters.cubejs import CubeClient, CubeQueryTranslator
from cube_bridge.config import CubeConfig
from cube_bridge.core.models import StoredField
from cube_bridge.query.matcher import QueryTreeMatcher
from cube_bridge.query.resolver import FieldResolver
from cube_bridge.schema.catalog import InMemoryFieldStore, InMemoryMetricCatalog

BASE_URL = "http://cube.test/cubejs-api"

META_BODY = {
    "cubes": [
        {
            "name": "orders",
            "title": "Orders",
            "measures": [
                {"name": "count", "type": "number", "description": "Number of orders"},
                {"name": "total_revenue", "type": "number"},
            ],
            "dimensions": [
                {"name": "status", "type": "string", "description": "Order status"},
                {"name": "created_at", "type": "time"},
                {"name": "is_paid", "type": "boolean"},
            ],
        },
        {
            "name": "users",
            "schema": "public",
            "measures": [{"name": "count", "type": "number"}],
            "dimensions": [{"name": "city", "type": "string"}],
        },
    ]
}


@pytest.fixture
def config():
    return CubeConfig(base_url=BASE_URL + "/", api_token="secret", system_actor_id=7)


@pytest.fixture
def client(config):
    return CubeClient(config)


@pytest.fixture
def field_store():
    """Field store as the host fills it after describing the "orders" table."""
    return InMemoryFieldStore(
        {
            1: StoredField(name="count", description="measure"),
            2: StoredField(name="total_revenue", description="measure"),
            3: StoredField(name="status", description="dimension"),
            4: StoredField(name="created_at", description="dimension"),
            5: StoredField(name="is_paid", description="dimension"),
        }
    )


@pytest.fixture
def metric_catalog():
    return InMemoryMetricCatalog()


@pytest.fixture
def resolver(field_store):
    return FieldResolver(field_store)


@pytest.fixture
def matcher(resolver):
    return QueryTreeMatcher(resolver)


@pytest.fixture
def translator(field_store):
    return CubeQueryTranslator(field_store)


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def meta_body():
    return META_BODY
