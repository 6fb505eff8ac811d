"""
Cube.js driver - main entry point.

Coordinates discovery, metric synchronization, translation and execution.
The host wires a driver explicitly; there is no global driver registry.
"""

import logging
from typing import Any, Dict, Optional, Set

from cube_bridge.config import CubeConfig
from cube_bridge.core.errors import ConnectivityError
from cube_bridge.core.interfaces import (
    IFieldStore,
    IMetricCatalog,
    IQueryExecutor,
    IQueryTranslator,
    ISchemaExtractor,
)
from cube_bridge.core.models import (
    NativeQuery,
    QueryResult,
    TableDescription,
    TableInfo,
    TableRef,
)
from cube_bridge.execution.executor import QueryExecutor
from cube_bridge.query.translator import QueryTranslator
from cube_bridge.schema.extractor import SchemaExtractor
from cube_bridge.schema.synchronizer import MetricSynchronizer

logger = logging.getLogger(__name__)


class CubeDriver:
    """
    Driver bridging MBQL queries and the Cube.js REST API.

    Lifecycle per table: describe_table() (discovery and metric sync) must
    have run, and the host must have stored the returned fields, before
    queries on that table can resolve their field references.
    """

    # Cube.js computes aggregations itself from predefined measures
    FEATURES: Dict[str, bool] = {
        "basic-aggregations": False,
    }

    def __init__(
        self,
        schema_extractor: ISchemaExtractor,
        query_translator: IQueryTranslator,
        query_executor: IQueryExecutor,
        metric_catalog: IMetricCatalog,
        system_actor_id: int = 1,
    ):
        """
        Initialize the driver with its collaborators.

        Args:
            schema_extractor: Backend schema extractor
            query_translator: Backend query translator
            query_executor: Backend query executor
            metric_catalog: Host metric catalog
            system_actor_id: Creator identity recorded on synced metrics
        """
        self.schema_extractor = SchemaExtractor(schema_extractor)
        self.query_translator = QueryTranslator(query_translator)
        self.query_executor = QueryExecutor(query_executor)
        self.metric_synchronizer = MetricSynchronizer(metric_catalog, system_actor_id)

    @classmethod
    def from_cubejs(
        cls,
        config: CubeConfig,
        field_store: IFieldStore,
        metric_catalog: IMetricCatalog,
    ) -> "CubeDriver":
        """
        Create a driver for a Cube.js deployment.

        Args:
            config: Connection configuration
            field_store: Host field store used to resolve field IDs
            metric_catalog: Host metric catalog

        Returns:
            Configured CubeDriver
        """
        from cube_bridge.adapters.cubejs import (
            CubeClient,
            CubeSchemaExtractor,
            CubeQueryTranslator,
            CubeQueryExecutor,
        )

        client = CubeClient(config)

        return cls(
            schema_extractor=CubeSchemaExtractor(client),
            query_translator=CubeQueryTranslator(field_store),
            query_executor=CubeQueryExecutor(client, config),
            metric_catalog=metric_catalog,
            system_actor_id=config.system_actor_id,
        )

    def supports(self, feature: str) -> bool:
        """Whether the backend supports a host query feature."""
        return self.FEATURES.get(feature, False)

    def can_connect(self) -> bool:
        """
        Check that the metadata endpoint answers with a cube list.

        Returns:
            True if cubes could be fetched
        """
        try:
            self.schema_extractor.get_cubes()
        except ConnectivityError as e:
            logger.warning("Cannot connect to Cube.js: %s", e)
            return False
        return True

    def describe_database(self) -> Dict[str, Set[TableInfo]]:
        """
        List the tables of the database, one per cube.

        Returns:
            {"tables": set of table entries}
        """
        return {"tables": self.schema_extractor.get_tables()}

    def describe_table(self, table: TableRef) -> TableDescription:
        """
        Describe a table and register its measures as metrics.

        Args:
            table: Host reference to the table

        Returns:
            Table description with measures then dimensions

        Raises:
            SchemaMismatchError: If no cube is named like the table
            ConnectivityError: If the metadata endpoint cannot be read
        """
        cube = self.schema_extractor.get_cube(table.name)
        self.metric_synchronizer.sync(table.id, cube.measures)

        return TableDescription(
            name=cube.name,
            schema_name=cube.schema_name,
            fields=[field.to_table_field() for field in cube.fields],
        )

    def mbql_to_native(self, query: Dict[str, Any]) -> NativeQuery:
        """
        Translate an MBQL query to a Cube.js query.

        Args:
            query: MBQL query (outer or inner)

        Returns:
            Native query
        """
        return self.query_translator.translate(query)

    def execute_query(self, native: NativeQuery) -> QueryResult:
        """
        Execute a translated query.

        Args:
            native: Native query from mbql_to_native()

        Returns:
            Query result
        """
        return self.query_executor.execute_raw(native.query)

    def query(self, query: Dict[str, Any], execute: bool = True) -> Dict[str, Any]:
        """
        Translate an MBQL query and optionally execute it.

        Args:
            query: MBQL query
            execute: If True, execute the query and return results

        Returns:
            Dictionary with the native query and optionally its result
        """
        native = self.mbql_to_native(query)
        response: Dict[str, Any] = {"native_query": native}

        if execute:
            response["result"] = self.execute_query(native)

        return response
