"""Cube.js adapter for the bridge."""

from cube_bridge.adapters.cubejs.client import CubeClient
from cube_bridge.adapters.cubejs.schema_extractor import CubeSchemaExtractor
from cube_bridge.adapters.cubejs.query_translator import CubeQueryTranslator
from cube_bridge.adapters.cubejs.executor import CubeQueryExecutor

__all__ = ["CubeClient", "CubeSchemaExtractor", "CubeQueryTranslator", "CubeQueryExecutor"]
