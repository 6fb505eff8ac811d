"""
Schema extraction coordinator.

Wraps a backend schema extractor and answers table-level questions about it.
"""

from typing import List, Set

from cube_bridge.core.errors import SchemaMismatchError
from cube_bridge.core.interfaces import ISchemaExtractor
from cube_bridge.core.models import Cube, TableInfo


class SchemaExtractor:
    """
    Coordinates cube discovery.

    Nothing is cached: each call goes back to the backend so the host always
    sees the current schema.
    """

    def __init__(self, extractor: ISchemaExtractor):
        """
        Initialize schema extractor.

        Args:
            extractor: Backend-specific schema extractor implementation
        """
        self.extractor = extractor

    def get_cubes(self) -> List[Cube]:
        """Fetch every cube from the backend."""
        return self.extractor.fetch_cubes()

    def get_tables(self) -> Set[TableInfo]:
        """
        List queryable tables, one per cube.

        Returns:
            Set of table entries (name and schema)
        """
        return {
            TableInfo(name=cube.name, schema_name=cube.schema_name)
            for cube in self.get_cubes()
        }

    def get_cube(self, name: str) -> Cube:
        """
        Find the cube backing a table.

        Args:
            name: Table name

        Returns:
            The first cube with that name

        Raises:
            SchemaMismatchError: If no cube has that name
        """
        for cube in self.get_cubes():
            if cube.name == name:
                return cube
        raise SchemaMismatchError(name)
