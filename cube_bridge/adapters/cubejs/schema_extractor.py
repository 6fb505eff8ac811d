"""
Cube.js schema extraction.

Implements ISchemaExtractor for the Cube.js metadata endpoint.
"""

from typing import Any, Dict, List

from pydantic import ValidationError

from cube_bridge.core.errors import ConnectivityError
from cube_bridge.core.interfaces import IRequestClient
from cube_bridge.core.models import Cube, FieldDescriptor, FieldRole
from cube_bridge.schema.type_mappings import TypeMapper


class CubeSchemaExtractor:
    """
    Extracts cubes, measures and dimensions from Cube.js.

    Every call issues a fresh metadata request; caching, if any, belongs
    to the host catalog.
    """

    META_PATH = "v1/meta"

    def __init__(self, client: IRequestClient):
        """
        Initialize Cube.js schema extractor.

        Args:
            client: Request client bound to a Cube.js deployment
        """
        self.client = client

    def fetch_cubes(self) -> List[Cube]:
        """
        Fetch every cube from the metadata endpoint.

        Returns:
            List of normalized cubes

        Raises:
            ConnectivityError: If the request fails or the body has no cube list
        """
        body = self.client.make_request(self.META_PATH)
        raw_cubes = body.get("cubes")

        if not isinstance(raw_cubes, list):
            raise ConnectivityError("Metadata response has no 'cubes' list")

        try:
            return [self._normalize_cube(raw_cube) for raw_cube in raw_cubes]
        except (AttributeError, KeyError, TypeError, ValidationError) as e:
            raise ConnectivityError(f"Malformed cube in metadata response: {e}") from e

    def _normalize_cube(self, raw_cube: Dict[str, Any]) -> Cube:
        return Cube(
            name=raw_cube["name"],
            title=raw_cube.get("title"),
            schema_name=raw_cube.get("schema"),
            measures=self.process_fields(raw_cube.get("measures") or [], FieldRole.MEASURE),
            dimensions=self.process_fields(
                raw_cube.get("dimensions") or [], FieldRole.DIMENSION
            ),
        )

    @staticmethod
    def process_fields(
        fields: List[Dict[str, Any]], role: FieldRole
    ) -> List[FieldDescriptor]:
        """
        Normalize the members of a "measures" or "dimensions" block.

        Args:
            fields: Raw Cube.js members ({name, type, description, ...})
            role: Role tag attached to every member of the block

        Returns:
            List of field descriptors
        """
        descriptors = []
        for field in fields:
            cube_type = field.get("type") or ""
            descriptors.append(
                FieldDescriptor(
                    name=field["name"],
                    database_type=cube_type,
                    role=role,
                    description=field.get("description"),
                    base_type=TypeMapper.get_base_type(cube_type),
                    special_type=TypeMapper.get_special_type(cube_type),
                )
            )
        return descriptors
