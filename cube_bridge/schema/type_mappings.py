"""
Type mapping utilities for converting Cube.js member types to semantic base types.
"""

from typing import Dict, Optional


class TypeMapper:
    """Maps Cube.js declared types to host semantic types."""

    # The Cube.js type carrying timestamps
    CUBEJS_TIME_TYPE = "time"

    CREATION_TIME_TYPE = "type/CreationTime"

    UNKNOWN_BASE_TYPE = "type/*"

    CUBEJS_TYPE_MAP: Dict[str, str] = {
        "string": "type/Text",
        "number": "type/Float",
        "boolean": "type/Boolean",
        "time": "type/DateTime",
    }

    @classmethod
    def get_base_type(cls, cube_type: Optional[str]) -> str:
        """
        Get the semantic base type for a Cube.js member type.

        Args:
            cube_type: Declared Cube.js type (string, number, boolean, time)

        Returns:
            Semantic base type, "type/*" when the type is unknown
        """
        if not cube_type:
            return cls.UNKNOWN_BASE_TYPE
        return cls.CUBEJS_TYPE_MAP.get(cube_type.lower(), cls.UNKNOWN_BASE_TYPE)

    @classmethod
    def get_special_type(cls, cube_type: Optional[str]) -> Optional[str]:
        """Tag Cube.js time members as creation-time fields."""
        if cube_type and cube_type.lower() == cls.CUBEJS_TIME_TYPE:
            return cls.CREATION_TIME_TYPE
        return None

    @classmethod
    def is_time_type(cls, cube_type: Optional[str]) -> bool:
        return cls.get_special_type(cube_type) is not None
