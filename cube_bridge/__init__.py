"""
Cube Bridge - MBQL to Cube.js REST API translation.

Main entry point for creating drivers bound to a Cube.js deployment.
"""

from cube_bridge.config import CubeConfig
from cube_bridge.orchestrator import CubeDriver

__all__ = ["CubeConfig", "CubeDriver"]
