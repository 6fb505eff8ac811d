"""
Connection configuration for the Cube.js bridge.

Reads configuration from environment variables by default:
- CUBEJS_BASE_URL: Base URL of the Cube.js API (e.g. "http://localhost:4000/cubejs-api")
- CUBEJS_API_TOKEN: Token sent in the Authorization header
- CUBEJS_TIMEOUT: Request timeout in seconds
- CUBEJS_SYSTEM_ACTOR_ID: Host user ID recorded as creator of synced metrics
- CUBEJS_MAX_WAIT_ATTEMPTS: Polls allowed while Cube.js answers "Continue wait"
- CUBEJS_WAIT_INTERVAL: Seconds between those polls
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class CubeConfig(BaseModel):
    """Configuration for the Cube.js REST API connection."""

    base_url: str
    api_token: Optional[str] = None
    timeout: float = 30.0
    system_actor_id: int = 1
    max_wait_attempts: int = Field(default=10, ge=1)
    wait_interval: float = Field(default=1.0, ge=0.0)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Normalize the base URL so paths can be appended with a single slash."""
        return value.rstrip("/")

    @classmethod
    def from_env(cls, **overrides) -> "CubeConfig":
        """
        Build configuration from the environment (and a .env file if present).

        Args:
            **overrides: Values taking precedence over the environment

        Returns:
            Populated configuration

        Raises:
            ValueError: If no base URL is configured
        """
        load_dotenv()

        values = {
            "base_url": os.getenv("CUBEJS_BASE_URL"),
            "api_token": os.getenv("CUBEJS_API_TOKEN"),
            "timeout": os.getenv("CUBEJS_TIMEOUT"),
            "system_actor_id": os.getenv("CUBEJS_SYSTEM_ACTOR_ID"),
            "max_wait_attempts": os.getenv("CUBEJS_MAX_WAIT_ATTEMPTS"),
            "wait_interval": os.getenv("CUBEJS_WAIT_INTERVAL"),
        }
        values.update(overrides)
        # Unset and empty variables both fall back to the defaults
        values = {key: value for key, value in values.items() if value not in (None, "")}

        if not values.get("base_url"):
            raise ValueError(
                "Cube.js base URL is required. "
                "Set CUBEJS_BASE_URL or pass base_url explicitly."
            )

        return cls(**values)
