"""
Cube.js REST API client.

Thin wrapper over a requests session that turns every transport problem
into a ConnectivityError.
"""

import logging
from typing import Any, Dict, Optional

import requests

from cube_bridge.config import CubeConfig
from cube_bridge.core.errors import ConnectivityError

logger = logging.getLogger(__name__)


class CubeClient:
    """
    Issues authenticated requests to the Cube.js REST API.

    Implements the IRequestClient interface.
    """

    def __init__(self, config: CubeConfig, session: Optional[requests.Session] = None):
        """
        Initialize Cube.js client.

        Args:
            config: Connection configuration
            session: Optional pre-built session (shared connection pool)
        """
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if config.api_token:
            self.session.headers.update({"Authorization": config.api_token})

    def url(self, path: str) -> str:
        return f"{self.config.base_url}/{path.lstrip('/')}"

    def make_request(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Send a request and return the decoded JSON body.

        Args:
            path: API path relative to the base URL (e.g. "v1/meta")
            params: Optional query string parameters
            json_body: Optional JSON body; when given the request is a POST

        Returns:
            Decoded JSON object

        Raises:
            ConnectivityError: On transport failure, bad status or malformed body
        """
        url = self.url(path)
        method = "POST" if json_body is not None else "GET"

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json_body,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise ConnectivityError(f"Cannot connect to {url}: {e}") from e

        if not response.ok:
            logger.warning("Request to %s returned HTTP %s", url, response.status_code)
            raise ConnectivityError(
                f"{method} {url} returned HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ConnectivityError(f"Malformed JSON body from {url}") from e

        if not isinstance(body, dict):
            raise ConnectivityError(f"Unexpected body from {url}: {type(body).__name__}")

        return body
