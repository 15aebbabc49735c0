"""httpx-backed JSON source.

Implements JsonSourcePort with a shared httpx.AsyncClient. Transport
problems and non-2xx answers become TransportError; bodies that are not
JSON become DecodeError.
"""

import json
import logging
from typing import Any

import httpx

from domainslices.core.errors import DecodeError, TransportError
from domainslices.core.ports import JsonSourcePort

logger = logging.getLogger(__name__)


class HttpxJsonSource(JsonSourcePort):
    """Reads JSON documents from the application API via httpx."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the JSON source.

        Args:
            base_url: Base URL of the API (e.g., http://127.0.0.1:3000).
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used to substitute a
                MockTransport in tests.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "HttpxJsonSource":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.client.aclose()

    async def close(self) -> None:
        """Close the httpx client and clean up resources."""
        await self.client.aclose()

    async def get_json(self, path: str) -> Any:
        """Issue a GET request and decode the JSON body.

        Raises:
            TransportError: On connection errors, timeouts or non-2xx status.
            DecodeError: If the body is not valid JSON.
        """
        try:
            response = await self.client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"GET {path} returned HTTP {status}")
            raise TransportError(
                f"GET {path} returned HTTP {status}", status_code=status
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"GET {path} failed: {e}", exc_info=True)
            raise TransportError(f"GET {path} failed: {e}") from e

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"GET {path} returned a body that is not JSON: {e}")
            raise DecodeError(f"GET {path} returned invalid JSON: {e}") from e
