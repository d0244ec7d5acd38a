"""Outbound HTTP proxy."""

import json
from typing import Any

import httpx

from core.log import get_logger
from core.models.api.requests import ProxyRequest
from core.models.api.responses import ProxyResponse
from core.utils import loads_or_raw

from .activity_log import ActivityLog

logger = get_logger(__name__)


class ProxyError(Exception):
    """Raised when the upstream request could not be completed."""


class ProxyService:
    """Forwards requests to arbitrary URLs and relays the response."""

    def __init__(self, activity: ActivityLog, timeout: float = 30.0) -> None:
        self.activity = activity
        self.timeout = timeout
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "ProxyService":
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start(self) -> None:
        """Open the pooled HTTP client."""
        if self.client is None:
            self.client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            )

    async def close(self) -> None:
        """Close the HTTP client; safe to call more than once."""
        if self.client:
            await self.client.aclose()
            self.client = None

    async def forward(self, request: ProxyRequest) -> ProxyResponse:
        """Perform ``request`` and return the upstream status, headers and body.

        Upstream error statuses are relayed as-is; only transport failures
        raise.

        Raises:
            ValueError: If no URL was given
            ProxyError: If the request could not be completed
        """
        if not self.client:
            raise RuntimeError("Client not initialized. Call start() first.")
        if not request.url:
            raise ValueError("URL required")

        method = request.method.upper()
        headers = dict(request.headers)
        content = None
        if request.data is not None:
            content = json.dumps(request.data)
            headers.setdefault("Content-Type", "application/json")

        try:
            response = await self.client.request(
                method, request.url, headers=headers, content=content
            )
        except httpx.TimeoutException as e:
            logger.error(f"Timeout proxying {method} {request.url}")
            raise ProxyError(f"Timeout: {e}") from e
        except httpx.HTTPError as e:
            logger.error(f"Request error proxying {method} {request.url}: {e}")
            raise ProxyError(f"Request failed: {e}") from e

        await self.activity.log(
            "proxy", f"{method} {request.url} -> {response.status_code}"
        )
        return ProxyResponse(
            status=response.status_code,
            headers=dict(response.headers),
            data=loads_or_raw(response.text),
        )
