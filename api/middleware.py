"""Request tracking middleware for the arni API."""

from typing import Any, Callable

from fastapi import Request

from core.log import get_logger
from core.services.traffic_tracker import TrafficTracker

logger = get_logger(__name__)


class RequestTrackingMiddleware:
    """Counts every HTTP request in the daily traffic record.

    The API key header is read and logged but never enforced.
    """

    def __init__(self, app: Callable[..., Any], api_key_header: str) -> None:
        self.app = app
        self.api_key_header = api_key_header

    async def __call__(
        self,
        scope: dict[str, Any],
        receive: Callable[..., Any],
        send: Callable[..., Any],
    ) -> None:
        """Track the request, then pass it through unchanged."""
        # Early exit for non-HTTP requests
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        if not request.headers.get(self.api_key_header):
            logger.debug(f"No {self.api_key_header} on {request.url.path}")

        tracker: TrafficTracker | None = getattr(
            request.app.state, "traffic_tracker", None
        )
        if tracker is not None:
            await tracker.track(request.url.path)

        await self.app(scope, receive, send)
