"""Outbound HTTP proxy endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from api.dependencies import get_proxy_service
from api.errors import ApiError
from core.models.api.requests import ProxyRequest
from core.models.api.responses import ProxyResponse
from core.services import ProxyError, ProxyService

router = APIRouter(tags=["proxy"])


@router.post("/proxy", response_model=ProxyResponse)
async def proxy_request(
    request: ProxyRequest,
    service: Annotated[ProxyService, Depends(get_proxy_service)],
) -> ProxyResponse:
    """Perform the described request and relay the upstream response."""
    if not request.url:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "URL required")
    try:
        return await service.forward(request)
    except ProxyError as e:
        raise ApiError(status.HTTP_502_BAD_GATEWAY, str(e))
