"""Configuration record endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_config_service
from core.models.api.responses import ConfigResponse, ConfigUpdatedResponse
from core.services import ConfigService

router = APIRouter(prefix="/config", tags=["config"])


@router.get("", response_model=ConfigResponse)
async def get_config(
    service: Annotated[ConfigService, Depends(get_config_service)],
) -> ConfigResponse:
    return ConfigResponse(config=await service.get())


@router.put("", response_model=ConfigUpdatedResponse)
async def put_config(
    request: Request,
    service: Annotated[ConfigService, Depends(get_config_service)],
) -> ConfigUpdatedResponse:
    """Replace the stored configuration with the request body as sent."""
    body = (await request.body()).decode("utf-8", errors="replace")
    await service.put(body)
    return ConfigUpdatedResponse()
