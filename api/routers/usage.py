"""Model usage logging and analytics endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from api.dependencies import (
    get_aggregator,
    get_settings,
    get_usage_log_service,
    get_window_service,
)
from core.config import Settings
from core.constants import LIVE_USAGE_LIMIT, MAX_LIST_LIMIT
from core.models.api.requests import UsageLogRequest
from core.models.api.responses import (
    UsageListResponse,
    UsageLogResponse,
    UsageStatsResponse,
    UsageWindowResponse,
)
from core.services import UsageAggregator, UsageLogService, WindowAccountingService

router = APIRouter(prefix="/usage", tags=["usage"])


@router.post("", response_model=UsageLogResponse)
async def log_usage(
    service: Annotated[UsageLogService, Depends(get_usage_log_service)],
    request: UsageLogRequest | None = None,
) -> UsageLogResponse:
    """Record one model invocation; every body field is optional."""
    event = (request or UsageLogRequest()).to_event()
    return UsageLogResponse(id=await service.log(event))


@router.get("", response_model=UsageListResponse)
async def list_usage(
    service: Annotated[UsageLogService, Depends(get_usage_log_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    limit: Annotated[int | None, Query(ge=0, le=MAX_LIST_LIMIT)] = None,
) -> UsageListResponse:
    """Most recent raw records first, each with its ``id``."""
    count = settings.default_list_limit if limit is None else limit
    return UsageListResponse(usage=await service.list_recent(count))


@router.get("/stats", response_model=UsageStatsResponse)
async def usage_stats(
    aggregator: Annotated[UsageAggregator, Depends(get_aggregator)],
) -> UsageStatsResponse:
    """Aggregated statistics; defaults when nothing is stored."""
    return UsageStatsResponse(stats=await aggregator.get_stats())


@router.get("/live", response_model=UsageListResponse)
async def live_usage(
    service: Annotated[UsageLogService, Depends(get_usage_log_service)],
) -> UsageListResponse:
    return UsageListResponse(
        usage=await service.list_recent(LIVE_USAGE_LIMIT, include_id=False)
    )


@router.get("/window", response_model=UsageWindowResponse)
async def usage_window(
    window_service: Annotated[WindowAccountingService, Depends(get_window_service)],
) -> UsageWindowResponse:
    """Rolling-window and weekly figures as of now; nothing is persisted."""
    return UsageWindowResponse(window=await window_service.get_window())
