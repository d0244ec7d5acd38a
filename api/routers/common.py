"""Status, health and dashboard endpoints."""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from api.dependencies import (
    get_activity_log,
    get_aggregator,
    get_optional_store,
    get_settings,
    get_traffic_tracker,
    get_window_service,
)
from core import get_logger
from core.config import Settings
from core.constants import AGENT_NAME
from core.models.api.responses import HealthResponse, PingResponse, StatsResponse
from core.services import (
    ActivityLog,
    TrafficTracker,
    UsageAggregator,
    WindowAccountingService,
)
from core.services.dashboard import ENDPOINT_SECTIONS, build_dashboard_context
from core.storage import KVStore
from core.utils import get_current_timestamp, now_ms

logger = get_logger(__name__)

router = APIRouter(tags=["common"])

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=TEMPLATES_DIR)


@router.get("/", response_class=HTMLResponse)
async def root(
    request: Request, settings: Annotated[Settings, Depends(get_settings)]
) -> HTMLResponse:
    """Status page listing the available endpoints."""
    return templates.TemplateResponse(
        request,
        "status.html",
        {
            "title": settings.api_title,
            "agent": AGENT_NAME,
            "version": settings.version,
            "sections": ENDPOINT_SECTIONS,
        },
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Annotated[Settings, Depends(get_settings)],
    store: Annotated[KVStore | None, Depends(get_optional_store)],
    activity: Annotated[ActivityLog, Depends(get_activity_log)],
) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        agent=AGENT_NAME,
        timestamp=get_current_timestamp(),
        version=settings.version,
        kv="connected" if store is not None else "not bound",
        stats=await activity.get_counters(),
    )


@router.get("/api/ping", response_model=PingResponse)
async def ping() -> PingResponse:
    return PingResponse(time=now_ms())


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    activity: Annotated[ActivityLog, Depends(get_activity_log)],
) -> StatsResponse:
    """Named counters; empty when no store is bound."""
    return StatsResponse(stats=await activity.get_counters())


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    aggregator: Annotated[UsageAggregator, Depends(get_aggregator)],
    tracker: Annotated[TrafficTracker, Depends(get_traffic_tracker)],
    window_service: Annotated[WindowAccountingService, Depends(get_window_service)],
) -> HTMLResponse:
    """Usage analytics page."""
    context = build_dashboard_context(
        stats=await aggregator.get_stats(),
        traffic=await tracker.get_today(),
        window=await window_service.get_window(),
    )
    return templates.TemplateResponse(request, "dashboard.html", context)
