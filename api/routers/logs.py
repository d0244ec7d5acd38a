"""Activity log endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_activity_log, get_store
from core.constants import DEFAULT_LOG_LIMIT, MAX_LIST_LIMIT
from core.models.api.responses import LogsResponse
from core.services import ActivityLog
from core.storage import KVStore

router = APIRouter(tags=["logs"])


@router.get("/logs", response_model=LogsResponse)
async def list_logs(
    _: Annotated[KVStore, Depends(get_store)],
    activity: Annotated[ActivityLog, Depends(get_activity_log)],
    limit: Annotated[int, Query(ge=0, le=MAX_LIST_LIMIT)] = DEFAULT_LOG_LIMIT,
    category: str | None = None,
) -> LogsResponse:
    """Most recent entries first, optionally for one category."""
    return LogsResponse(logs=await activity.list_entries(limit, category))
