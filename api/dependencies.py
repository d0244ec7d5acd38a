"""FastAPI dependencies for the key-value store and services."""

from typing import Annotated

from fastapi import Depends, Request

from api.errors import StoreNotBoundError
from core.config import Settings
from core.log import get_logger
from core.services import (
    ActivityLog,
    ConfigService,
    MemoryService,
    NoteService,
    ProxyService,
    TaskService,
    TrafficTracker,
    UsageAggregator,
    UsageLogService,
    WebhookService,
    WindowAccountingService,
)
from core.storage import KVStore

logger = get_logger(__name__)


def get_settings(request: Request) -> Settings:
    """Get settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


# Store dependencies
def get_optional_store(request: Request) -> KVStore | None:
    """Get the bound store, or None for endpoints that degrade without one."""
    store: KVStore | None = request.app.state.store
    return store


def get_store(
    store: Annotated[KVStore | None, Depends(get_optional_store)],
) -> KVStore:
    """Get the bound store; fails the request when none is configured."""
    if store is None:
        raise StoreNotBoundError()
    return store


# Shared services
def get_activity_log(request: Request) -> ActivityLog:
    """Get activity log from app state."""
    activity: ActivityLog = request.app.state.activity
    return activity


def get_window_service(request: Request) -> WindowAccountingService:
    """Get window accounting service from app state."""
    service: WindowAccountingService = request.app.state.window_service
    return service


def get_aggregator(request: Request) -> UsageAggregator:
    """Get usage aggregator from app state."""
    aggregator: UsageAggregator = request.app.state.aggregator
    return aggregator


def get_traffic_tracker(request: Request) -> TrafficTracker:
    """Get traffic tracker from app state."""
    tracker: TrafficTracker = request.app.state.traffic_tracker
    return tracker


def get_proxy_service(request: Request) -> ProxyService:
    """Get proxy service from app state."""
    service: ProxyService = request.app.state.proxy_service
    return service


# Per-request services
def get_usage_log_service(
    store: Annotated[KVStore, Depends(get_store)],
    aggregator: Annotated[UsageAggregator, Depends(get_aggregator)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UsageLogService:
    """Get usage log service."""
    return UsageLogService(store, aggregator, settings.usage_ttl)


def get_webhook_service(
    store: Annotated[KVStore | None, Depends(get_optional_store)],
    activity: Annotated[ActivityLog, Depends(get_activity_log)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> WebhookService:
    """Get webhook service."""
    return WebhookService(
        store, activity, settings.webhook_ttl, settings.webhook_list_limit
    )


def get_task_service(
    store: Annotated[KVStore, Depends(get_store)],
    activity: Annotated[ActivityLog, Depends(get_activity_log)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TaskService:
    """Get task service."""
    return TaskService(store, activity, settings.default_list_limit)


def get_note_service(
    store: Annotated[KVStore, Depends(get_store)],
    activity: Annotated[ActivityLog, Depends(get_activity_log)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> NoteService:
    """Get note service."""
    return NoteService(store, activity, settings.default_list_limit)


def get_config_service(
    store: Annotated[KVStore, Depends(get_store)],
    activity: Annotated[ActivityLog, Depends(get_activity_log)],
) -> ConfigService:
    """Get config service."""
    return ConfigService(store, activity)


def get_memory_service(
    store: Annotated[KVStore, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> MemoryService:
    """Get memory service."""
    return MemoryService(store, settings.default_list_limit)
