"""API response models."""

from typing import Any

from pydantic import BaseModel, Field

from core.models.domain.usage import AggregateStats
from core.models.domain.window import ReconciledWindow


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    agent: str
    timestamp: str
    version: str
    kv: str
    stats: dict[str, Any] = Field(default_factory=dict)


class PingResponse(BaseModel):
    """Liveness probe response."""

    pong: bool = True
    time: int


class UsageLogResponse(BaseModel):
    """Response for a logged usage event."""

    logged: bool = True
    id: str


class UsageListResponse(BaseModel):
    """Raw usage records, newest first."""

    usage: list[dict[str, Any]]


class UsageStatsResponse(BaseModel):
    """Aggregated usage statistics."""

    stats: AggregateStats


class UsageWindowResponse(BaseModel):
    """Reconciled rolling-window and weekly budget figures."""

    window: ReconciledWindow


class ProxyResponse(BaseModel):
    """Result of a proxied request."""

    status: int
    headers: dict[str, str]
    data: Any = None


class ErrorResponse(BaseModel):
    """Error payload returned by every failing endpoint."""

    error: str


class StatsResponse(BaseModel):
    """Named counters from the ``stats`` record."""

    stats: dict[str, Any]


class WebhookReceivedResponse(BaseModel):
    received: bool = True
    id: str
    timestamp: str


class WebhookListResponse(BaseModel):
    """Stored webhook ids with their expiry in epoch seconds."""

    webhooks: list[dict[str, Any]]


class MemoryKeysResponse(BaseModel):
    keys: list[str]


class MemoryValueResponse(BaseModel):
    """A stored value, JSON-decoded when possible."""

    key: str
    value: Any = None


class MemoryStoredResponse(BaseModel):
    stored: bool = True
    key: str


class MemoryDeletedResponse(BaseModel):
    deleted: bool = True
    key: str


class RecordDeletedResponse(BaseModel):
    deleted: bool = True
    id: str


class TaskListResponse(BaseModel):
    tasks: list[dict[str, Any]]


class TaskCreatedResponse(BaseModel):
    created: bool = True
    id: str
    task: dict[str, Any]


class TaskUpdatedResponse(BaseModel):
    """The task after merging the submitted fields."""

    updated: bool = True
    id: str
    task: dict[str, Any]


class NoteListResponse(BaseModel):
    notes: list[dict[str, Any]]


class NoteCreatedResponse(BaseModel):
    created: bool = True
    id: str
    note: dict[str, Any]


class NoteUpdatedResponse(BaseModel):
    """The note after merging the submitted fields."""

    updated: bool = True
    id: str
    note: dict[str, Any]


class LogsResponse(BaseModel):
    """Activity log entries, newest first."""

    logs: list[dict[str, Any]]


class ConfigResponse(BaseModel):
    config: Any = None


class ConfigUpdatedResponse(BaseModel):
    updated: bool = True
