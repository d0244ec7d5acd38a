"""Unified models package for the arni system."""

from core.models.api.requests import (
    NoteCreateRequest,
    ProxyRequest,
    TaskCreateRequest,
    UsageLogRequest,
)
from core.models.api.responses import (
    ConfigResponse,
    ConfigUpdatedResponse,
    ErrorResponse,
    HealthResponse,
    LogsResponse,
    MemoryDeletedResponse,
    MemoryKeysResponse,
    MemoryStoredResponse,
    MemoryValueResponse,
    NoteCreatedResponse,
    NoteListResponse,
    NoteUpdatedResponse,
    PingResponse,
    ProxyResponse,
    RecordDeletedResponse,
    StatsResponse,
    TaskCreatedResponse,
    TaskListResponse,
    TaskUpdatedResponse,
    UsageListResponse,
    UsageLogResponse,
    UsageStatsResponse,
    UsageWindowResponse,
    WebhookListResponse,
    WebhookReceivedResponse,
)
from core.models.domain.records import (
    LogEntry,
    Note,
    Task,
    TrafficUsage,
    WebhookRecord,
)
from core.models.domain.schedule import ScheduleStats
from core.models.domain.usage import (
    AggregateStats,
    GrandTotals,
    UsageEvent,
    UsageTotals,
)
from core.models.domain.window import ReconciledWindow, RollingWindowState

__all__ = [
    # Domain models
    "AggregateStats",
    "GrandTotals",
    "LogEntry",
    "Note",
    "ReconciledWindow",
    "RollingWindowState",
    "ScheduleStats",
    "Task",
    "TrafficUsage",
    "UsageEvent",
    "UsageTotals",
    "WebhookRecord",
    # API models
    "ConfigResponse",
    "ConfigUpdatedResponse",
    "ErrorResponse",
    "HealthResponse",
    "LogsResponse",
    "MemoryDeletedResponse",
    "MemoryKeysResponse",
    "MemoryStoredResponse",
    "MemoryValueResponse",
    "NoteCreateRequest",
    "NoteListResponse",
    "NoteCreatedResponse",
    "NoteUpdatedResponse",
    "PingResponse",
    "ProxyRequest",
    "ProxyResponse",
    "RecordDeletedResponse",
    "StatsResponse",
    "TaskCreateRequest",
    "TaskListResponse",
    "TaskCreatedResponse",
    "TaskUpdatedResponse",
    "UsageListResponse",
    "UsageLogRequest",
    "UsageLogResponse",
    "UsageStatsResponse",
    "UsageWindowResponse",
    "WebhookListResponse",
    "WebhookReceivedResponse",
]
