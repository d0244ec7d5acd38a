"""Core services package."""

from .activity_log import ActivityLog
from .cron import ScheduledHookTask
from .memory_service import MemoryService
from .proxy_service import ProxyError, ProxyService
from .record_service import ConfigService, NoteService, RecordService, TaskService
from .traffic_tracker import TrafficTracker
from .usage_aggregator import UsageAggregator, is_tracked_premium_model
from .usage_log import UsageLogService
from .webhook_service import WebhookService
from .window_accounting import WindowAccountingService, WindowLimits

__all__ = [
    "ActivityLog",
    "ConfigService",
    "MemoryService",
    "NoteService",
    "ProxyError",
    "ProxyService",
    "RecordService",
    "ScheduledHookTask",
    "TaskService",
    "TrafficTracker",
    "UsageAggregator",
    "UsageLogService",
    "WebhookService",
    "WindowAccountingService",
    "WindowLimits",
    "is_tracked_premium_model",
]
