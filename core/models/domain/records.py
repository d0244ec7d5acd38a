"""Domain models for records kept in the key-value store."""

from typing import Any

from pydantic import BaseModel, Field

from core.utils import get_current_timestamp


class Task(BaseModel):
    """A task record stored under ``task:<ms>``."""

    title: str | None = None
    description: str = ""
    status: str = "pending"
    priority: str = "normal"
    created: str = Field(default_factory=get_current_timestamp)
    updated: str = Field(default_factory=get_current_timestamp)


class Note(BaseModel):
    """A note record stored under ``note:<ms>``."""

    title: str = "Untitled"
    content: Any = None
    tags: list[Any] = Field(default_factory=list)
    created: str = Field(default_factory=get_current_timestamp)
    updated: str = Field(default_factory=get_current_timestamp)


class WebhookRecord(BaseModel):
    """A received webhook stored under ``webhook:<ms>:<source>``."""

    timestamp: str = Field(default_factory=get_current_timestamp)
    source: str
    headers: dict[str, str] = Field(default_factory=dict)
    data: Any = None


class LogEntry(BaseModel):
    """An activity log entry stored under ``log:<category>:<ms>``."""

    timestamp: str = Field(default_factory=get_current_timestamp)
    category: str
    message: str


class TrafficUsage(BaseModel):
    """Per-day request counters stored under ``traffic:<date>``."""

    requests: int = 0
    kv_reads: int = 0
    kv_writes: int = 0
    date: str
