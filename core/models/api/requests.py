"""API request models."""

from typing import Any

from pydantic import BaseModel, Field

from core.constants import DEFAULT_TASK_TYPE, UNKNOWN
from core.models.domain.usage import UsageEvent


class UsageLogRequest(BaseModel):
    """Body of ``POST /usage``; every field is optional."""

    provider: str | None = None
    model: str | None = None
    tokens_in: int | None = None
    tokens_out: int | None = None
    cost: float | None = None
    task_type: str | None = None
    success: bool | None = None

    def to_event(self) -> UsageEvent:
        """Apply defaults for missing or empty fields."""
        return UsageEvent(
            provider=self.provider or UNKNOWN,
            model=self.model or UNKNOWN,
            tokens_in=self.tokens_in or 0,
            tokens_out=self.tokens_out or 0,
            cost=self.cost or 0.0,
            task_type=self.task_type or DEFAULT_TASK_TYPE,
            success=self.success is not False,
        )


class TaskCreateRequest(BaseModel):
    """Body of ``POST /tasks``."""

    title: str | None = None
    description: str | None = None
    priority: str | None = None


class NoteCreateRequest(BaseModel):
    """Body of ``POST /notes``."""

    title: str | None = None
    content: Any = None
    tags: list[Any] | None = None


class ProxyRequest(BaseModel):
    """Body of ``POST /proxy``."""

    url: str | None = None
    method: str = "GET"
    headers: dict[str, str] = Field(default_factory=dict)
    data: Any = None
