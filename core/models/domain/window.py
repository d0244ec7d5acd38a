"""Domain models for rolling-window and weekly token accounting."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RollingWindowState(BaseModel):
    """Persisted state of the rolling window and the weekly budget.

    Stored under camelCase keys. ``window_start`` and ``week_start`` are epoch
    milliseconds.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    tokens_used: int = 0
    tokens_limit: int = 0
    window_start: int | None = None
    sessions: int = 0
    last_session: str | None = None
    weekly_tokens_used: int = 0
    weekly_tokens_limit: int = 0
    week_start: int | None = None

    def to_record(self) -> dict[str, Any]:
        """Serialize only the stored fields, under their persisted names."""
        return self.model_dump(
            by_alias=True, include=set(RollingWindowState.model_fields)
        )


class ReconciledWindow(RollingWindowState):
    """Window state with derived, never-persisted fields."""

    time_remaining_ms: int = Field(description="Time left in the rolling window")
    time_remaining_hours: float = Field(description="Hours left, one decimal")
    days_until_week_reset: int = Field(description="Days until Monday 00:00 UTC")
