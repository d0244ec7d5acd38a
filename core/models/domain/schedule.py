"""Scheduling domain models."""

from datetime import datetime

from pydantic import BaseModel


class ScheduleStats(BaseModel):
    """Statistics for periodic task execution."""

    executions: int = 0
    errors: int = 0
    consecutive_errors: int = 0
    last_execution_time: datetime | None = None
    last_error_time: datetime | None = None
    start_time: datetime | None = None
