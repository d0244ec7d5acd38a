"""Utility functions for the application."""

import json
from datetime import UTC, datetime, timedelta
from typing import Any

from core.log import get_logger

logger = get_logger(__name__)


def utc_now() -> datetime:
    """Get the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def get_current_timestamp(now: datetime | None = None) -> str:
    """Get a timestamp in ISO8601 format."""
    return (now or utc_now()).isoformat()


def to_epoch_ms(moment: datetime) -> int:
    """Convert a datetime to integer milliseconds since the epoch."""
    return int(moment.timestamp() * 1000)


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return to_epoch_ms(utc_now())


def utc_date_key(now: datetime | None = None) -> str:
    """UTC calendar date as ``YYYY-MM-DD``."""
    return (now or utc_now()).astimezone(UTC).strftime("%Y-%m-%d")


def get_week_start(now: datetime | None = None) -> int:
    """Epoch milliseconds of the most recent Monday 00:00 UTC.

    Args:
        now: Reference time (defaults to the current time)

    Returns:
        Start of the calendar week containing ``now``
    """
    moment = (now or utc_now()).astimezone(UTC)
    monday = moment.date() - timedelta(days=moment.weekday())
    return to_epoch_ms(datetime(monday.year, monday.month, monday.day, tzinfo=UTC))


def loads_or_none(raw: str | None) -> Any:
    """Decode stored JSON, treating malformed payloads as absent."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"Ignoring malformed JSON payload: {raw[:80]!r}")
        return None


def loads_or_raw(raw: str) -> Any:
    """Decode JSON when possible, otherwise return the text unchanged."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def format_tokens(num: int | float) -> str:
    """Abbreviate token counts (``1.5K``, ``2.3M``)."""
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return str(int(num))
