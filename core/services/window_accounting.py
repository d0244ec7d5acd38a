"""Rolling-window and weekly token budget accounting.

Both quotas reset lazily: a reset is applied the next time the state is read
or recorded, never by a timer. ``reconcile`` is the single place where the
reset rules live; the service adds persistence around it.

Concurrent ``record`` calls are an unguarded read-modify-write on one key, so
the last write wins and increments can be lost. Callers that need exact
accounting must serialize writes themselves.
"""

import json
import math
from datetime import datetime

from pydantic import BaseModel, ValidationError

from core.config import Settings
from core.constants import MS_PER_DAY, MS_PER_HOUR, MS_PER_WEEK, WINDOW_USAGE_KEY
from core.log import get_logger
from core.models.domain.window import ReconciledWindow, RollingWindowState
from core.storage import KVStore, KVStoreError
from core.utils import (
    get_current_timestamp,
    get_week_start,
    loads_or_none,
    to_epoch_ms,
    utc_now,
)

logger = get_logger(__name__)


class WindowLimits(BaseModel):
    """Quota configuration for the rolling window and weekly budget."""

    tokens_limit: int = 88000
    weekly_tokens_limit: int = 400000
    window_duration_ms: int = 5 * MS_PER_HOUR

    @classmethod
    def from_settings(cls, settings: Settings) -> "WindowLimits":
        return cls(
            tokens_limit=settings.max_tokens_limit,
            weekly_tokens_limit=settings.weekly_tokens_limit,
            window_duration_ms=settings.window_duration_ms,
        )


def default_state(now: datetime, limits: WindowLimits) -> RollingWindowState:
    """Fresh state anchored at ``now``."""
    return RollingWindowState(
        tokens_used=0,
        tokens_limit=limits.tokens_limit,
        window_start=to_epoch_ms(now),
        sessions=0,
        last_session=None,
        weekly_tokens_used=0,
        weekly_tokens_limit=limits.weekly_tokens_limit,
        week_start=get_week_start(now),
    )


def reconcile(
    state: RollingWindowState | None, now: datetime, limits: WindowLimits
) -> RollingWindowState:
    """Apply window expiry and week rollover to ``state`` as of ``now``.

    Returns a new state; the input is left untouched.
    """
    if state is None:
        return default_state(now, limits)

    reconciled = RollingWindowState.model_validate(state.to_record())
    now_ms = to_epoch_ms(now)
    current_week_start = get_week_start(now)

    if reconciled.window_start is None:
        reconciled.window_start = now_ms
    if now_ms - reconciled.window_start > limits.window_duration_ms:
        reconciled.tokens_used = 0
        reconciled.window_start = now_ms
        reconciled.sessions = 0

    if reconciled.week_start is None or reconciled.week_start < current_week_start:
        reconciled.weekly_tokens_used = 0
        reconciled.week_start = current_week_start

    # Older records may lack limits
    reconciled.tokens_limit = reconciled.tokens_limit or limits.tokens_limit
    reconciled.weekly_tokens_limit = (
        reconciled.weekly_tokens_limit or limits.weekly_tokens_limit
    )
    return reconciled


def read_window(
    state: RollingWindowState | None, now: datetime, limits: WindowLimits
) -> ReconciledWindow:
    """Reconcile ``state`` and compute remaining time and days until reset.

    Pure: nothing is persisted.
    """
    reconciled = reconcile(state, now, limits)
    now_ms = to_epoch_ms(now)
    elapsed_ms = now_ms - (reconciled.window_start or now_ms)

    time_remaining_ms = max(0, limits.window_duration_ms - elapsed_ms)
    ms_until_reset = get_week_start(now) + MS_PER_WEEK - now_ms

    return ReconciledWindow(
        **reconciled.model_dump(),
        time_remaining_ms=time_remaining_ms,
        time_remaining_hours=round(time_remaining_ms / MS_PER_HOUR, 1),
        days_until_week_reset=math.ceil(ms_until_reset / MS_PER_DAY),
    )


def record_usage(
    state: RollingWindowState | None,
    tokens_in: int,
    tokens_out: int,
    now: datetime,
    limits: WindowLimits,
) -> RollingWindowState:
    """Reconcile ``state`` then charge one session of ``tokens_in + tokens_out``."""
    updated = reconcile(state, now, limits)
    total_tokens = tokens_in + tokens_out
    updated.tokens_used += total_tokens
    updated.weekly_tokens_used += total_tokens
    updated.sessions += 1
    updated.last_session = get_current_timestamp(now)
    return updated


def parse_state(raw: str | None) -> RollingWindowState | None:
    """Decode a stored state; malformed payloads count as absent."""
    payload = loads_or_none(raw)
    if not isinstance(payload, dict):
        return None
    try:
        return RollingWindowState.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Discarding invalid window state: {e}")
        return None


class WindowAccountingService:
    """Persists the rolling-window state in the key-value store."""

    def __init__(self, store: KVStore | None, limits: WindowLimits) -> None:
        self.store = store
        self.limits = limits

    async def load(self) -> RollingWindowState | None:
        """Read the stored state without reconciling it."""
        if self.store is None:
            return None
        return parse_state(await self.store.get(WINDOW_USAGE_KEY))

    async def get_window(self, now: datetime | None = None) -> ReconciledWindow:
        """Current reconciled figures; defaults when the store is unusable."""
        now = now or utc_now()
        try:
            state = await self.load()
        except KVStoreError as e:
            logger.warning(f"Window state unavailable, using defaults: {e}")
            state = None
        return read_window(state, now, self.limits)

    async def record(
        self, tokens_in: int, tokens_out: int, now: datetime | None = None
    ) -> RollingWindowState | None:
        """Charge tokens to both quotas and overwrite the stored state."""
        if self.store is None:
            return None

        now = now or utc_now()
        state = await self.load()
        updated = record_usage(state, tokens_in, tokens_out, now, self.limits)
        await self.store.put(WINDOW_USAGE_KEY, json.dumps(updated.to_record()))
        logger.debug(
            f"Window usage {updated.tokens_used}/{updated.tokens_limit}, "
            f"weekly {updated.weekly_tokens_used}/{updated.weekly_tokens_limit}"
        )
        return updated
