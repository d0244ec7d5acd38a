"""Aggregation of usage events into the ``model_stats`` singleton."""

import json
from datetime import datetime

from pydantic import ValidationError

from core.config import Settings
from core.constants import (
    MODEL_STATS_KEY,
    REFERENCE_TOKEN_UNIT,
    TRACKED_MODEL_MARKER,
    TRACKED_PROVIDER,
)
from core.log import get_logger
from core.models.domain.usage import AggregateStats, UsageEvent, UsageTotals
from core.storage import KVStore, KVStoreError
from core.utils import get_current_timestamp, loads_or_none, utc_date_key, utc_now

from .window_accounting import WindowAccountingService

logger = get_logger(__name__)


def is_tracked_premium_model(provider: str, model: str) -> bool:
    """Whether an event counts against the rolling-window quota.

    Matched by name: the Anthropic provider with "opus" anywhere in the model.
    """
    if provider != TRACKED_PROVIDER:
        return False
    return TRACKED_MODEL_MARKER in (model or "").lower()


def reference_cost(
    tokens_in: int, tokens_out: int, cost_in: float, cost_out: float
) -> float:
    """Cost of the tokens at the reference rates (per 1000 tokens)."""
    return (tokens_in * cost_in + tokens_out * cost_out) / REFERENCE_TOKEN_UNIT


def apply_event(
    stats: AggregateStats,
    event: UsageEvent,
    now: datetime,
    cost_in: float,
    cost_out: float,
) -> AggregateStats:
    """Fold ``event`` into every view of ``stats`` in place and return it."""
    for bucket, name in (
        (stats.providers, event.provider),
        (stats.models, event.model),
        (stats.task_types, event.task_type),
        (stats.daily, utc_date_key(now)),
    ):
        bucket.setdefault(name, UsageTotals()).add(event)

    row = stats.model_task_matrix.setdefault(event.model, {})
    row[event.task_type] = row.get(event.task_type, 0) + 1

    stats.totals.add(event)
    baseline = reference_cost(event.tokens_in, event.tokens_out, cost_in, cost_out)
    stats.totals.savings += max(0.0, baseline - event.cost)

    stats.last_updated = get_current_timestamp(now)
    return stats


def parse_stats(raw: str | None) -> AggregateStats | None:
    """Decode the stored aggregate; malformed payloads count as absent."""
    payload = loads_or_none(raw)
    if not isinstance(payload, dict):
        return None
    try:
        return AggregateStats.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Discarding invalid usage statistics: {e}")
        return None


class UsageAggregator:
    """Keeps aggregated usage statistics up to date.

    Accounting is best-effort: without a store ``record`` does nothing, and a
    failing store is logged rather than raised to the caller.
    """

    def __init__(
        self,
        store: KVStore | None,
        window_service: WindowAccountingService,
        cost_in: float = 0.015,
        cost_out: float = 0.075,
    ) -> None:
        self.store = store
        self.window_service = window_service
        self.cost_in = cost_in
        self.cost_out = cost_out

    @classmethod
    def from_settings(
        cls,
        store: KVStore | None,
        window_service: WindowAccountingService,
        settings: Settings,
    ) -> "UsageAggregator":
        return cls(
            store,
            window_service,
            cost_in=settings.opus_cost_in,
            cost_out=settings.opus_cost_out,
        )

    async def get_stats(self) -> AggregateStats:
        """Stored statistics, or a fresh record when absent."""
        if self.store is None:
            return AggregateStats()
        return parse_stats(await self.store.get(MODEL_STATS_KEY)) or AggregateStats()

    async def record(
        self, event: UsageEvent, now: datetime | None = None
    ) -> AggregateStats | None:
        """Absorb one event into the aggregate and, if tracked, the window.

        Not idempotent: submitting the same event twice counts it twice.
        """
        if self.store is None:
            return None

        now = now or utc_now()
        try:
            if is_tracked_premium_model(event.provider, event.model):
                await self.window_service.record(event.tokens_in, event.tokens_out, now)

            stats = apply_event(
                await self.get_stats(), event, now, self.cost_in, self.cost_out
            )
            await self.store.put(MODEL_STATS_KEY, json.dumps(stats.to_record()))
        except KVStoreError as e:
            logger.warning(f"Skipping usage aggregation: {e}")
            return None

        logger.debug(
            f"Aggregated {event.provider}/{event.model} "
            f"({event.total_tokens} tokens, total requests {stats.totals.requests})"
        )
        return stats
