"""Raw usage events and the views built from them."""

from datetime import datetime

from core.constants import USAGE_PREFIX
from core.log import get_logger
from core.models.domain.usage import AggregateStats, UsageEvent
from core.storage import KVStore
from core.types import JSONObject
from core.utils import get_current_timestamp, to_epoch_ms, utc_now

from .listing import list_newest
from .usage_aggregator import UsageAggregator

logger = get_logger(__name__)


class UsageLogService:
    """Persists each event as ``usage:<ms>`` and feeds the aggregator."""

    def __init__(
        self, store: KVStore, aggregator: UsageAggregator, ttl: int
    ) -> None:
        self.store = store
        self.aggregator = aggregator
        self.ttl = ttl

    async def log(self, event: UsageEvent, now: datetime | None = None) -> str:
        """Store the raw event, then aggregate it.

        A failure while writing the raw record propagates; failures during
        aggregation are absorbed by the aggregator.
        """
        now = now or utc_now()
        event = event.model_copy(update={"timestamp": get_current_timestamp(now)})
        usage_id = f"{USAGE_PREFIX}{to_epoch_ms(now)}"

        await self.store.put(usage_id, event.model_dump_json(), expiration_ttl=self.ttl)
        await self.aggregator.record(event, now)

        logger.info(
            f"Logged usage {usage_id}: {event.provider}/{event.model} "
            f"{event.total_tokens} tokens"
        )
        return usage_id

    async def list_recent(
        self, limit: int, include_id: bool = True
    ) -> list[JSONObject]:
        """Up to ``limit`` most recent raw records, newest first."""
        records = await list_newest(self.store, USAGE_PREFIX, limit)
        if include_id:
            return [
                {"id": name, **value}
                for name, value in records
                if isinstance(value, dict)
            ]
        return [value for _, value in records]

    async def get_stats(self) -> AggregateStats:
        return await self.aggregator.get_stats()
