"""Per-day request counters."""

from datetime import datetime

from pydantic import ValidationError

from core.constants import KV_READ_PATHS, KV_WRITE_PATHS, TRAFFIC_PREFIX
from core.log import get_logger
from core.models.domain.records import TrafficUsage
from core.storage import KVStore, KVStoreError
from core.utils import loads_or_none, utc_date_key

logger = get_logger(__name__)


class TrafficTracker:
    """Counts requests per UTC day under ``traffic:<YYYY-MM-DD>``.

    Reads and writes are attributed by path, not measured. Tracking never
    fails the request it observes.
    """

    def __init__(self, store: KVStore | None, ttl: int) -> None:
        self.store = store
        self.ttl = ttl

    async def get_today(self, now: datetime | None = None) -> TrafficUsage:
        today = utc_date_key(now)
        if self.store is None:
            return TrafficUsage(date=today)
        try:
            payload = loads_or_none(await self.store.get(f"{TRAFFIC_PREFIX}{today}"))
            if isinstance(payload, dict):
                return TrafficUsage.model_validate({**payload, "date": today})
        except (KVStoreError, ValidationError) as e:
            logger.warning(f"Traffic counters unavailable: {e}")
        return TrafficUsage(date=today)

    async def track(self, path: str, now: datetime | None = None) -> None:
        if self.store is None:
            return
        try:
            usage = await self.get_today(now)
            usage.requests += 1
            if any(fragment in path for fragment in KV_READ_PATHS):
                usage.kv_reads += 1
            if any(fragment in path for fragment in KV_WRITE_PATHS):
                usage.kv_writes += 1
            await self.store.put(
                f"{TRAFFIC_PREFIX}{usage.date}",
                usage.model_dump_json(),
                expiration_ttl=self.ttl,
            )
        except KVStoreError as e:
            logger.warning(f"Failed to track request to {path}: {e}")
