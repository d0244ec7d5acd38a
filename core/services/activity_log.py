"""Activity log entries and named counters."""

import json
from datetime import datetime

from core.constants import COUNTERS_KEY, LOG_PREFIX, MAX_LIST_LIMIT
from core.log import get_logger
from core.models.domain.records import LogEntry
from core.storage import KVStore
from core.types import JSONObject
from core.utils import get_current_timestamp, loads_or_none, to_epoch_ms, utc_now

from .listing import list_newest

logger = get_logger(__name__)


class ActivityLog:
    """Writes ``log:<category>:<ms>`` entries and the ``stats`` counters.

    Every write is a no-op when no store is bound.
    """

    def __init__(self, store: KVStore | None, log_ttl: int) -> None:
        self.store = store
        self.log_ttl = log_ttl

    async def log(
        self, category: str, message: str, now: datetime | None = None
    ) -> str | None:
        """Persist one entry and return its key."""
        logger.info(f"[{category}] {message}")
        if self.store is None:
            return None

        now = now or utc_now()
        key = f"{LOG_PREFIX}{category}:{to_epoch_ms(now)}"
        entry = LogEntry(
            timestamp=get_current_timestamp(now), category=category, message=message
        )
        await self.store.put(key, entry.model_dump_json(), expiration_ttl=self.log_ttl)
        return key

    async def get_counters(self) -> JSONObject:
        if self.store is None:
            return {}
        counters = loads_or_none(await self.store.get(COUNTERS_KEY))
        return counters if isinstance(counters, dict) else {}

    async def increment(self, counter: str, now: datetime | None = None) -> JSONObject:
        """Add one to ``counter``; read-modify-write, last write wins."""
        if self.store is None:
            return {}
        counters = await self.get_counters()
        counters[counter] = int(counters.get(counter) or 0) + 1
        counters["lastUpdated"] = get_current_timestamp(now)
        await self.store.put(COUNTERS_KEY, json.dumps(counters))
        return counters

    async def list_entries(
        self, limit: int = 50, category: str | None = None
    ) -> list[JSONObject]:
        """Most recent entries first, optionally restricted to one category."""
        if self.store is None:
            return []
        prefix = f"{LOG_PREFIX}{category}:" if category else LOG_PREFIX
        entries = await list_newest(self.store, prefix, min(limit, MAX_LIST_LIMIT))
        return [value for _, value in entries]
