"""Inbound webhook capture."""

from datetime import datetime

from core.constants import WEBHOOK_PREFIX
from core.log import get_logger
from core.models.domain.records import WebhookRecord
from core.storage import KVStore
from core.types import JSONObject
from core.utils import get_current_timestamp, loads_or_none, to_epoch_ms, utc_now

from .activity_log import ActivityLog

logger = get_logger(__name__)


class WebhookService:
    """Stores webhook payloads under ``webhook:<ms>:<source>`` with a TTL."""

    def __init__(
        self,
        store: KVStore | None,
        activity: ActivityLog,
        ttl: int,
        list_limit: int = 50,
    ) -> None:
        self.store = store
        self.activity = activity
        self.ttl = ttl
        self.list_limit = list_limit

    async def receive(
        self,
        source: str,
        headers: dict[str, str],
        body: str,
        now: datetime | None = None,
    ) -> tuple[str, str]:
        """Record one delivery and return its id and timestamp.

        Bodies that are not JSON are kept as ``{"raw": body}``. Without a store
        the delivery is acknowledged but not kept.
        """
        now = now or utc_now()
        webhook_id = f"{WEBHOOK_PREFIX}{to_epoch_ms(now)}:{source}"
        timestamp = get_current_timestamp(now)

        if self.store is not None:
            data = loads_or_none(body)
            record = WebhookRecord(
                timestamp=timestamp,
                source=source,
                headers=headers,
                data=data if data is not None else {"raw": body},
            )
            await self.store.put(
                webhook_id, record.model_dump_json(), expiration_ttl=self.ttl
            )
            await self.activity.increment("webhooks_received", now)

        await self.activity.log("webhook", f"Received from {source}", now)
        return webhook_id, timestamp

    async def list(self) -> list[JSONObject]:
        """Listed ids with their expiry; payloads are not loaded."""
        if self.store is None:
            return []
        listing = await self.store.list(prefix=WEBHOOK_PREFIX, limit=self.list_limit)
        return [{"id": key.name, "expiration": key.expiration} for key in listing.keys]
