"""Raw key access to the key-value store."""

from typing import Any

from core.storage import KVStore
from core.utils import loads_or_raw


class MemoryService:
    """Reads and writes arbitrary keys; values are stored as given."""

    def __init__(self, store: KVStore, list_limit: int = 100) -> None:
        self.store = store
        self.list_limit = list_limit

    async def list_keys(self, prefix: str = "") -> list[str]:
        listing = await self.store.list(prefix=prefix, limit=self.list_limit)
        return [key.name for key in listing.keys]

    async def get(self, key: str) -> tuple[bool, Any]:
        """Whether ``key`` exists, and its value decoded as JSON when possible."""
        raw = await self.store.get(key)
        if raw is None:
            return False, None
        return True, loads_or_raw(raw)

    async def put(self, key: str, body: str, ttl: int | None = None) -> None:
        await self.store.put(key, body, expiration_ttl=ttl)

    async def delete(self, key: str) -> None:
        await self.store.delete(key)
