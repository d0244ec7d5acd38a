"""In-process key-value store."""

import time
from dataclasses import dataclass

from core.constants import MAX_LIST_LIMIT
from core.log import get_logger

from .base import KVKey, KVListResult, KVStore

logger = get_logger(__name__)


@dataclass
class _Entry:
    value: str
    expiration: int | None = None


class InMemoryKVStore(KVStore):
    """Dictionary-backed store used for tests and ephemeral deployments."""

    def __init__(self) -> None:
        self._data: dict[str, _Entry] = {}

    def _is_expired(self, entry: _Entry) -> bool:
        return entry.expiration is not None and entry.expiration <= time.time()

    async def get(self, key: str) -> str | None:
        entry = self._data.get(key)
        if entry is None or self._is_expired(entry):
            return None
        return entry.value

    async def put(
        self, key: str, value: str, expiration_ttl: int | None = None
    ) -> None:
        expiration = int(time.time()) + expiration_ttl if expiration_ttl else None
        self._data[key] = _Entry(value=value, expiration=expiration)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def list(
        self,
        prefix: str = "",
        limit: int = MAX_LIST_LIMIT,
        cursor: str | None = None,
    ) -> KVListResult:
        names = sorted(
            name
            for name, entry in self._data.items()
            if name.startswith(prefix)
            and not self._is_expired(entry)
            and (cursor is None or name > cursor)
        )
        page = names[: max(0, limit)]
        complete = len(page) == len(names)
        return KVListResult(
            keys=[
                KVKey(name=name, expiration=self._data[name].expiration)
                for name in page
            ],
            list_complete=complete,
            cursor=None if complete or not page else page[-1],
        )

    async def purge_expired(self) -> int:
        expired = [
            name for name, entry in self._data.items() if self._is_expired(entry)
        ]
        for name in expired:
            del self._data[name]
        if expired:
            logger.debug(f"Purged {len(expired)} expired keys")
        return len(expired)
