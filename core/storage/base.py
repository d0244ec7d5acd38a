"""Key-value store interface."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from core.constants import MAX_LIST_LIMIT


class KVKey(BaseModel):
    """A listed key with its optional expiry (epoch seconds)."""

    name: str
    expiration: int | None = None


class KVListResult(BaseModel):
    """One page of a prefix listing, ordered lexicographically by key.

    When ``list_complete`` is false, pass ``cursor`` back to ``list`` to read
    the next page.
    """

    keys: list[KVKey] = Field(default_factory=list)
    list_complete: bool = True
    cursor: str | None = None


class KVStore(ABC):
    """Async key-value store with prefix listing and per-key expiry.

    There are no transactions: concurrent read-modify-write sequences on the
    same key are last-write-wins.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Get the value for ``key`` or None when absent or expired."""
        pass

    @abstractmethod
    async def put(
        self, key: str, value: str, expiration_ttl: int | None = None
    ) -> None:
        """Store ``value`` under ``key``, optionally expiring after TTL seconds."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete ``key``; deleting a missing key is not an error."""
        pass

    @abstractmethod
    async def list(
        self,
        prefix: str = "",
        limit: int = MAX_LIST_LIMIT,
        cursor: str | None = None,
    ) -> KVListResult:
        """List live keys starting with ``prefix`` in key order.

        Args:
            prefix: Only keys starting with this string are listed
            limit: Maximum number of keys in the page
            cursor: Cursor of the previous page; listing resumes after it
        """
        pass

    @abstractmethod
    async def purge_expired(self) -> int:
        """Drop expired entries and return how many were removed."""
        pass

    async def close(self) -> None:
        """Release resources held by the store."""
        return None
