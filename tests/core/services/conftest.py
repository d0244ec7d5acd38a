"""Fixtures for service tests."""

import pytest

from core.services import (
    ActivityLog,
    UsageAggregator,
    WindowAccountingService,
    WindowLimits,
)
from core.storage import InMemoryKVStore, KVStore, KVStoreError
from core.storage.base import KVListResult


class FailingKVStore(KVStore):
    """A store whose every operation fails."""

    async def get(self, key: str) -> str | None:
        raise KVStoreError("store unavailable")

    async def put(
        self, key: str, value: str, expiration_ttl: int | None = None
    ) -> None:
        raise KVStoreError("store unavailable")

    async def delete(self, key: str) -> None:
        raise KVStoreError("store unavailable")

    async def list(
        self, prefix: str = "", limit: int = 1000, cursor: str | None = None
    ) -> KVListResult:
        raise KVStoreError("store unavailable")

    async def purge_expired(self) -> int:
        raise KVStoreError("store unavailable")


@pytest.fixture
def failing_store() -> FailingKVStore:
    return FailingKVStore()


@pytest.fixture
def limits() -> WindowLimits:
    return WindowLimits()


@pytest.fixture
def activity(store: InMemoryKVStore) -> ActivityLog:
    return ActivityLog(store, log_ttl=3600)


@pytest.fixture
def window_service(
    store: InMemoryKVStore, limits: WindowLimits
) -> WindowAccountingService:
    return WindowAccountingService(store, limits)


@pytest.fixture
def aggregator(
    store: InMemoryKVStore, window_service: WindowAccountingService
) -> UsageAggregator:
    return UsageAggregator(store, window_service)
