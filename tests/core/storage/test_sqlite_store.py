"""Tests for the SQLite-backed key-value store."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import patch

import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError

from core.storage import KVStoreError, SQLiteKVStore, create_database_engine
from core.types import Environment


@pytest_asyncio.fixture
async def sqlite_store(tmp_path: Path) -> AsyncGenerator[SQLiteKVStore, None]:
    engine = create_database_engine(
        Environment.TESTING, db_path=tmp_path / "kv" / "arni.db"
    )
    kv = SQLiteKVStore(engine)
    yield kv
    await kv.close()


@pytest.mark.asyncio
async def test_put_overwrites(sqlite_store: SQLiteKVStore) -> None:
    await sqlite_store.put("config:main", '{"a": 1}')
    await sqlite_store.put("config:main", '{"a": 2}')

    assert await sqlite_store.get("config:main") == '{"a": 2}'


@pytest.mark.asyncio
async def test_get_missing(sqlite_store: SQLiteKVStore) -> None:
    assert await sqlite_store.get("missing") is None


@pytest.mark.asyncio
async def test_delete_is_idempotent(sqlite_store: SQLiteKVStore) -> None:
    await sqlite_store.put("k", "v")
    await sqlite_store.delete("k")
    await sqlite_store.delete("k")

    assert await sqlite_store.get("k") is None


@pytest.mark.asyncio
async def test_list_prefix_is_case_sensitive(sqlite_store: SQLiteKVStore) -> None:
    for key in ["usage:2", "usage:1", "Usage:3", "usage_other", "log:x:1"]:
        await sqlite_store.put(key, "{}")

    listing = await sqlite_store.list(prefix="usage:")
    assert [key.name for key in listing.keys] == ["usage:1", "usage:2"]

    everything = await sqlite_store.list(limit=2)
    assert len(everything.keys) == 2


@pytest.mark.asyncio
async def test_list_pages_with_cursor(sqlite_store: SQLiteKVStore) -> None:
    for i in range(3):
        await sqlite_store.put(f"log:cron:{i}", "{}")
    await sqlite_store.put("stats", "{}")

    first = await sqlite_store.list(prefix="log:", limit=2)
    assert [key.name for key in first.keys] == ["log:cron:0", "log:cron:1"]
    assert first.list_complete is False

    rest = await sqlite_store.list(prefix="log:", limit=2, cursor=first.cursor)
    assert [key.name for key in rest.keys] == ["log:cron:2"]
    assert rest.list_complete is True
    assert rest.cursor is None

    exact = await sqlite_store.list(prefix="log:", limit=3)
    assert exact.list_complete is True


@pytest.mark.asyncio
async def test_expiry_and_purge(sqlite_store: SQLiteKVStore) -> None:
    with patch("core.storage.sqlite.time.time", return_value=1000.0):
        await sqlite_store.put("short", "x", expiration_ttl=5)
        await sqlite_store.put("long", "y", expiration_ttl=500)

    with patch("core.storage.sqlite.time.time", return_value=1100.0):
        assert await sqlite_store.get("short") is None
        assert await sqlite_store.get("long") == "y"
        assert [key.name for key in (await sqlite_store.list()).keys] == ["long"]
        assert await sqlite_store.purge_expired() == 1


@pytest.mark.asyncio
async def test_database_errors_are_wrapped(sqlite_store: SQLiteKVStore) -> None:
    with patch(
        "core.storage.sqlite.Session.get",
        side_effect=OperationalError("SELECT", {}, Exception("disk I/O error")),
    ):
        with pytest.raises(KVStoreError, match="Failed to read k"):
            await sqlite_store.get("k")
