"""Helpers for reading groups of records by key prefix."""

import asyncio
from typing import Any

from core.constants import MAX_LIST_LIMIT
from core.storage import KVStore
from core.utils import loads_or_none


def key_time(name: str) -> int:
    """Millisecond timestamp embedded as the last ``:`` segment of a key."""
    suffix = name.rsplit(":", 1)[-1]
    return int(suffix) if suffix.isdigit() else 0


async def load_values(store: KVStore, names: list[str]) -> list[tuple[str, Any]]:
    """Fetch and decode ``names`` concurrently, skipping vanished or bad values."""
    raw_values = await asyncio.gather(*(store.get(name) for name in names))
    records = []
    for name, raw in zip(names, raw_values):
        value = loads_or_none(raw)
        if value is not None:
            records.append((name, value))
    return records


async def list_all_names(store: KVStore, prefix: str) -> list[str]:
    """Every live key under ``prefix``, read page by page."""
    names: list[str] = []
    cursor = None
    while True:
        listing = await store.list(prefix=prefix, limit=MAX_LIST_LIMIT, cursor=cursor)
        names.extend(key.name for key in listing.keys)
        if listing.list_complete or listing.cursor is None:
            return names
        cursor = listing.cursor


async def list_newest(store: KVStore, prefix: str, limit: int) -> list[tuple[str, Any]]:
    """The ``limit`` most recent records under ``prefix``, newest first.

    Recency comes from the timestamp suffix of each key, not from key order,
    so the whole prefix is scanned.
    """
    if limit <= 0:
        return []
    names = sorted(await list_all_names(store, prefix), key=key_time)
    return list(reversed(await load_values(store, names[-limit:])))
