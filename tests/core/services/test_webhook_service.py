"""Tests for webhook capture."""

import json
from datetime import datetime, timedelta

import pytest

from core.services import ActivityLog, WebhookService
from core.storage import InMemoryKVStore
from core.utils import to_epoch_ms


@pytest.fixture
def webhooks(store: InMemoryKVStore, activity: ActivityLog) -> WebhookService:
    return WebhookService(store, activity, ttl=86400)


@pytest.mark.asyncio
async def test_receive_json(
    store: InMemoryKVStore, webhooks: WebhookService, now: datetime
):
    webhook_id, timestamp = await webhooks.receive(
        "github", {"x-github-event": "push"}, '{"ref": "main"}', now
    )

    assert webhook_id == f"webhook:{to_epoch_ms(now)}:github"
    assert timestamp == now.isoformat()

    record = json.loads(await store.get(webhook_id))
    assert record == {
        "timestamp": now.isoformat(),
        "source": "github",
        "headers": {"x-github-event": "push"},
        "data": {"ref": "main"},
    }


@pytest.mark.asyncio
async def test_receive_non_json_is_kept_raw(
    store: InMemoryKVStore, webhooks: WebhookService, now: datetime
):
    webhook_id, _ = await webhooks.receive("cli", {}, "plain text", now)

    record = json.loads(await store.get(webhook_id))
    assert record["data"] == {"raw": "plain text"}


@pytest.mark.asyncio
async def test_receive_updates_counters_and_log(
    webhooks: WebhookService, activity: ActivityLog, now: datetime
):
    await webhooks.receive("a", {}, "{}", now)
    await webhooks.receive("b", {}, "{}", now + timedelta(seconds=1))

    counters = await activity.get_counters()
    assert counters["webhooks_received"] == 2

    entries = await activity.list_entries(category="webhook")
    assert entries[0]["message"] == "Received from b"


@pytest.mark.asyncio
async def test_list_returns_ids_with_expiry(webhooks: WebhookService, now: datetime):
    first, _ = await webhooks.receive("a", {}, "{}", now)
    second, _ = await webhooks.receive("b", {}, "{}", now + timedelta(seconds=1))

    listed = await webhooks.list()
    assert [w["id"] for w in listed] == [first, second]
    assert all(w["expiration"] is not None for w in listed)


@pytest.mark.asyncio
async def test_list_limit(store: InMemoryKVStore, activity: ActivityLog, now: datetime):
    webhooks = WebhookService(store, activity, ttl=60, list_limit=2)
    for second in range(3):
        await webhooks.receive("s", {}, "{}", now + timedelta(seconds=second))

    assert len(await webhooks.list()) == 2


@pytest.mark.asyncio
async def test_without_store_acknowledges(now: datetime):
    webhooks = WebhookService(None, ActivityLog(None, 60), ttl=60)

    webhook_id, _ = await webhooks.receive("s", {}, "{}", now)
    assert webhook_id.startswith("webhook:")
    assert await webhooks.list() == []
