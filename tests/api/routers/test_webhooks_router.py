"""Tests for webhook endpoints."""

import asyncio
import json

from fastapi.testclient import TestClient

from core.storage import InMemoryKVStore


def test_receive_webhook(client: TestClient, store: InMemoryKVStore):
    """Test that a webhook is stored with its source and payload."""
    response = client.post(
        "/webhook",
        json={"event": "push"},
        headers={"X-Webhook-Source": "github"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["received"] is True
    assert data["id"].startswith("webhook:")
    assert data["id"].endswith(":github")
    assert "timestamp" in data

    record = json.loads(asyncio.run(store.get(data["id"])))
    assert record["source"] == "github"
    assert record["data"] == {"event": "push"}
    assert record["headers"]["x-webhook-source"] == "github"


def test_receive_plain_text(client: TestClient, store: InMemoryKVStore):
    """Test that non-JSON bodies are kept raw under an unknown source."""
    response = client.post("/webhook", content="ping")

    webhook_id = response.json()["id"]
    assert webhook_id.endswith(":unknown")
    record = json.loads(asyncio.run(store.get(webhook_id)))
    assert record["data"] == {"raw": "ping"}


def test_list_webhooks(client: TestClient):
    webhook_id = client.post("/webhook", content="{}").json()["id"]

    webhooks = client.get("/webhooks").json()["webhooks"]
    assert [w["id"] for w in webhooks] == [webhook_id]
    assert webhooks[0]["expiration"] is not None


def test_webhook_without_store(unbound_client: TestClient):
    """Webhooks are acknowledged even when nothing can be stored."""
    response = unbound_client.post("/webhook", content="{}")
    assert response.status_code == 200
    assert response.json()["received"] is True

    response = unbound_client.get("/webhooks")
    assert response.status_code == 500
    assert response.json() == {"error": "KV not bound"}
