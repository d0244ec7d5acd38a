"""Tests for common router."""

from fastapi.testclient import TestClient


def test_root_endpoint(client: TestClient):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Arni API" in response.text
    assert "/usage/window" in response.text


def test_health_check(client: TestClient):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "ok"
    assert data["agent"] == "arni"
    assert data["kv"] == "connected"
    assert data["version"] == "4.0.0"
    assert "timestamp" in data


def test_health_check_without_store(unbound_client: TestClient):
    """Health reports a missing store instead of failing."""
    response = unbound_client.get("/health")
    assert response.status_code == 200
    assert response.json()["kv"] == "not bound"
    assert response.json()["stats"] == {}


def test_ping(client: TestClient):
    response = client.get("/api/ping")
    assert response.status_code == 200
    data = response.json()
    assert data["pong"] is True
    assert isinstance(data["time"], int)


def test_stats_counts_webhooks(client: TestClient):
    """Test that counters reflect received webhooks."""
    assert client.get("/stats").json() == {"stats": {}}

    client.post("/webhook", content="{}")

    stats = client.get("/stats").json()["stats"]
    assert stats["webhooks_received"] == 1
    assert "lastUpdated" in stats
    assert client.get("/health").json()["stats"]["webhooks_received"] == 1


def test_dashboard_empty(client: TestClient):
    """Test dashboard rendering with no usage recorded."""
    response = client.get("/dashboard")
    assert response.status_code == 200
    assert "Available" in response.text
    assert "5h Window" in response.text
    assert "No model data yet" in response.text


def test_dashboard_with_usage(client: TestClient):
    """Test dashboard rendering after usage is logged."""
    client.post(
        "/usage",
        json={
            "provider": "anthropic",
            "model": "claude-opus-4",
            "tokens_in": 1200,
            "tokens_out": 300,
            "task_type": "coding",
        },
    )

    response = client.get("/dashboard")
    assert response.status_code == 200
    assert "opus-4" in response.text
    assert "coding" in response.text
    assert "1.5K" in response.text


def test_dashboard_without_store(unbound_client: TestClient):
    response = unbound_client.get("/dashboard")
    assert response.status_code == 200
    assert "Available" in response.text
