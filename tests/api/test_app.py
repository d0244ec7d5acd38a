"""Tests for FastAPI application."""

import json

from fastapi.testclient import TestClient

from core.config import Settings
from core.storage import InMemoryKVStore
from core.utils import utc_date_key


def test_docs_endpoint(client: TestClient):
    """Test that docs endpoint is accessible."""
    response = client.get("/docs")
    assert response.status_code == 200
    assert "swagger-ui" in response.text


def test_openapi_schema(client: TestClient, test_settings: Settings):
    """Test that OpenAPI schema is accessible."""
    response = client.get("/openapi.json")
    assert response.status_code == 200

    schema = response.json()
    assert schema["info"]["title"] == "Arni API"
    assert schema["info"]["version"] == test_settings.version
    assert "/usage/window" in schema["paths"]


def test_cors_headers(client: TestClient):
    """Test CORS headers are set."""
    response = client.get("/health", headers={"Origin": "http://localhost:3000"})
    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers


def test_requests_are_tracked(client: TestClient, store: InMemoryKVStore):
    """Every request is counted in today's traffic record."""
    client.get("/health")
    client.get("/memory")

    raw = store._data[f"traffic:{utc_date_key()}"].value
    today = json.loads(raw)
    assert today["requests"] == 2
    assert today["kv_reads"] == 1


def test_api_key_is_not_enforced(client: TestClient):
    """Requests without the API key header are served."""
    assert client.get("/api/ping").status_code == 200
    response = client.get("/api/ping", headers={"X-Api-Key": "wrong"})
    assert response.status_code == 200


def test_unhandled_errors_render_as_json(store: InMemoryKVStore):
    """Unexpected exceptions become a 500 with an error body."""
    from api.app import create_app
    from core.types import Environment

    app = create_app(settings=Settings(environment=Environment.TESTING), store=store)

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("exploded")

    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"error": "exploded"}


def test_api_errors_keep_their_status(store: InMemoryKVStore):
    """ApiError is rendered with its own status code and message."""
    from api.app import create_app
    from api.errors import ApiError
    from core.types import Environment

    app = create_app(settings=Settings(environment=Environment.TESTING), store=store)

    @app.get("/teapot")
    async def teapot() -> None:
        raise ApiError(418, "short and stout")

    with TestClient(app) as test_client:
        response = test_client.get("/teapot")

    assert response.status_code == 418
    assert response.json() == {"error": "short and stout"}
