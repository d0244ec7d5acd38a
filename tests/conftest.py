"""Global pytest configuration and fixtures."""

from collections.abc import Generator
from datetime import UTC, datetime
from logging import Logger

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from core import setup_test_logging
from core.config import Settings
from core.storage import InMemoryKVStore
from core.types import Environment

# A Wednesday; the week started on Monday 2026-03-02 00:00 UTC
FIXED_NOW = datetime(2026, 3, 4, 12, 0, tzinfo=UTC)


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Setup test logging for all tests."""
    setup_test_logging()


@pytest.fixture(scope="function")
def logger() -> Logger:
    """Provide a logger instance for tests."""
    from core import get_logger

    return get_logger("test")


@pytest.fixture
def now() -> datetime:
    """A fixed reference time for time-dependent logic."""
    return FIXED_NOW


@pytest.fixture
def store() -> InMemoryKVStore:
    """Provide an empty in-memory store."""
    return InMemoryKVStore()


@pytest.fixture
def test_settings() -> Settings:
    """Provide test settings (in-memory store, no scheduled hook)."""
    return Settings(environment=Environment.TESTING)


@pytest.fixture
def client(
    test_settings: Settings, store: InMemoryKVStore
) -> Generator[TestClient, None, None]:
    """Test client whose app is bound to the ``store`` fixture."""
    app = create_app(settings=test_settings, store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def unbound_client() -> Generator[TestClient, None, None]:
    """Test client for an app without a key-value store."""
    settings = Settings(environment=Environment.TESTING, kv_backend="none")
    app = create_app(settings=settings)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
