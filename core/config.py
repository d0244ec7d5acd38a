"""Configuration management for the arni system."""

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .constants import SECONDS_PER_DAY
from .types import Environment, KVBackend


class Settings(BaseModel):
    """Application settings."""

    # Environment
    version: str = Field(default="4.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production/testing)",
    )

    # API Settings
    api_title: str = Field(default="Arni API", description="API title")

    # CORS Settings
    cors_allow_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )

    # Auth Settings (the key is read but never enforced)
    api_key: str = Field(default="arni-2026", description="Shared API key")
    api_key_header: str = Field(default="X-Api-Key", description="API key header")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Key-value store
    kv_backend: KVBackend = Field(
        default=KVBackend.SQLITE, description="Key-value store backend"
    )
    kv_db_path: Path | None = Field(
        default=None, description="SQLite file for the key-value store"
    )

    # TTLs (seconds)
    webhook_ttl: int = Field(
        default=30 * SECONDS_PER_DAY, description="Webhook record TTL in seconds"
    )
    usage_ttl: int = Field(
        default=90 * SECONDS_PER_DAY, description="Raw usage record TTL in seconds"
    )
    log_ttl: int = Field(
        default=7 * SECONDS_PER_DAY, description="Activity log TTL in seconds"
    )
    traffic_ttl: int = Field(
        default=7 * SECONDS_PER_DAY, description="Daily traffic counter TTL in seconds"
    )

    # Usage window limits
    max_tokens_limit: int = Field(
        default=88000, description="Token budget of the rolling window"
    )
    weekly_tokens_limit: int = Field(
        default=400000, description="Token budget of the calendar week"
    )
    window_duration_ms: int = Field(
        default=5 * 60 * 60 * 1000, description="Rolling window length in ms"
    )

    # Reference pricing per 1K tokens, used for the savings metric
    opus_cost_in: float = Field(default=0.015, description="Reference input rate")
    opus_cost_out: float = Field(default=0.075, description="Reference output rate")

    # List limits
    default_list_limit: int = Field(default=100, description="Default list size")
    webhook_list_limit: int = Field(default=50, description="Webhook list size")

    # Proxy
    proxy_timeout: float = Field(
        default=30.0, description="Timeout for outbound proxy requests in seconds"
    )

    # Scheduled hook
    cron_enabled: bool = Field(
        default=True, description="Whether the scheduled hook runs periodically"
    )
    cron_interval_seconds: int = Field(
        default=3600, description="Interval in seconds between scheduled runs"
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        # Tests run against an in-process store without background work
        if self.environment == Environment.TESTING:
            if "kv_backend" not in kwargs:
                self.kv_backend = KVBackend.MEMORY
            if "cron_enabled" not in kwargs:
                self.cron_enabled = False

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == Environment.TESTING


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ["true", "1", "yes", "on"]


def load_settings() -> Settings:
    """Load settings from environment variables."""

    # Load .env file if it exists
    load_dotenv()

    # Parse CORS origins from comma-separated string
    cors_origins_str = os.getenv("ARNI_CORS_ORIGINS", "*")
    if cors_origins_str == "*":
        cors_origins = ["*"]
    else:
        cors_origins = [origin.strip() for origin in cors_origins_str.split(",")]

    overrides: dict[str, Any] = {}

    # Backend and cron defaults depend on the environment unless set explicitly
    kv_backend = os.getenv("ARNI_KV_BACKEND")
    if kv_backend:
        overrides["kv_backend"] = KVBackend(kv_backend.lower())
    kv_db_path = os.getenv("ARNI_KV_DB_PATH")
    if kv_db_path:
        overrides["kv_db_path"] = Path(kv_db_path)
    if os.getenv("ARNI_CRON_ENABLED") is not None:
        overrides["cron_enabled"] = _env_bool("ARNI_CRON_ENABLED", "true")

    return Settings(
        environment=Environment(os.getenv("ARNI_ENV", "development")),
        version=os.getenv("ARNI_VERSION", "4.0.0"),
        api_title=os.getenv("ARNI_API_TITLE", "Arni API"),
        cors_allow_origins=cors_origins,
        api_key=os.getenv("ARNI_API_KEY", "arni-2026"),
        log_level=os.getenv("ARNI_LOG_LEVEL", "INFO").upper(),
        webhook_ttl=int(os.getenv("ARNI_WEBHOOK_TTL", str(30 * SECONDS_PER_DAY))),
        usage_ttl=int(os.getenv("ARNI_USAGE_TTL", str(90 * SECONDS_PER_DAY))),
        log_ttl=int(os.getenv("ARNI_LOG_TTL", str(7 * SECONDS_PER_DAY))),
        traffic_ttl=int(os.getenv("ARNI_TRAFFIC_TTL", str(7 * SECONDS_PER_DAY))),
        max_tokens_limit=int(os.getenv("ARNI_MAX_TOKENS_LIMIT", "88000")),
        weekly_tokens_limit=int(os.getenv("ARNI_WEEKLY_TOKENS_LIMIT", "400000")),
        window_duration_ms=int(os.getenv("ARNI_WINDOW_DURATION_MS", "18000000")),
        opus_cost_in=float(os.getenv("ARNI_OPUS_COST_IN", "0.015")),
        opus_cost_out=float(os.getenv("ARNI_OPUS_COST_OUT", "0.075")),
        default_list_limit=int(os.getenv("ARNI_DEFAULT_LIST_LIMIT", "100")),
        webhook_list_limit=int(os.getenv("ARNI_WEBHOOK_LIST_LIMIT", "50")),
        proxy_timeout=float(os.getenv("ARNI_PROXY_TIMEOUT", "30.0")),
        cron_interval_seconds=int(os.getenv("ARNI_CRON_INTERVAL", "3600")),
        **overrides,
    )
