"""Application constants and configuration values."""

from typing import Final

# Singleton keys
WINDOW_USAGE_KEY: Final[str] = "claude_max_usage"
MODEL_STATS_KEY: Final[str] = "model_stats"
COUNTERS_KEY: Final[str] = "stats"
CONFIG_KEY: Final[str] = "config:main"

# Per-record key prefixes
USAGE_PREFIX: Final[str] = "usage:"
TASK_PREFIX: Final[str] = "task:"
NOTE_PREFIX: Final[str] = "note:"
WEBHOOK_PREFIX: Final[str] = "webhook:"
LOG_PREFIX: Final[str] = "log:"
TRAFFIC_PREFIX: Final[str] = "traffic:"

# Request headers
WEBHOOK_SOURCE_HEADER: Final[str] = "X-Webhook-Source"

# Time
MS_PER_SECOND: Final[int] = 1000
MS_PER_HOUR: Final[int] = 60 * 60 * MS_PER_SECOND
MS_PER_DAY: Final[int] = 24 * MS_PER_HOUR
MS_PER_WEEK: Final[int] = 7 * MS_PER_DAY
SECONDS_PER_DAY: Final[int] = 86400

# Usage defaults
UNKNOWN: Final[str] = "unknown"
DEFAULT_TASK_TYPE: Final[str] = "general"
TRACKED_PROVIDER: Final[str] = "anthropic"
TRACKED_MODEL_MARKER: Final[str] = "opus"
REFERENCE_TOKEN_UNIT: Final[int] = 1000
LIVE_USAGE_LIMIT: Final[int] = 10
DEFAULT_LOG_LIMIT: Final[int] = 50

# Providers seeded into a fresh aggregate record
DEFAULT_PROVIDERS: Final[tuple[str, ...]] = (
    "anthropic",
    "openrouter",
    "z_ai",
    "gemini",
    "local",
)

# Store listing
MAX_LIST_LIMIT: Final[int] = 1000

# Traffic counters: path fragments that imply store reads/writes
KV_READ_PATHS: Final[tuple[str, ...]] = (
    "/memory",
    "/usage",
    "/tasks",
    "/notes",
    "/logs",
)
KV_WRITE_PATHS: Final[tuple[str, ...]] = ("/webhook", "/usage", "/tasks", "/notes")

AGENT_NAME: Final[str] = "arni"
