"""View models for the HTML status and dashboard pages."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from core.models.domain.records import TrafficUsage
from core.models.domain.usage import AggregateStats, UsageTotals
from core.models.domain.window import ReconciledWindow
from core.utils import format_tokens, utc_date_key, utc_now

OK_COLOR = "#10b981"
WARN_COLOR = "#f59e0b"
ALERT_COLOR = "#ef4444"
MUTED_COLOR = "#888"

MODEL_COLORS: dict[str, str] = {
    "opus": "#a78bfa",
    "sonnet": "#818cf8",
    "haiku": "#06b6d4",
    "glm": WARN_COLOR,
    "gemini": OK_COLOR,
    "gpt": ALERT_COLOR,
}

TASK_COLORS: dict[str, str] = {
    "orchestration": "#a78bfa",
    "planning": "#818cf8",
    "security": "#f43f5e",
    "coding": WARN_COLOR,
    "testing": OK_COLOR,
    "refactoring": "#06b6d4",
    "research": "#8b5cf6",
    "documentation": "#64748b",
    "general": MUTED_COLOR,
}

# Daily free-tier allowances shown on the traffic gauges
TRAFFIC_ALLOWANCES: dict[str, int] = {
    "requests": 100_000,
    "kv_reads": 100_000,
    "kv_writes": 1_000,
}

MAX_MODEL_ROWS = 8
DAILY_HISTORY_DAYS = 7

# (method, path, description) per section of the status page
ENDPOINT_SECTIONS: list[tuple[str, list[tuple[str, str, str]]]] = [
    (
        "Status",
        [
            ("GET", "/health", "Health check + stats"),
            ("GET", "/stats", "Counters"),
            ("GET", "/api/ping", "Ping"),
            ("GET", "/dashboard", "Usage dashboard"),
        ],
    ),
    (
        "Webhooks",
        [
            ("POST", "/webhook", "Receive webhook"),
            ("GET", "/webhooks", "List received webhooks"),
        ],
    ),
    (
        "Memory",
        [
            ("GET", "/memory", "List keys"),
            ("GET", "/memory/{key}", "Read value"),
            ("PUT", "/memory/{key}", "Store value"),
            ("DELETE", "/memory/{key}", "Delete value"),
        ],
    ),
    (
        "Tasks & notes",
        [
            ("GET", "/tasks", "List tasks"),
            ("POST", "/tasks", "Create task"),
            ("PUT", "/tasks/{id}", "Update task"),
            ("DELETE", "/tasks/{id}", "Delete task"),
            ("GET", "/notes", "List notes"),
            ("POST", "/notes", "Create note"),
            ("PUT", "/notes/{id}", "Update note"),
            ("DELETE", "/notes/{id}", "Delete note"),
        ],
    ),
    (
        "Usage",
        [
            ("POST", "/usage", "Log model usage"),
            ("GET", "/usage", "Recent usage records"),
            ("GET", "/usage/stats", "Aggregated statistics"),
            ("GET", "/usage/live", "Live feed"),
            ("GET", "/usage/window", "Rolling window and weekly budget"),
        ],
    ),
    (
        "Other",
        [
            ("GET", "/logs", "Activity logs"),
            ("GET", "/config", "Get config"),
            ("PUT", "/config", "Update config"),
            ("POST", "/proxy", "HTTP proxy"),
        ],
    ),
]


@dataclass
class Gauge:
    """A usage bar: amount used against a limit."""

    label: str
    used: int
    limit: int
    color: str
    caption: str = ""

    @property
    def percent(self) -> float:
        if self.limit <= 0:
            return 100.0
        return min(self.used / self.limit * 100, 100.0)

    @property
    def remaining(self) -> int:
        return max(self.limit - self.used, 0)


@dataclass
class BarRow:
    """One row of a horizontal bar chart."""

    label: str
    requests: int
    tokens: int
    percent: float
    color: str


def window_color(percent: float) -> str:
    if percent >= 100:
        return ALERT_COLOR
    if percent > 80:
        return WARN_COLOR
    return OK_COLOR


def weekly_color(percent: float) -> str:
    if percent > 80:
        return ALERT_COLOR
    if percent > 50:
        return WARN_COLOR
    return OK_COLOR


def model_color(model: str) -> str:
    name = model.lower()
    for marker, color in MODEL_COLORS.items():
        if marker in name:
            return color
    return MUTED_COLOR


def short_model_name(model: str) -> str:
    return model.split("/")[-1].replace("claude-", "")[:20]


def bar_rows(
    buckets: dict[str, UsageTotals],
    color_for: Callable[[str], str],
    label_for: Callable[[str], str] = str,
) -> list[BarRow]:
    """Buckets sorted by request count, scaled to the busiest one."""
    entries = sorted(buckets.items(), key=lambda item: item[1].requests, reverse=True)
    busiest = max((totals.requests for _, totals in entries), default=0) or 1
    return [
        BarRow(
            label=label_for(name),
            requests=totals.requests,
            tokens=totals.tokens_in + totals.tokens_out,
            percent=round(totals.requests / busiest * 100),
            color=color_for(name),
        )
        for name, totals in entries
    ]


def daily_rows(
    daily: dict[str, UsageTotals], now: datetime, days: int = DAILY_HISTORY_DAYS
) -> list[BarRow]:
    """The last ``days`` UTC dates, oldest first, including empty days."""
    dates = [utc_date_key(now - timedelta(days=offset)) for offset in range(days)]
    buckets = {date: daily.get(date, UsageTotals()) for date in reversed(dates)}
    busiest = max((totals.requests for totals in buckets.values()), default=0) or 1
    return [
        BarRow(
            label=date[5:],
            requests=totals.requests,
            tokens=totals.tokens_in + totals.tokens_out,
            percent=round(totals.requests / busiest * 100),
            color="#a78bfa",
        )
        for date, totals in buckets.items()
    ]


def build_dashboard_context(
    stats: AggregateStats,
    traffic: TrafficUsage,
    window: ReconciledWindow,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Everything the dashboard template renders, derived from stored records."""
    now = now or utc_now()

    window_gauge = Gauge(
        label="5h Window",
        used=window.tokens_used,
        limit=window.tokens_limit,
        color=OK_COLOR,
        caption=f"resets in {window.time_remaining_hours}h",
    )
    window_gauge.color = window_color(window_gauge.percent)

    weekly_gauge = Gauge(
        label="Weekly",
        used=window.weekly_tokens_used,
        limit=window.weekly_tokens_limit,
        color=OK_COLOR,
        caption=f"Mon reset ({window.days_until_week_reset}d)",
    )
    weekly_gauge.color = weekly_color(weekly_gauge.percent)

    if window_gauge.percent >= 100:
        availability = "LIMIT REACHED"
    elif window_gauge.percent > 80:
        availability = "Near Limit"
    else:
        availability = "Available"

    traffic_gauges = []
    for field, allowance in TRAFFIC_ALLOWANCES.items():
        used = getattr(traffic, field)
        gauge = Gauge(label=field, used=used, limit=allowance, color=OK_COLOR)
        if gauge.percent > 80:
            gauge.color = ALERT_COLOR
        traffic_gauges.append(gauge)

    task_columns = sorted(
        {task for row in stats.model_task_matrix.values() for task in row}
    )
    matrix = [
        (short_model_name(model), [row.get(task, 0) for task in task_columns])
        for model, row in sorted(stats.model_task_matrix.items())
    ]

    return {
        "availability": availability,
        "window_gauge": window_gauge,
        "weekly_gauge": weekly_gauge,
        "sessions": window.sessions,
        "totals": stats.totals,
        "providers": bar_rows(stats.providers, lambda _: "#a78bfa"),
        "task_types": bar_rows(
            stats.task_types, lambda name: TASK_COLORS.get(name, MUTED_COLOR)
        ),
        "models": bar_rows(stats.models, model_color, short_model_name)[
            :MAX_MODEL_ROWS
        ],
        "matrix_columns": task_columns,
        "matrix": matrix,
        "daily": daily_rows(stats.daily, now),
        "traffic": traffic_gauges,
        "traffic_date": traffic.date,
        "last_updated": stats.last_updated,
        "format_tokens": format_tokens,
    }
