"""Tests for dashboard view models."""

from datetime import datetime

import pytest

from core.models.domain.records import TrafficUsage
from core.models.domain.usage import AggregateStats, UsageEvent, UsageTotals
from core.services.dashboard import (
    ALERT_COLOR,
    MUTED_COLOR,
    OK_COLOR,
    WARN_COLOR,
    Gauge,
    bar_rows,
    build_dashboard_context,
    daily_rows,
    model_color,
    short_model_name,
    weekly_color,
    window_color,
)
from core.services.usage_aggregator import apply_event
from core.services.window_accounting import WindowLimits, read_window


@pytest.mark.parametrize(
    "percent,expected", [(0, OK_COLOR), (81, WARN_COLOR), (100, ALERT_COLOR)]
)
def test_window_color(percent: float, expected: str) -> None:
    assert window_color(percent) == expected


@pytest.mark.parametrize(
    "percent,expected", [(50, OK_COLOR), (51, WARN_COLOR), (81, ALERT_COLOR)]
)
def test_weekly_color(percent: float, expected: str) -> None:
    assert weekly_color(percent) == expected


def test_model_helpers() -> None:
    assert model_color("claude-opus-4") == "#a78bfa"
    assert model_color("mystery") == MUTED_COLOR
    assert short_model_name("anthropic/claude-sonnet-4") == "sonnet-4"


def test_gauge_clamps() -> None:
    gauge = Gauge(label="x", used=150, limit=100, color=OK_COLOR)
    assert gauge.percent == 100.0
    assert gauge.remaining == 0
    assert Gauge(label="x", used=0, limit=0, color=OK_COLOR).percent == 100.0


def test_bar_rows_sorted_and_scaled() -> None:
    rows = bar_rows(
        {
            "a": UsageTotals(requests=1, tokens_in=5),
            "b": UsageTotals(requests=4, tokens_out=7),
        },
        lambda _: OK_COLOR,
    )
    assert [(r.label, r.percent, r.tokens) for r in rows] == [
        ("b", 100, 7),
        ("a", 25, 5),
    ]
    assert bar_rows({}, lambda _: OK_COLOR) == []


def test_daily_rows_cover_last_week(now: datetime) -> None:
    rows = daily_rows({"2026-03-04": UsageTotals(requests=2)}, now)

    assert len(rows) == 7
    assert rows[0].label == "02-26"
    assert rows[-1].label == "03-04"
    assert rows[-1].percent == 100
    assert rows[0].requests == 0


def test_build_dashboard_context(now: datetime) -> None:
    stats = AggregateStats()
    event = UsageEvent(
        provider="anthropic", model="claude-opus-4", tokens_in=100, task_type="coding"
    )
    apply_event(stats, event, now, 0.015, 0.075)
    window = read_window(None, now, WindowLimits())
    traffic = TrafficUsage(date="2026-03-04", requests=90_000, kv_writes=10)

    context = build_dashboard_context(stats, traffic, window, now)

    assert context["availability"] == "Available"
    assert context["window_gauge"].color == OK_COLOR
    assert context["weekly_gauge"].caption == "Mon reset (5d)"
    assert context["matrix_columns"] == ["coding"]
    assert context["matrix"] == [("opus-4", [1])]
    assert [g.color for g in context["traffic"]] == [ALERT_COLOR, OK_COLOR, OK_COLOR]
    assert context["traffic_date"] == "2026-03-04"
    assert context["models"][0].label == "opus-4"


def test_availability_at_limit(now: datetime) -> None:
    limits = WindowLimits(tokens_limit=100)
    window = read_window(None, now, limits).model_copy(update={"tokens_used": 100})

    context = build_dashboard_context(
        AggregateStats(), TrafficUsage(date="2026-03-04"), window, now
    )
    assert context["availability"] == "LIMIT REACHED"
    assert context["window_gauge"].color == ALERT_COLOR
