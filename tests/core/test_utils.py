"""Tests for time and JSON helpers."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from core.utils import (
    format_tokens,
    get_week_start,
    loads_or_none,
    loads_or_raw,
    to_epoch_ms,
    utc_date_key,
)

MONDAY = datetime(2026, 3, 2, tzinfo=UTC)


@pytest.mark.parametrize(
    "moment",
    [
        MONDAY,
        MONDAY + timedelta(hours=13, minutes=5),
        MONDAY + timedelta(days=2, hours=12),
        MONDAY + timedelta(days=6, hours=23, minutes=59),
    ],
)
def test_week_start_is_monday_midnight(moment: datetime) -> None:
    assert get_week_start(moment) == to_epoch_ms(MONDAY)


def test_week_start_uses_utc() -> None:
    # Monday 01:00 in UTC+2 is still Sunday in UTC
    local = datetime(2026, 3, 2, 1, 0, tzinfo=timezone(timedelta(hours=2)))
    assert get_week_start(local) == to_epoch_ms(MONDAY - timedelta(days=7))


def test_to_epoch_ms() -> None:
    assert to_epoch_ms(datetime(1970, 1, 1, 0, 0, 1, tzinfo=UTC)) == 1000


def test_utc_date_key() -> None:
    assert utc_date_key(datetime(2026, 3, 4, 23, 30, tzinfo=UTC)) == "2026-03-04"


def test_loads_or_none() -> None:
    assert loads_or_none(None) is None
    assert loads_or_none('{"a": 1}') == {"a": 1}
    assert loads_or_none("{not json") is None


def test_loads_or_raw() -> None:
    assert loads_or_raw("[1, 2]") == [1, 2]
    assert loads_or_raw("plain text") == "plain text"


@pytest.mark.parametrize(
    "num,expected",
    [(0, "0"), (999, "999"), (1500, "1.5K"), (88000, "88.0K"), (2_300_000, "2.3M")],
)
def test_format_tokens(num: int, expected: str) -> None:
    assert format_tokens(num) == expected
