"""Tests for the relative time formatting used by notification items."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from seller_notifications.utils import format_time_ago

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("elapsed", "expected"),
    [
        (timedelta(seconds=30), "0m"),
        (timedelta(minutes=45), "45m"),
        (timedelta(minutes=59, seconds=59), "59m"),
        (timedelta(minutes=90), "1h"),
        (timedelta(hours=23, minutes=59), "23h"),
        (timedelta(hours=50), "2d"),
        (timedelta(days=29, hours=23), "29d"),
    ],
)
def test_format_time_ago_uses_whole_units(elapsed: timedelta, expected: str) -> None:
    assert format_time_ago(NOW - elapsed, now=NOW) == expected


def test_format_time_ago_falls_back_to_a_date_after_thirty_days() -> None:
    assert format_time_ago(NOW - timedelta(days=40), now=NOW) == "9/9/2026"


def test_format_time_ago_accepts_naive_datetimes_as_app_time() -> None:
    naive = (NOW - timedelta(minutes=5)).replace(tzinfo=None)

    assert format_time_ago(naive, now=NOW) == "5m"
