"""Report period bounds."""
from datetime import datetime, timedelta, timezone

import pytest

from parkhub.core.exceptions import InvalidPeriod
from parkhub.services.period import resolve_period


def test_day_window():
    w = resolve_period("day", datetime(2025, 4, 10, 15, 30))
    assert w.start == datetime(2025, 4, 10)
    assert w.end == datetime(2025, 4, 11)
    assert w.label == "2025-04-10"


def test_week_starts_on_monday():
    # 2025-04-10 is a Thursday
    w = resolve_period("week", datetime(2025, 4, 10, 9, 0))
    assert w.start == datetime(2025, 4, 7)
    assert w.end == datetime(2025, 4, 14)
    assert w.label == "Week starting 2025-04-07"


def test_week_on_monday_anchors_to_same_day():
    w = resolve_period("week", datetime(2025, 4, 7, 0, 0))
    assert w.start == datetime(2025, 4, 7)


def test_week_on_sunday_goes_back_six_days():
    w = resolve_period("week", datetime(2025, 4, 13, 23, 59))
    assert w.start == datetime(2025, 4, 7)
    assert w.end == datetime(2025, 4, 14)


def test_month_window():
    w = resolve_period("month", datetime(2025, 2, 14))
    assert w.start == datetime(2025, 2, 1)
    assert w.end == datetime(2025, 3, 1)
    assert w.label == "2025-02"


def test_month_rollover_on_december_31():
    w = resolve_period("month", datetime(2024, 12, 31, 23, 0))
    assert w.start == datetime(2024, 12, 1)
    assert w.end == datetime(2025, 1, 1)
    assert w.label == "2024-12"


@pytest.mark.parametrize("period", ["day", "week", "month"])
def test_consecutive_windows_tile_without_gaps(period):
    first = resolve_period(period, datetime(2024, 12, 30, 12, 0))
    second = resolve_period(period, first.end)
    assert second.start == first.end
    assert second.end > second.start


@pytest.mark.parametrize("period", ["year", "", "Day", "days"])
def test_unknown_period_is_rejected(period):
    with pytest.raises(InvalidPeriod) as exc:
        resolve_period(period, datetime(2025, 4, 10))
    assert exc.value.message == "Invalid time period specified. Use 'day', 'week', or 'month'"


def test_aware_now_is_converted_to_venue_time():
    # 20:00 UTC is 03:00 next day in Asia/Jakarta (UTC+7)
    w = resolve_period("day", datetime(2025, 4, 10, 20, 0, tzinfo=timezone.utc))
    assert w.label == "2025-04-11"
    assert w.end - w.start == timedelta(days=1)
