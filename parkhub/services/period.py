"""Report period bounds: half-open [start, end) in venue wall-clock time."""
from datetime import date, datetime, timedelta
from typing import NamedTuple, Optional

from parkhub.core.clock import venue_now, venue_tz
from parkhub.core.exceptions import InvalidPeriod

PERIODS = ("day", "week", "month")


class ReportWindow(NamedTuple):
    start: datetime
    end: datetime  # exclusive
    label: str


def _midnight(d: date) -> datetime:
    return datetime.combine(d, datetime.min.time())


def _next_month_start(d: date) -> datetime:
    if d.month == 12:
        return datetime(d.year + 1, 1, 1)
    return datetime(d.year, d.month + 1, 1)


def resolve_period(period: str, now: Optional[datetime] = None) -> ReportWindow:
    """
    Bounds of the current day, week (Monday based) or calendar month.
    `now` defaults to the venue clock; an aware datetime is converted to venue time.
    """
    if period not in PERIODS:
        raise InvalidPeriod("Invalid time period specified. Use 'day', 'week', or 'month'")
    if now is None:
        now = venue_now()
    elif now.tzinfo is not None:
        now = now.astimezone(venue_tz()).replace(tzinfo=None)
    today = now.date()

    if period == "day":
        start = _midnight(today)
        return ReportWindow(start, start + timedelta(days=1), start.strftime("%Y-%m-%d"))

    if period == "week":
        # weekday() is 0 on Monday, so a Monday anchors to itself
        start = _midnight(today - timedelta(days=today.weekday()))
        return ReportWindow(
            start,
            start + timedelta(days=7),
            f"Week starting {start.strftime('%Y-%m-%d')}",
        )

    start = datetime(today.year, today.month, 1)
    return ReportWindow(start, _next_month_start(today), start.strftime("%Y-%m"))
