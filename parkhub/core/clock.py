"""Venue clock: naive wall-clock time in the configured venue time zone."""
from datetime import datetime
from zoneinfo import ZoneInfo

from parkhub.config import settings


def venue_tz() -> ZoneInfo:
    return ZoneInfo(settings.venue_timezone)


def venue_now() -> datetime:
    return datetime.now(venue_tz()).replace(tzinfo=None)
