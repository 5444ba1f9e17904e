# File: src/parkmeter/utils/datetime.py
"""Timezone-aware datetime utilities for the parking service."""

import os
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

# Local timezone used to decide where a calendar day starts (statistics)
APP_TIMEZONE = ZoneInfo(os.getenv("APP_TIMEZONE", "America/Mexico_City"))


def now_local() -> datetime:
    """Get current datetime in the app timezone."""
    return datetime.now(APP_TIMEZONE)


def today_local() -> date:
    """Get today's date in the app timezone."""
    return now_local().date()


def now_utc() -> datetime:
    """Get current UTC datetime as NAIVE for storage."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC. Naive values are assumed UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def local_day_bounds_utc(day: date) -> tuple[datetime, datetime]:
    """Return [local midnight, next local midnight) of `day` as naive UTC datetimes."""
    start = datetime.combine(day, time.min, tzinfo=APP_TIMEZONE)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=APP_TIMEZONE)
    return to_utc_naive(start), to_utc_naive(end)
