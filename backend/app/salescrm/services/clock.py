"""Local wall-clock helpers.

Timestamps are stored as naive datetimes in the configured business timezone,
so every "today" window is computed against the same calendar.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from configs import settings


def business_tz() -> ZoneInfo:
    """Return the configured business timezone."""

    return ZoneInfo(settings.TIMEZONE)


def local_now() -> datetime:
    """Return the current local time as a naive datetime."""

    return datetime.now(business_tz()).replace(tzinfo=None, microsecond=0)


def local_today() -> date:
    return local_now().date()


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive local time; naive values pass through."""

    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(business_tz()).replace(tzinfo=None)


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Return ``[midnight, next midnight)`` for a calendar day."""

    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def range_bounds(
    start_day: Optional[date], end_day: Optional[date]
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Turn an inclusive day range into half-open datetime bounds."""

    start = day_bounds(start_day)[0] if start_day else None
    end = day_bounds(end_day)[1] if end_day else None
    return start, end
