"""Timezone-aware datetime utilities for the business's local time."""

import os
from datetime import date, datetime, time, timedelta
from typing import Any, Optional
from zoneinfo import ZoneInfo

# Vietnam: UTC+7 year-round (no DST)
APP_TIMEZONE = ZoneInfo(os.getenv("APP_TIMEZONE", "Asia/Ho_Chi_Minh"))


def now_local() -> datetime:
    """Get current datetime in the business timezone."""
    return datetime.now(APP_TIMEZONE)


def today_local() -> date:
    """Get today's date in the business timezone."""
    return now_local().date()


def to_local(value: datetime) -> datetime:
    """
    Express a datetime in the business timezone.

    Naive datetimes are taken to already be business-local wall time.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=APP_TIMEZONE)
    return value.astimezone(APP_TIMEZONE)


def start_of_day(day: date) -> datetime:
    """Local midnight of the given calendar day."""
    return datetime.combine(day, time.min, tzinfo=APP_TIMEZONE)


def end_of_day(day: date) -> datetime:
    """Last representable instant of the given calendar day, local time."""
    return datetime.combine(day, time.max, tzinfo=APP_TIMEZONE)


def parse_instant(value: Any) -> Optional[datetime]:
    """
    Parse a record timestamp into a business-local aware datetime.

    Accepts datetimes, dates and ISO 8601 strings (with or without offset;
    a bare "YYYY-MM-DD" is local midnight). Anything else, including numbers
    and digit-only strings such as "2024", is unreadable and returns None.
    """
    if isinstance(value, datetime):
        return to_local(value)
    if isinstance(value, date):
        return start_of_day(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text or text.isdigit():
        return None
    try:
        return to_local(datetime.fromisoformat(text))
    except ValueError:
        return None


def local_date_key(value: Any) -> Optional[date]:
    """
    Calendar day a record belongs to, in the business timezone.

    This is the single bucketing function for both daily rows and day
    detail; it never uses the UTC date.
    """
    instant = parse_instant(value)
    if instant is None:
        return None
    return instant.date()


def iter_days(start: date, end: date):
    """Yield every calendar day from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def format_date_vn(day: date) -> str:
    """Format a date the way the Vietnamese UI shows it (dd/mm/yyyy)."""
    return day.strftime("%d/%m/%Y")
