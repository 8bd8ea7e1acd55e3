"""
Date rendering in the configured timezone.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from date_operations.core.timezone import DateLike, to_local_date


def format_iso_date(value: DateLike, zone: ZoneInfo) -> str:
    """YYYY-MM-DD."""
    return to_local_date(value, zone).isoformat()


def format_long_date(value: DateLike, zone: ZoneInfo) -> str:
    """e.g. "Monday, January 6, 2025"."""
    day = to_local_date(value, zone)
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def weekday_name(value: DateLike, zone: ZoneInfo) -> str:
    return f"{to_local_date(value, zone):%A}"


def _localize(value: datetime, zone: ZoneInfo) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)


def format_iso_datetime(value: datetime, zone: ZoneInfo) -> str:
    """ISO 8601 with numeric UTC offset, e.g. "2025-01-06T16:00:00+00:00"."""
    return _localize(value, zone).isoformat(timespec="seconds")


def format_display_datetime(value: datetime, zone: ZoneInfo) -> str:
    """e.g. "Monday, January 6, 2025 at 4:00 PM"."""
    local = _localize(value, zone)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{format_long_date(local, zone)} at {hour}:{local.minute:02d} {meridiem}"
