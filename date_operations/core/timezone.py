"""
Timezone helpers: every calendar comparison happens in one configured zone.
"""

from datetime import date, datetime, timezone as dt_timezone
from typing import Callable, Optional, Union
from zoneinfo import ZoneInfo

DateLike = Union[date, datetime]
Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Current instant in UTC."""
    return datetime.now(dt_timezone.utc)


def resolve_zone(name: str) -> ZoneInfo:
    """Load an IANA timezone by name."""
    return ZoneInfo(name)


def to_local_date(value: DateLike, zone: ZoneInfo) -> date:
    """
    Normalize a date or datetime to a calendar day in the given zone.

    Aware datetimes are converted to the zone first. Naive datetimes are
    treated as already local. Plain dates pass through unchanged.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(zone)
        return value.date()
    return value


def today_in(zone: ZoneInfo, clock: Optional[Clock] = None) -> date:
    """Today's calendar date in the given zone."""
    now = (clock or system_clock)()
    return to_local_date(now, zone)


def parse_date(date_string: str) -> date:
    """
    Parse an ISO calendar date (YYYY-MM-DD).

    Raises:
        ValueError: If the string is not a valid ISO date.
    """
    try:
        return date.fromisoformat(date_string.strip())
    except (AttributeError, ValueError):
        raise ValueError(
            f"Invalid date string: {date_string}. Expected ISO format (YYYY-MM-DD)"
        )


def parse_date_input(value: str, zone: ZoneInfo, clock: Optional[Clock] = None) -> date:
    """Parse a tool date argument: ISO date or the literal "today"."""
    if isinstance(value, str) and value.strip().lower() == "today":
        return today_in(zone, clock)
    return parse_date(value)
