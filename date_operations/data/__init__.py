"""
Data models and schemas for date operations.
"""

from date_operations.data.schemas import (
    Config,
    Direction,
    HolidayEntry,
    HolidayFetchResult,
    HolidaySourceKind,
    SprintDates,
    SprintInfo,
)

__all__ = [
    "Config",
    "Direction",
    "HolidayEntry",
    "HolidayFetchResult",
    "HolidaySourceKind",
    "SprintDates",
    "SprintInfo",
]
