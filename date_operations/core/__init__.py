"""
Core business logic for date operations.
"""

from date_operations.core.calculator import WorkingDayCalculator
from date_operations.core.due_date import DueDatePolicy
from date_operations.core.holiday_cache import HolidayCache

__all__ = [
    "DueDatePolicy",
    "HolidayCache",
    "WorkingDayCalculator",
]
