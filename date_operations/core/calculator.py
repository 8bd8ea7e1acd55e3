"""
Working-day calculator logic.
"""

from datetime import date, timedelta
from typing import Union

from date_operations.core.holiday_cache import HolidayCache
from date_operations.core.timezone import DateLike, to_local_date
from date_operations.data.schemas import Direction

ONE_DAY = timedelta(days=1)


class WorkingDayCalculator:
    """Calculates working days considering weekends and holidays."""

    def __init__(self, holiday_cache: HolidayCache):
        """
        Initialize the working-day calculator.

        Args:
            holiday_cache: Cache providing holiday lookups in the configured timezone.
        """
        self.holiday_cache = holiday_cache
        self.zone = holiday_cache.zone

    def _day(self, value: DateLike) -> date:
        return to_local_date(value, self.zone)

    def is_weekend(self, value: DateLike) -> bool:
        """Saturday or Sunday in the configured timezone."""
        return self._day(value).weekday() >= 5

    def is_working_day(self, value: DateLike) -> bool:
        """
        Check whether a day is a working day.

        Args:
            value: Date or datetime to check.

        Returns:
            True if the day is neither a weekend day nor a holiday.
        """
        day = self._day(value)
        if self.is_weekend(day):
            return False
        return not self.holiday_cache.is_holiday(day)

    def next_working_day(self, from_date: DateLike) -> date:
        """
        Get the first working day strictly after ``from_date``.

        Args:
            from_date: Reference date (not itself considered).

        Returns:
            The next working day.
        """
        current = self._day(from_date) + ONE_DAY
        while not self.is_working_day(current):
            current += ONE_DAY
        return current

    def step_working_days(
        self,
        start: DateLike,
        num_days: int,
        direction: Union[Direction, str] = Direction.FORWARD,
    ) -> date:
        """
        Move ``num_days`` working days forward or backward from ``start``.

        Only days that are working days count as a step; ``start`` itself
        never counts.

        Args:
            start: Starting date.
            num_days: Number of working days to move (non-negative).
            direction: "forward" or "backward".

        Returns:
            The date reached after exactly ``num_days`` working-day steps.

        Raises:
            ValueError: If num_days is negative or direction is unknown.
        """
        if num_days < 0:
            raise ValueError("num_days must be non-negative")

        if not isinstance(direction, Direction):
            direction = str(direction).strip().lower()
        try:
            direction = Direction(direction)
        except ValueError:
            valid = ", ".join(d.value for d in Direction)
            raise ValueError(f"Invalid direction: {direction}. Valid directions: {valid}")

        step = ONE_DAY if direction == Direction.FORWARD else -ONE_DAY
        current = self._day(start)
        counted = 0

        while counted < num_days:
            current += step
            if self.is_working_day(current):
                counted += 1

        return current

    def working_days_between(self, start: DateLike, end: DateLike) -> int:
        """
        Count working days in the inclusive range [start, end].

        Args:
            start: First day of the range.
            end: Last day of the range.

        Returns:
            Number of working days, or 0 if start is after end.
        """
        current = self._day(start)
        last = self._day(end)

        if current > last:
            return 0

        working_days = 0
        while current <= last:
            if self.is_working_day(current):
                working_days += 1
            current += ONE_DAY

        return working_days
