"""
Due-date policy: next working day at a fixed hour, on a Friday the step is taken twice.
"""

import logging
import re
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Tuple

from date_operations.core.calculator import WorkingDayCalculator
from date_operations.core.timezone import Clock, DateLike, to_local_date, today_in

logger = logging.getLogger(__name__)

FRIDAY = 4


class DueDatePolicy:
    """Computes task due dates from a reference day."""

    def __init__(
        self,
        calculator: WorkingDayCalculator,
        due_hour: int = 16,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the due-date policy.

        Args:
            calculator: Working-day calculator (shares the configured timezone).
            due_hour: Hour of day (0-23) for every due date.
            clock: Callable returning the current aware datetime.
        """
        self.calculator = calculator
        self.zone = calculator.zone
        self.due_hour = due_hour
        self._clock = clock
        self._rules = self._build_rules()

    def today(self) -> date:
        return today_in(self.zone, self._clock)

    def due_date(self, from_date: Optional[DateLike] = None) -> datetime:
        """
        Get the due date for work received on ``from_date``.

        The next working day is taken once, or twice when ``from_date`` is a
        Friday. A Friday therefore gives the following Tuesday, or later
        when the Monday or Tuesday is a holiday.

        Args:
            from_date: Reference day. Defaults to today in the configured zone.

        Returns:
            Timezone-aware datetime at the due hour, zero minutes and seconds.
        """
        start = to_local_date(from_date, self.zone) if from_date is not None else self.today()

        due_day = self.calculator.next_working_day(start)
        if start.weekday() == FRIDAY:
            due_day = self.calculator.next_working_day(due_day)

        return datetime(
            due_day.year, due_day.month, due_day.day, self.due_hour, 0, 0, 0, tzinfo=self.zone
        )

    def parse_request(self, request: str) -> datetime:
        """
        Resolve a natural-language due-date request.

        Supported: "tomorrow", "next working day", "default", "in N day(s)"
        and "in N week(s)". Anything else falls back to the default due date.
        """
        text = (request or "").strip().lower()
        today = self.today()

        for pattern, handler in self._rules:
            match = pattern.search(text)
            if match:
                return self.due_date(handler(today, match))

        logger.debug(f"Unrecognized due-date request {request!r}, using default")
        return self.due_date(today)

    def _build_rules(self) -> List[Tuple[re.Pattern, Callable[[date, re.Match], date]]]:
        """Ordered (pattern, handler) pairs; the first match wins."""
        return [
            (re.compile(r"^tomorrow$"), lambda today, m: today),
            (re.compile(r"^(next working day|default)$"), lambda today, m: today),
            (
                re.compile(r"in (\d+) days?"),
                lambda today, m: today + timedelta(days=int(m.group(1))),
            ),
            (
                re.compile(r"in (\d+) weeks?"),
                lambda today, m: today + timedelta(weeks=int(m.group(1))),
            ),
        ]
