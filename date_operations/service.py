"""
Named date operations shared by the MCP server, the REST API and the CLI.

Each operation takes JSON-like arguments and returns a JSON-serializable
dict. ``dispatch`` turns every failure into an ``{"error": ...}`` payload.
"""

import inspect
import logging
from typing import Any, Callable, Dict, List, Optional

from date_operations.core.calculator import WorkingDayCalculator
from date_operations.core.due_date import DueDatePolicy
from date_operations.core.holiday_cache import HolidayCache, SourceFactory
from date_operations.core.holiday_sources import create_source
from date_operations.core.sprint import current_sprint_info, sprint_dates
from date_operations.core.timezone import Clock, parse_date_input, resolve_zone, today_in
from date_operations.data.schemas import Config
from date_operations.output.date_format import (
    format_display_datetime,
    format_iso_date,
    format_iso_datetime,
    format_long_date,
    weekday_name,
)

logger = logging.getLogger(__name__)

DEFAULT_MONTHS_AHEAD = 6


def _as_int(value: Any, name: str) -> int:
    """Coerce a JSON number or numeric string to int."""
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not number.is_integer():
        raise ValueError(f"{name} must be a whole number, got {value!r}")
    return int(number)


class DateOperationsService:
    """Wires configuration, holiday cache, calculator and due-date policy together."""

    def __init__(
        self,
        config: Config,
        source_factory: SourceFactory = create_source,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the service.

        Args:
            config: Resolved configuration.
            source_factory: Holiday source factory (replaced in tests).
            clock: Callable returning the current aware datetime.
        """
        self.config = config
        self.zone = resolve_zone(config.timezone)
        self._clock = clock

        self.holiday_cache = HolidayCache(config, source_factory=source_factory, clock=clock)
        self.calculator = WorkingDayCalculator(self.holiday_cache)
        self.due_policy = DueDatePolicy(self.calculator, due_hour=config.due_hour, clock=clock)

        self._operations: Dict[str, Callable[..., dict]] = {
            "get_today": self.get_today,
            "calculate_working_days": self.calculate_working_days,
            "get_next_working_day": self.get_next_working_day,
            "get_working_days_between": self.get_working_days_between,
            "is_bank_holiday": self.is_bank_holiday,
            "get_upcoming_bank_holidays": self.get_upcoming_bank_holidays,
            "calculate_sprint_dates": self.calculate_sprint_dates,
            "get_current_sprint_info": self.get_current_sprint_info,
            "get_due_date": self.get_due_date,
            "parse_due_date_request": self.parse_due_date_request,
        }

    @property
    def tool_names(self) -> List[str]:
        return list(self._operations)

    def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> dict:
        """
        Run a named operation.

        Raises:
            ValueError: For unknown operations, bad arguments or invalid dates.
        """
        handler = self._operations.get(name)
        if handler is None:
            raise ValueError(f"Unknown tool: {name}")

        arguments = arguments or {}
        try:
            inspect.signature(handler).bind(**arguments)
        except TypeError as e:
            raise ValueError(f"Invalid arguments for {name}: {e}")

        return handler(**arguments)

    def dispatch(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> dict:
        """Run a named operation, returning ``{"error": ...}`` instead of raising."""
        try:
            return self.call(name, arguments)
        except ValueError as e:
            logger.warning(f"{name} failed: {e}")
            return {"error": str(e)}
        except Exception as e:
            logger.exception(f"Unexpected error in {name}")
            return {"error": f"Calculation error: {e}"}

    def _parse(self, value: Any):
        return parse_date_input(value, self.zone, self._clock)

    def _iso(self, value) -> str:
        return format_iso_date(value, self.zone)

    def _long(self, value) -> str:
        return format_long_date(value, self.zone)

    def _due_payload(self, due) -> dict:
        return {
            "due_date": self._iso(due),
            "due_datetime": format_iso_datetime(due, self.zone),
            "formatted": format_display_datetime(due, self.zone),
        }

    # Operations

    def get_today(self) -> dict:
        """Current date in the configured timezone."""
        today = today_in(self.zone, self._clock)
        return {
            "date": self._iso(today),
            "formatted": self._long(today),
            "day_of_week": weekday_name(today, self.zone),
            "timezone": self.config.timezone,
            "is_working_day": self.calculator.is_working_day(today),
        }

    def calculate_working_days(self, start_date: str, num_days: Any, direction: str = "forward") -> dict:
        """Move a number of working days forward or backward."""
        start = self._parse(start_date)
        count = _as_int(num_days, "num_days")
        direction = direction or "forward"
        result = self.calculator.step_working_days(start, count, direction)
        return {
            "start_date": self._iso(start),
            "num_days": count,
            "direction": str(direction).strip().lower(),
            "result_date": self._iso(result),
            "formatted": self._long(result),
        }

    def get_next_working_day(self, from_date: str) -> dict:
        start = self._parse(from_date)
        result = self.calculator.next_working_day(start)
        return {
            "from_date": self._iso(start),
            "next_working_day": self._iso(result),
            "formatted": self._long(result),
        }

    def get_working_days_between(self, start_date: str, end_date: str) -> dict:
        start = self._parse(start_date)
        end = self._parse(end_date)
        return {
            "start_date": self._iso(start),
            "end_date": self._iso(end),
            "working_days": self.calculator.working_days_between(start, end),
        }

    def is_bank_holiday(self, date: str) -> dict:
        day = self._parse(date)
        return {
            "date": self._iso(day),
            "is_bank_holiday": self.holiday_cache.is_holiday(day),
            "country": self.config.holiday_country,
        }

    def get_upcoming_bank_holidays(self, months_ahead: Any = DEFAULT_MONTHS_AHEAD) -> dict:
        months = DEFAULT_MONTHS_AHEAD if months_ahead is None else _as_int(months_ahead, "months_ahead")
        holidays = self.holiday_cache.upcoming_holidays(months)
        return {
            "months_ahead": months,
            "country": self.config.holiday_country,
            "holidays": [
                {"date": self._iso(h.holiday_date), "title": h.title}
                for h in holidays
            ],
        }

    def calculate_sprint_dates(self, start_date: str, sprint_length_weeks: Any) -> dict:
        start = self._parse(start_date)
        result = sprint_dates(start, _as_int(sprint_length_weeks, "sprint_length_weeks"))
        return {
            "sprint_start": self._iso(result.start),
            "sprint_end": self._iso(result.end),
            "length_weeks": result.length_weeks,
            "start_formatted": self._long(result.start),
            "end_formatted": self._long(result.end),
        }

    def get_current_sprint_info(self, first_sprint_start: str, sprint_length_weeks: Any) -> dict:
        first = self._parse(first_sprint_start)
        info = current_sprint_info(
            first,
            _as_int(sprint_length_weeks, "sprint_length_weeks"),
            today_in(self.zone, self._clock),
        )
        return {
            "sprint_number": info.sprint_number,
            "days_into_sprint": info.days_into_sprint,
            "days_remaining": info.days_remaining,
            "current_sprint_start": self._iso(info.current_sprint_start),
            "current_sprint_end": self._iso(info.current_sprint_end),
            "start_formatted": self._long(info.current_sprint_start),
            "end_formatted": self._long(info.current_sprint_end),
            "has_started": info.has_started,
        }

    def get_due_date(self, from_date: Optional[str] = None) -> dict:
        start = self._parse(from_date) if from_date else None
        return self._due_payload(self.due_policy.due_date(start))

    def parse_due_date_request(self, request: str) -> dict:
        payload = {"request": request}
        payload.update(self._due_payload(self.due_policy.parse_request(request)))
        return payload
