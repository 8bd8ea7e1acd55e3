"""
Shared fixtures: a fake holiday source, a controllable clock and config helpers.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from date_operations.core.calculator import WorkingDayCalculator
from date_operations.core.due_date import DueDatePolicy
from date_operations.core.holiday_cache import HolidayCache
from date_operations.data.schemas import Config, HolidayEntry, HolidayFetchResult
from date_operations.service import DateOperationsService

# England and Wales bank holidays, deliberately out of order
UK_HOLIDAYS = [
    HolidayEntry(holiday_date=date(2026, 1, 1), title="New Year's Day"),
    HolidayEntry(holiday_date=date(2025, 12, 26), title="Boxing Day"),
    HolidayEntry(holiday_date=date(2025, 12, 25), title="Christmas Day"),
    HolidayEntry(holiday_date=date(2026, 4, 3), title="Good Friday"),
    HolidayEntry(holiday_date=date(2026, 4, 6), title="Easter Monday"),
    HolidayEntry(holiday_date=date(2026, 5, 4), title="Early May bank holiday"),
    HolidayEntry(holiday_date=date(2026, 5, 25), title="Spring bank holiday"),
    HolidayEntry(holiday_date=date(2026, 8, 31), title="Summer bank holiday"),
]


class FakeHolidaySource:
    """Records every fetch and returns canned entries or an error."""

    def __init__(self, entries=None, error=None):
        self.entries = list(entries or [])
        self.error = error
        self.calls = []

    def fetch(self, country, years):
        self.calls.append((country, list(years)))
        if self.error:
            return HolidayFetchResult(country=country, error=self.error)
        return HolidayFetchResult(country=country, entries=self.entries)

    def factory(self, config, country):
        return self


class MutableClock:
    """Clock whose current instant can be moved by tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_config(**overrides) -> Config:
    """Create a Config for the UK with optional field overrides."""
    values = {"holiday_country": "GB", "timezone": "Europe/London", "due_hour": 16}
    values.update(overrides)
    return Config(**values)


def no_network(config, country):
    raise AssertionError(f"Holiday source requested for {country}")


@pytest.fixture
def clock():
    """Clock fixed at Wednesday 2025-12-10 10:00 UTC."""
    return MutableClock(datetime(2025, 12, 10, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def uk_source():
    """Fake source serving UK bank holidays."""
    return FakeHolidaySource(UK_HOLIDAYS)


@pytest.fixture
def holiday_cache(uk_source, clock):
    """Create a HolidayCache backed by the fake UK source."""
    return HolidayCache(make_config(), source_factory=uk_source.factory, clock=clock)


@pytest.fixture
def calculator(holiday_cache):
    """Create a WorkingDayCalculator with UK holidays."""
    return WorkingDayCalculator(holiday_cache)


@pytest.fixture
def weekend_only_calculator(clock):
    """Create a WorkingDayCalculator with holidays disabled."""
    cache = HolidayCache(
        make_config(holiday_country="NONE"), source_factory=no_network, clock=clock
    )
    return WorkingDayCalculator(cache)


@pytest.fixture
def due_policy(calculator, clock):
    """Create a DueDatePolicy with a 16:00 due hour."""
    return DueDatePolicy(calculator, due_hour=16, clock=clock)


@pytest.fixture
def service(uk_source, clock):
    """Create a DateOperationsService with UK holidays and a fixed clock."""
    return DateOperationsService(make_config(), source_factory=uk_source.factory, clock=clock)
