"""
Tests for the holiday cache.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from conftest import UK_HOLIDAYS, FakeHolidaySource, MutableClock, make_config, no_network
from date_operations.core.calculator import WorkingDayCalculator
from date_operations.core.holiday_cache import HolidayCache, add_months


class TestHolidayCache:
    """Tests for HolidayCache freshness and country handling."""

    def test_second_lookup_within_ttl_uses_cache(self, holiday_cache, uk_source, clock):
        """Two lookups within 24 hours make one fetch."""
        first = holiday_cache.get_holidays()
        clock.advance(hours=23, minutes=59)
        second = holiday_cache.get_holidays()

        assert first == second
        assert "2025-12-25" in first
        assert len(uk_source.calls) == 1

    def test_expired_cache_refetches(self, holiday_cache, uk_source, clock):
        """A lookup after the TTL fetches again."""
        holiday_cache.get_holidays()
        clock.advance(hours=24)
        holiday_cache.get_holidays()

        assert len(uk_source.calls) == 2

    def test_custom_ttl(self, uk_source, clock):
        """The TTL comes from configuration."""
        cache = HolidayCache(
            make_config(cache_ttl_hours=1), source_factory=uk_source.factory, clock=clock
        )
        cache.get_holidays()
        clock.advance(minutes=61)
        cache.get_holidays()

        assert len(uk_source.calls) == 2

    def test_country_change_forces_refetch(self, holiday_cache, uk_source):
        """A different country is never served from the cache."""
        holiday_cache.get_holidays()
        holiday_cache.get_holidays("de")
        holiday_cache.get_holidays("GB")

        assert [call[0] for call in uk_source.calls] == ["GB", "DE", "GB"]

    def test_fetches_current_and_next_year(self, holiday_cache, uk_source):
        """The fetch covers the current and the following calendar year."""
        holiday_cache.get_holidays()

        assert uk_source.calls == [("GB", [2025, 2026])]

    def test_year_follows_configured_timezone(self, uk_source):
        """The current year is taken in the configured zone, not UTC."""
        clock = MutableClock(datetime(2025, 12, 31, 12, 30, tzinfo=timezone.utc))
        cache = HolidayCache(
            make_config(timezone="Pacific/Auckland"), source_factory=uk_source.factory, clock=clock
        )
        cache.get_holidays()

        assert uk_source.calls == [("GB", [2026, 2027])]

    def test_failed_fetch_cached_as_empty(self, clock):
        """A failed fetch yields no holidays and is not repeated within the TTL."""
        source = FakeHolidaySource(error="Connection refused")
        cache = HolidayCache(make_config(), source_factory=source.factory, clock=clock)

        assert cache.get_holidays() == set()
        clock.advance(hours=23)
        assert cache.is_holiday(date(2025, 12, 25)) is False
        assert cache.upcoming_holidays(6) == []
        assert len(source.calls) == 1

    def test_outage_costs_one_fetch_per_calculation(self, clock):
        """Counting a whole year during an outage asks the source once."""
        source = FakeHolidaySource(error="Connection timed out")
        calculator = WorkingDayCalculator(
            HolidayCache(make_config(), source_factory=source.factory, clock=clock)
        )

        assert calculator.working_days_between(date(2025, 1, 1), date(2025, 12, 31)) == 261
        assert calculator.next_working_day(date(2025, 12, 24)) == date(2025, 12, 25)
        assert calculator.step_working_days(date(2025, 12, 1), 20) == date(2025, 12, 29)
        assert len(source.calls) == 1

    def test_recovers_after_ttl(self, clock):
        """Once the failed window expires, fresh data from the source is cached."""
        source = FakeHolidaySource(UK_HOLIDAYS, error="timeout")
        cache = HolidayCache(make_config(), source_factory=source.factory, clock=clock)

        assert cache.get_holidays() == set()
        source.error = None
        assert cache.get_holidays() == set()

        clock.advance(hours=24)
        assert "2025-12-25" in cache.get_holidays()
        cache.get_holidays()

        assert len(source.calls) == 2

    def test_is_holiday_uses_one_fetch(self, holiday_cache, uk_source):
        """Day-by-day lookups share the cached date set."""
        for offset in range(60):
            holiday_cache.is_holiday(date(2025, 12, 1) + timedelta(days=offset))

        assert len(uk_source.calls) == 1

    def test_clear_drops_cached_data(self, holiday_cache, uk_source):
        """clear() makes the next lookup refetch."""
        holiday_cache.get_holidays()
        holiday_cache.clear()
        holiday_cache.get_holidays()

        assert len(uk_source.calls) == 2


class TestHolidaysDisabled:
    """Tests for the NONE country (weekends only)."""

    def test_no_lookup_and_no_holidays(self, clock):
        """With NONE no source is created and nothing is a holiday."""
        cache = HolidayCache(
            make_config(holiday_country="NONE"), source_factory=no_network, clock=clock
        )

        assert cache.enabled is False
        assert cache.get_holidays() == set()
        assert cache.is_holiday(date(2025, 12, 25)) is False
        assert cache.upcoming_holidays(12) == []


class TestHolidayLookup:
    """Tests for is_holiday and upcoming_holidays."""

    def test_is_holiday(self, holiday_cache):
        """Registered dates are holidays, others are not."""
        assert holiday_cache.is_holiday(date(2025, 12, 25)) is True
        assert holiday_cache.is_holiday(date(2025, 12, 24)) is False

    def test_is_holiday_normalizes_aware_datetime(self, holiday_cache):
        """23:30 in New York on Dec 24 is already Dec 25 in London."""
        new_york_evening = datetime(2025, 12, 24, 23, 30, tzinfo=timezone(timedelta(hours=-5)))

        assert holiday_cache.is_holiday(new_york_evening) is True

    def test_upcoming_sorted_within_window(self, holiday_cache):
        """Upcoming holidays are sorted and limited to the window."""
        upcoming = holiday_cache.upcoming_holidays(1)

        assert [h.holiday_date for h in upcoming] == [
            date(2025, 12, 25),
            date(2025, 12, 26),
            date(2026, 1, 1),
        ]
        assert upcoming[0].title == "Christmas Day"

    def test_upcoming_six_months(self, holiday_cache):
        """Six months from 2025-12-10 reaches 2026-06-10."""
        dates = [h.holiday_date for h in holiday_cache.upcoming_holidays(6)]

        assert date(2026, 5, 25) in dates
        assert date(2026, 8, 31) not in dates
        assert dates == sorted(dates)

    def test_upcoming_excludes_past(self, uk_source):
        """Holidays before today are left out."""
        clock = MutableClock(datetime(2025, 12, 26, 9, 0, tzinfo=timezone.utc))
        cache = HolidayCache(make_config(), source_factory=uk_source.factory, clock=clock)

        dates = [h.holiday_date for h in cache.upcoming_holidays(1)]

        assert dates == [date(2025, 12, 26), date(2026, 1, 1)]

    def test_upcoming_negative_months(self, holiday_cache):
        """A negative window is rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            holiday_cache.upcoming_holidays(-1)


class TestAddMonths:
    """Tests for calendar month arithmetic."""

    def test_simple(self):
        assert add_months(date(2025, 12, 10), 6) == date(2026, 6, 10)

    def test_clamps_to_month_end(self):
        """Aug 31 plus six months is the last day of February."""
        assert add_months(date(2025, 8, 31), 6) == date(2026, 2, 28)
        assert add_months(date(2027, 8, 31), 6) == date(2028, 2, 29)

    def test_zero(self):
        assert add_months(date(2025, 1, 31), 0) == date(2025, 1, 31)
