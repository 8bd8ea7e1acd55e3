"""
Time-boxed in-memory cache of holiday dates for the configured country.
"""

import calendar
import logging
import threading
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Set

from date_operations.core.holiday_sources import create_source
from date_operations.core.timezone import (
    Clock,
    DateLike,
    resolve_zone,
    system_clock,
    to_local_date,
    today_in,
)
from date_operations.data.schemas import Config, HolidayEntry, HolidayFetchResult

logger = logging.getLogger(__name__)

SourceFactory = Callable[[Config, str], object]


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the target month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


class HolidayCache:
    """
    Holds the holiday set for one country at a time.

    The cached entries are reused while they are younger than the configured
    TTL (24 hours by default) and were fetched for the requested country.
    A failed fetch is cached as an empty set for the same TTL, so an
    unreachable source is asked once per window rather than once per lookup.
    """

    def __init__(
        self,
        config: Config,
        source_factory: SourceFactory = create_source,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the holiday cache.

        Args:
            config: Resolved configuration (country, timezone, TTL).
            source_factory: Callable returning a source for (config, country).
            clock: Callable returning the current aware datetime.
        """
        self.config = config
        self.zone = resolve_zone(config.timezone)
        self.ttl = timedelta(hours=config.cache_ttl_hours)
        self._source_factory = source_factory
        self._clock = clock or system_clock

        self._entries: Optional[List[HolidayEntry]] = None
        self._dates: Set[str] = set()
        self._fetched_at: Optional[datetime] = None
        self._country: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.config.holidays_enabled

    def get_entries(self, country: Optional[str] = None) -> List[HolidayEntry]:
        """
        Get titled holiday entries, fetching if the cache is stale.

        Args:
            country: Country code. Defaults to the configured country.

        Returns:
            List of holiday entries (empty if disabled or the fetch failed).
        """
        if not self.enabled:
            return []

        with self._lock:
            self._ensure_fresh(country)
            return list(self._entries)

    def get_holidays(self, country: Optional[str] = None) -> Set[str]:
        """Get the set of ISO holiday dates for a country."""
        if not self.enabled:
            return set()

        with self._lock:
            self._ensure_fresh(country)
            return set(self._dates)

    def is_holiday(self, value: DateLike) -> bool:
        """
        Check whether a date is a registered holiday.

        Args:
            value: Date or datetime; datetimes are normalized to the configured zone.

        Returns:
            True if the calendar day is a holiday, False otherwise.
        """
        if not self.enabled:
            return False

        day = to_local_date(value, self.zone).isoformat()
        with self._lock:
            self._ensure_fresh()
            return day in self._dates

    def upcoming_holidays(self, months_ahead: int = 6) -> List[HolidayEntry]:
        """
        List holidays from today up to ``months_ahead`` months ahead, sorted by date.
        """
        if months_ahead < 0:
            raise ValueError("months_ahead must be non-negative")
        if not self.enabled:
            return []

        today = today_in(self.zone, self._clock)
        window_end = add_months(today, months_ahead)

        return [
            entry
            for entry in self.get_entries()
            if today <= entry.holiday_date <= window_end
        ]

    def clear(self) -> None:
        """Drop cached data so the next lookup refetches."""
        with self._lock:
            self._entries = None
            self._dates = set()
            self._fetched_at = None
            self._country = None

    def _is_fresh(self, country: str, now: datetime) -> bool:
        return (
            self._entries is not None
            and self._country == country
            and self._fetched_at is not None
            and now - self._fetched_at < self.ttl
        )

    def _ensure_fresh(self, country: Optional[str] = None) -> None:
        """Refetch unless the cache holds fresh data for the country. Caller holds the lock."""
        country = (country or self.config.holiday_country).upper()
        now = self._clock()
        if not self._is_fresh(country, now):
            self._refresh(country, now)

    def _refresh(self, country: str, now: datetime) -> None:
        """Fetch and store holidays; a failure is stored as an empty set."""
        result = self._fetch(country, now)
        if result.ok:
            entries = sorted(result.entries, key=lambda e: e.holiday_date)
            logger.info(f"Cached {len(entries)} holidays for {country}")
        else:
            entries = []
            logger.warning(
                f"No holiday data for {country} until {now + self.ttl:%Y-%m-%d %H:%M}; "
                "treating all weekdays as working days"
            )

        self._entries = entries
        self._dates = result.dates if result.ok else set()
        self._fetched_at = now
        self._country = country

    def _fetch(self, country: str, now: datetime) -> HolidayFetchResult:
        """Fetch the current and next calendar year from the country's source."""
        year = to_local_date(now, self.zone).year
        source = self._source_factory(self.config, country)
        logger.info(f"Fetching holidays for {country} ({year}-{year + 1})")
        return source.fetch(country, [year, year + 1])
