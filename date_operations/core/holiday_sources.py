"""
Holiday data sources: GOV.UK, Nager.Date and the offline holidays library.

Every source returns a HolidayFetchResult. Failures are reported in the
result's ``error`` field instead of being raised.
"""

import logging
from datetime import date
from typing import Iterable, List

import holidays
import requests

from date_operations.data.country_data import (
    GOV_UK_BANK_HOLIDAYS_URL,
    GOV_UK_COUNTRIES,
    GOV_UK_DIVISION,
    NAGER_DATE_URL,
)
from date_operations.data.schemas import (
    Config,
    HolidayEntry,
    HolidayFetchResult,
    HolidaySourceKind,
)

logger = logging.getLogger(__name__)


class GovUkHolidaySource:
    """UK bank holidays from the GOV.UK JSON feed (titled events)."""

    def __init__(self, timeout: float = 10.0, url: str = GOV_UK_BANK_HOLIDAYS_URL):
        self.timeout = timeout
        self.url = url

    def fetch(self, country: str, years: Iterable[int]) -> HolidayFetchResult:
        """
        Fetch all england-and-wales events.

        The feed covers several years at once, so ``years`` is ignored.
        """
        try:
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()

            entries = [
                HolidayEntry(
                    holiday_date=date.fromisoformat(event["date"]),
                    title=event.get("title", ""),
                )
                for event in data[GOV_UK_DIVISION]["events"]
            ]
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            logger.error(f"Failed to fetch UK bank holidays: {e}")
            return HolidayFetchResult(country=country, error=str(e))

        return HolidayFetchResult(country=country, entries=entries)


class NagerDateHolidaySource:
    """Public holidays from the Nager.Date API, one request per year."""

    def __init__(self, timeout: float = 10.0, url_template: str = NAGER_DATE_URL):
        self.timeout = timeout
        self.url_template = url_template

    def fetch(self, country: str, years: Iterable[int]) -> HolidayFetchResult:
        """Fetch holidays for each year, skipping years that return non-2xx."""
        entries: List[HolidayEntry] = []

        try:
            for year in years:
                url = self.url_template.format(year=year, country=country)
                response = requests.get(url, timeout=self.timeout)

                if not response.ok:
                    logger.error(
                        f"Failed to fetch holidays for {country} {year}: {response.status_code}"
                    )
                    continue

                for holiday in response.json():
                    entries.append(
                        HolidayEntry(
                            holiday_date=date.fromisoformat(holiday["date"]),
                            title=holiday.get("localName") or holiday.get("name") or "",
                        )
                    )
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            logger.error(f"Failed to fetch {country} bank holidays: {e}")
            return HolidayFetchResult(country=country, error=str(e))

        return HolidayFetchResult(country=country, entries=entries)


class OfflineHolidaySource:
    """Holidays computed locally with the holidays library."""

    def fetch(self, country: str, years: Iterable[int]) -> HolidayFetchResult:
        """Build the holiday calendar for the given years without network access."""
        try:
            calendar = holidays.country_holidays(country, years=list(years))
        except NotImplementedError as e:
            logger.error(f"No offline holiday calendar for {country}: {e}")
            return HolidayFetchResult(country=country, error=str(e))

        entries = [
            HolidayEntry(holiday_date=holiday_date, title=name)
            for holiday_date, name in sorted(calendar.items())
        ]
        return HolidayFetchResult(country=country, entries=entries)


def create_source(config: Config, country: str):
    """
    Pick the holiday source for a country.

    GB uses GOV.UK, every other country uses Nager.Date, unless the
    offline source is configured.
    """
    if config.holiday_source == HolidaySourceKind.OFFLINE:
        return OfflineHolidaySource()
    if country in GOV_UK_COUNTRIES:
        return GovUkHolidaySource(timeout=config.request_timeout)
    return NagerDateHolidaySource(timeout=config.request_timeout)
