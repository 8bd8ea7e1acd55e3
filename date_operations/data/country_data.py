"""
Static country data: default timezones and holiday API endpoints.
"""

from typing import Dict

DEFAULT_TIMEZONE = "Europe/London"
DEFAULT_DUE_HOUR = 16

# Country code -> default timezone. Users can override with TIMEZONE.
COUNTRY_TIMEZONES: Dict[str, str] = {
    "NONE": "Europe/London",
    "GB": "Europe/London",
    "RO": "Europe/Bucharest",
    "ES": "Europe/Madrid",
    "IE": "Europe/Dublin",
    "DK": "Europe/Copenhagen",
    "DE": "Europe/Berlin",
    "PL": "Europe/Warsaw",
    "US": "America/New_York",  # Eastern
    "NZ": "Pacific/Auckland",
    "AU": "Australia/Sydney",
    "MY": "Asia/Kuala_Lumpur",
    "LK": "Asia/Colombo",
    "TH": "Asia/Bangkok",
    "VN": "Asia/Ho_Chi_Minh",
}

# Countries served by GOV.UK instead of Nager.Date
GOV_UK_COUNTRIES = frozenset({"GB"})

GOV_UK_BANK_HOLIDAYS_URL = "https://www.gov.uk/bank-holidays.json"
GOV_UK_DIVISION = "england-and-wales"

NAGER_DATE_URL = "https://date.nager.at/api/v3/PublicHolidays/{year}/{country}"


def timezone_for_country(country: str) -> str:
    """Return the default timezone for a country code."""
    return COUNTRY_TIMEZONES.get(country.upper(), DEFAULT_TIMEZONE)
