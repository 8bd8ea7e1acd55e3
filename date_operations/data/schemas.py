"""
Data models for date operations using Pydantic.
"""

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    """Direction for stepping across working days."""

    FORWARD = "forward"
    BACKWARD = "backward"


class HolidaySourceKind(str, Enum):
    """Where holiday data comes from."""

    API = "api"  # GOV.UK / Nager.Date over HTTP
    OFFLINE = "offline"  # holidays library, no network


class HolidayEntry(BaseModel):
    """A single holiday with its title."""

    holiday_date: date = Field(..., description="Calendar date of the holiday")
    title: str = Field(default="", description="Holiday name as reported by the source")


class HolidayFetchResult(BaseModel):
    """Outcome of one fetch against a holiday source."""

    country: str = Field(..., description="Country code the fetch was made for")
    entries: List[HolidayEntry] = Field(default_factory=list, description="Holidays returned")
    error: Optional[str] = Field(default=None, description="Failure description, if any")

    @property
    def ok(self) -> bool:
        """Whether the fetch succeeded."""
        return self.error is None

    @property
    def dates(self) -> set:
        """ISO date strings for all entries."""
        return {entry.holiday_date.isoformat() for entry in self.entries}


class SprintDates(BaseModel):
    """Start and end of a single sprint."""

    start: date = Field(..., description="First day of the sprint")
    end: date = Field(..., description="Last day of the sprint (day before the next one starts)")
    length_weeks: int = Field(..., ge=1, description="Sprint length in weeks")


class SprintInfo(BaseModel):
    """Position of today within a recurring sprint schedule."""

    sprint_number: int = Field(..., description="1-based sprint number (<= 0 before the first sprint)")
    days_into_sprint: int = Field(..., ge=0, description="Days elapsed in the current sprint")
    days_remaining: int = Field(..., ge=1, description="Days left in the current sprint, including today")
    current_sprint_start: date = Field(..., description="First day of the current sprint")
    current_sprint_end: date = Field(..., description="Last day of the current sprint")
    has_started: bool = Field(default=True, description="False if today precedes the first sprint")


class Config(BaseModel):
    """Configuration for the date operations server."""

    model_config = ConfigDict(frozen=True)

    timezone: str = Field(default="Europe/London", description="IANA timezone for all calendar maths")
    due_hour: int = Field(default=16, ge=0, le=23, description="Hour of day for computed due dates")
    holiday_country: str = Field(default="NONE", description="ISO country code, or NONE for weekends only")
    holiday_source: HolidaySourceKind = Field(
        default=HolidaySourceKind.API, description="Holiday data source"
    )
    cache_ttl_hours: float = Field(default=24.0, gt=0, description="Holiday cache lifetime in hours")
    request_timeout: float = Field(default=10.0, gt=0, le=120, description="HTTP timeout in seconds")
    api_host: str = Field(default="0.0.0.0", description="REST API server host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="REST API server port")

    @property
    def holidays_enabled(self) -> bool:
        """Holidays are looked up unless the country is NONE or empty."""
        return bool(self.holiday_country) and self.holiday_country.upper() != "NONE"
