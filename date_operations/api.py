"""
FastAPI REST API for date operations.
"""

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from date_operations.config.manager import ConfigManager
from date_operations.service import DateOperationsService

logger = logging.getLogger(__name__)

# Load configuration
config_manager = ConfigManager()
config = config_manager.load_config()

# Initialize components
service = DateOperationsService(config)


# API Models
class ToolRequest(BaseModel):
    """Arguments for a named date operation."""

    arguments: Dict[str, Any] = Field(default_factory=dict, description="Tool arguments")


class HolidayResponse(BaseModel):
    """Response model for a single holiday."""

    date: str
    title: str


class UpcomingHolidaysResponse(BaseModel):
    """Response model for upcoming holidays."""

    months_ahead: int
    country: str
    holidays: List[HolidayResponse]


# FastAPI app
app = FastAPI(
    title="Date Operations API",
    description="Working days, bank holidays, sprint dates and due dates",
    version="1.0.0",
)


def _run(name: str, arguments: Dict[str, Any]) -> dict:
    """Run an operation, mapping failures to HTTP errors."""
    try:
        return service.call(name, arguments)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error in {name}")
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@app.get("/")
async def root():
    """API root endpoint with basic info."""
    return {
        "name": "Date Operations API",
        "version": "1.0.0",
        "endpoints": {
            "GET /today": "Current date in the configured timezone",
            "POST /tools/{name}": "Run a named date operation",
            "GET /holidays/upcoming": "Upcoming bank holidays",
            "GET /holidays/{date}": "Check whether a date is a bank holiday",
        },
        "tools": service.tool_names,
    }


@app.get("/today")
def today():
    """Current date in the configured timezone."""
    return _run("get_today", {})


@app.post("/tools/{name}")
def run_tool(name: str, request: ToolRequest):
    """
    Run a named date operation.

    The body carries the same arguments as the matching MCP tool, e.g.
    ``{"arguments": {"start_date": "today", "num_days": 5}}``.
    """
    return _run(name, request.arguments)


@app.get("/holidays/upcoming", response_model=UpcomingHolidaysResponse)
def upcoming_holidays(
    months_ahead: int = Query(6, ge=0, le=24, description="Months to look ahead"),
):
    """List upcoming bank holidays for the configured country."""
    return _run("get_upcoming_bank_holidays", {"months_ahead": months_ahead})


@app.get("/holidays/{date}")
def check_holiday(date: str):
    """Check whether a date (YYYY-MM-DD or "today") is a bank holiday."""
    return _run("is_bank_holiday", {"date": date})


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": "1.0.0",
        "country": config.holiday_country,
        "timezone": config.timezone,
    }
