"""
MCP Server for Date Operations.

This module provides an MCP (Model Context Protocol) server that exposes
working-day maths, bank-holiday lookups, sprint dates and due-date rules
to Claude Desktop and other MCP clients.

Supports two transport modes:
- stdio: For local Claude Desktop integration
- sse: For HTTP-based integration (Docker, remote servers)
"""

import argparse
import logging
import os
import sys
from typing import Optional

from mcp.server.fastmcp import FastMCP

from date_operations.config.manager import ConfigManager, describe
from date_operations.service import DateOperationsService

logger = logging.getLogger(__name__)

# Load configuration
config_manager = ConfigManager()
config = config_manager.load_config()

# Initialize components
service = DateOperationsService(config)


def create_mcp_server(
    host: str = "127.0.0.1",
    port: int = 8000,
    operations: Optional[DateOperationsService] = None,
) -> FastMCP:
    """Create and configure the MCP server with tools."""
    ops = operations or service
    mcp = FastMCP("Date Operations", host=host, port=port)

    @mcp.tool()
    def get_today() -> dict:
        """
        Get the current date in the configured timezone.

        Returns:
            Dictionary with:
            - date: Today in YYYY-MM-DD format
            - formatted: Long form (e.g., "Monday, January 6, 2025")
            - day_of_week: Weekday name
            - timezone: Configured IANA timezone
            - is_working_day: Whether today is a working day
        """
        return ops.dispatch("get_today")

    @mcp.tool()
    def calculate_working_days(start_date: str, num_days: int, direction: str = "forward") -> dict:
        """
        Calculate a date by adding or subtracting working days.

        Weekends and bank holidays of the configured country are skipped.

        Args:
            start_date: Start date in format YYYY-MM-DD, or "today"
            num_days: Number of working days to move (non-negative)
            direction: "forward" (default) or "backward"

        Returns:
            Dictionary with start_date, num_days, direction, result_date and
            formatted (long form of the result).

        Examples:
            Five working days from 2025-12-22:
            >>> calculate_working_days("2025-12-22", 5)
        """
        return ops.dispatch(
            "calculate_working_days",
            {"start_date": start_date, "num_days": num_days, "direction": direction},
        )

    @mcp.tool()
    def get_next_working_day(from_date: str) -> dict:
        """
        Get the next working day after a given date.

        Args:
            from_date: Date in format YYYY-MM-DD, or "today"

        Returns:
            Dictionary with from_date, next_working_day and formatted.
        """
        return ops.dispatch("get_next_working_day", {"from_date": from_date})

    @mcp.tool()
    def get_working_days_between(start_date: str, end_date: str) -> dict:
        """
        Count working days between two dates, both ends included.

        Args:
            start_date: Start date in format YYYY-MM-DD, or "today"
            end_date: End date in format YYYY-MM-DD, or "today"

        Returns:
            Dictionary with start_date, end_date and working_days
            (0 if start_date is after end_date).
        """
        return ops.dispatch(
            "get_working_days_between", {"start_date": start_date, "end_date": end_date}
        )

    @mcp.tool()
    def is_bank_holiday(date: str) -> dict:
        """
        Check whether a date is a bank holiday in the configured country.

        Args:
            date: Date in format YYYY-MM-DD, or "today"

        Returns:
            Dictionary with date, is_bank_holiday and country.
        """
        return ops.dispatch("is_bank_holiday", {"date": date})

    @mcp.tool()
    def get_upcoming_bank_holidays(months_ahead: int = 6) -> dict:
        """
        List upcoming bank holidays for the configured country.

        Args:
            months_ahead: Number of months to look ahead (default: 6)

        Returns:
            Dictionary with months_ahead, country and holidays
            (list of {date, title}, sorted by date).
        """
        return ops.dispatch("get_upcoming_bank_holidays", {"months_ahead": months_ahead})

    @mcp.tool()
    def calculate_sprint_dates(start_date: str, sprint_length_weeks: int) -> dict:
        """
        Calculate sprint start and end dates.

        The sprint ends the day before the next sprint would start.

        Args:
            start_date: Sprint start date in format YYYY-MM-DD
            sprint_length_weeks: Length of the sprint in weeks (e.g., 2)

        Returns:
            Dictionary with sprint_start, sprint_end, length_weeks and the
            formatted start and end.

        Examples:
            >>> calculate_sprint_dates("2025-01-06", 2)
            sprint_end: "2025-01-19"
        """
        return ops.dispatch(
            "calculate_sprint_dates",
            {"start_date": start_date, "sprint_length_weeks": sprint_length_weeks},
        )

    @mcp.tool()
    def get_current_sprint_info(first_sprint_start: str, sprint_length_weeks: int) -> dict:
        """
        Get the current sprint number and position.

        Args:
            first_sprint_start: Date sprint 1 started, format YYYY-MM-DD
            sprint_length_weeks: Length of each sprint in weeks

        Returns:
            Dictionary with sprint_number, days_into_sprint, days_remaining,
            current_sprint_start, current_sprint_end and has_started
            (False if today is before the first sprint).
        """
        return ops.dispatch(
            "get_current_sprint_info",
            {"first_sprint_start": first_sprint_start, "sprint_length_weeks": sprint_length_weeks},
        )

    @mcp.tool()
    def get_due_date(from_date: Optional[str] = None) -> dict:
        """
        Get a task due date: next working day at the configured due hour.

        On a Friday the next working day is taken twice, so a Friday
        gives the following Tuesday (or later around holidays).

        Args:
            from_date: Date in format YYYY-MM-DD, or "today" (default: today)

        Returns:
            Dictionary with due_date, due_datetime (ISO 8601 with offset)
            and formatted (e.g., "Monday, January 6, 2025 at 4:00 PM").
        """
        return ops.dispatch("get_due_date", {"from_date": from_date})

    @mcp.tool()
    def parse_due_date_request(request: str) -> dict:
        """
        Parse a natural-language due-date request.

        Understood: "tomorrow", "next working day", "default",
        "in N days", "in N weeks". Anything else gives the default due date.

        Args:
            request: The request text (e.g., "in 2 weeks")

        Returns:
            Dictionary with request, due_date, due_datetime and formatted.
        """
        return ops.dispatch("parse_due_date_request", {"request": request})

    return mcp


def main():
    """Run the MCP server with configurable transport.

    Transport can be set via:
    - Command line: --transport sse --port 8080
    - Environment: MCP_TRANSPORT=sse MCP_PORT=8080 MCP_HOST=0.0.0.0
    """
    parser = argparse.ArgumentParser(description="Date Operations MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=os.environ.get("MCP_TRANSPORT", "stdio"),
        help="Transport mode: stdio (default) or sse for HTTP",
    )
    parser.add_argument(
        "--host",
        default=os.environ.get("MCP_HOST", os.environ.get("FASTMCP_HOST", "0.0.0.0")),
        help="Host to bind to (SSE mode only, default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("MCP_PORT", os.environ.get("FASTMCP_PORT", "8080"))),
        help="Port to listen on (SSE mode only, default: 8080)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    describe(config)

    mcp = create_mcp_server(host=args.host, port=args.port)

    logger.info(f"Date Operations MCP Server running on {args.transport}")
    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
