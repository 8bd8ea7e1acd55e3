"""
Output formatting: date rendering and console display.
"""

from date_operations.output.date_format import (
    format_display_datetime,
    format_iso_date,
    format_iso_datetime,
    format_long_date,
)
from date_operations.output.formatter import ConsoleFormatter

__all__ = [
    "ConsoleFormatter",
    "format_display_datetime",
    "format_iso_date",
    "format_iso_datetime",
    "format_long_date",
]
