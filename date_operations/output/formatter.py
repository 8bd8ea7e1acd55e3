"""
Console output formatting using Rich.
"""

from typing import List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class ConsoleFormatter:
    """Formats output for console display using Rich."""

    def __init__(self, console: Console = None):
        """Initialize the console formatter."""
        self.console = console or Console()

    def print_result(self, title: str, result: dict, highlight: str = None) -> None:
        """
        Print an operation result as a two-column panel.

        Args:
            title: Panel title.
            result: Operation result dictionary.
            highlight: Key to render in bold green.
        """
        if "error" in result:
            self.print_error(result["error"])
            return

        table = Table(show_header=False, box=None)
        table.add_column("Label", style="cyan", width=24)
        table.add_column("Value", style="white")

        for key, value in result.items():
            if isinstance(value, (list, dict)):
                continue
            label = key.replace("_", " ").capitalize() + ":"
            if key == highlight:
                table.add_row(Text(label, style="bold green"), Text(str(value), style="bold green"))
            else:
                table.add_row(label, str(value))

        self.console.print()
        self.console.print(Panel(table, title=f"[bold]{title}[/bold]"))

    def print_holidays(self, holidays: List[dict], country: str) -> None:
        """
        Print a table of holidays.

        Args:
            holidays: List of {date, title} dictionaries.
            country: Country code shown in the heading.
        """
        self.console.print()
        self.console.rule(f"[bold blue]Upcoming Bank Holidays - {country}[/bold blue]")
        self.console.print()

        if not holidays:
            self.console.print("[dim]No holidays found for this period.[/dim]")
            self.console.print()
            return

        holiday_table = Table()
        holiday_table.add_column("Date", style="cyan", width=12)
        holiday_table.add_column("Name", style="white")

        for holiday in holidays:
            holiday_table.add_row(holiday["date"], holiday["title"])

        self.console.print(holiday_table)
        self.console.print()

    def print_error(self, message: str) -> None:
        """
        Print an error message.

        Args:
            message: Error message to display.
        """
        self.console.print(f"[bold red]Error:[/bold red] {message}")
