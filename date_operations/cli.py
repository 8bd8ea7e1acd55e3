"""
CLI interface for date operations.
"""

import logging
import sys

import click

from date_operations.config.manager import ConfigManager
from date_operations.data.schemas import Direction
from date_operations.output.formatter import ConsoleFormatter
from date_operations.service import DateOperationsService


def parse_arguments(pairs) -> dict:
    """Turn ``key=value`` pairs into an arguments dict."""
    arguments = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(f"Expected key=value, got: {pair}")
        key, value = pair.split("=", 1)
        arguments[key.strip()] = value.strip()
    return arguments


def build_service(config_path) -> DateOperationsService:
    """Load configuration and create the service."""
    return DateOperationsService(ConfigManager(config_path).load_config())


def run(ctx, name: str, arguments: dict, title: str, highlight: str = None) -> dict:
    """Run an operation and print the result, exiting 1 on error."""
    formatter = ConsoleFormatter()
    result = ctx.obj["service"].dispatch(name, arguments)
    if "error" in result:
        formatter.print_error(result["error"])
        sys.exit(1)
    formatter.print_result(title, result, highlight=highlight)
    return result


@click.group()
@click.version_option(version="1.0.0", prog_name="date-ops")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def main(ctx, config, debug):
    """Date Operations - Working days, bank holidays, sprints and due dates."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    if "service" in ctx.obj:
        return
    try:
        ctx.obj["service"] = build_service(config)
    except ValueError as e:
        ConsoleFormatter().print_error(str(e))
        sys.exit(1)


@main.command()
@click.pass_context
def today(ctx):
    """Show today's date in the configured timezone."""
    run(ctx, "get_today", {}, "Today", highlight="date")


@main.command("next")
@click.argument("from_date", default="today")
@click.pass_context
def next_working_day(ctx, from_date):
    """Show the next working day after FROM_DATE (default: today)."""
    run(ctx, "get_next_working_day", {"from_date": from_date}, "Next Working Day", highlight="next_working_day")


@main.command()
@click.argument("num_days", type=int)
@click.option("--start", "-s", default="today", help="Start date (YYYY-MM-DD or today)")
@click.option(
    "--direction", "-d",
    type=click.Choice([d.value for d in Direction], case_sensitive=False),
    default=Direction.FORWARD.value,
    help="Direction (default: forward)",
)
@click.pass_context
def add(ctx, num_days, start, direction):
    """Move NUM_DAYS working days from a start date."""
    run(
        ctx,
        "calculate_working_days",
        {"start_date": start, "num_days": num_days, "direction": direction},
        "Working Day Calculation",
        highlight="result_date",
    )


@main.command()
@click.argument("start_date")
@click.argument("end_date")
@click.pass_context
def between(ctx, start_date, end_date):
    """Count working days from START_DATE to END_DATE inclusive."""
    run(
        ctx,
        "get_working_days_between",
        {"start_date": start_date, "end_date": end_date},
        "Working Days Between",
        highlight="working_days",
    )


@main.command()
@click.option("--months", "-m", type=int, default=6, help="Months to look ahead (default: 6)")
@click.option("--check", help="Check a single date instead (YYYY-MM-DD or today)")
@click.pass_context
def holidays(ctx, months, check):
    """List upcoming bank holidays, or check one date."""
    if check:
        run(ctx, "is_bank_holiday", {"date": check}, "Bank Holiday Check", highlight="is_bank_holiday")
        return

    formatter = ConsoleFormatter()
    result = ctx.obj["service"].dispatch("get_upcoming_bank_holidays", {"months_ahead": months})
    if "error" in result:
        formatter.print_error(result["error"])
        sys.exit(1)
    formatter.print_holidays(result["holidays"], result["country"])


@main.command()
@click.argument("start_date")
@click.option("--weeks", "-w", type=int, default=2, help="Sprint length in weeks (default: 2)")
@click.pass_context
def sprint(ctx, start_date, weeks):
    """Show start and end of a sprint beginning on START_DATE."""
    run(
        ctx,
        "calculate_sprint_dates",
        {"start_date": start_date, "sprint_length_weeks": weeks},
        "Sprint Dates",
        highlight="sprint_end",
    )


@main.command("sprint-info")
@click.argument("first_sprint_start")
@click.option("--weeks", "-w", type=int, default=2, help="Sprint length in weeks (default: 2)")
@click.pass_context
def sprint_info(ctx, first_sprint_start, weeks):
    """Show the current sprint relative to FIRST_SPRINT_START."""
    run(
        ctx,
        "get_current_sprint_info",
        {"first_sprint_start": first_sprint_start, "sprint_length_weeks": weeks},
        "Current Sprint",
        highlight="sprint_number",
    )


@main.command()
@click.argument("from_date", required=False)
@click.pass_context
def due(ctx, from_date):
    """Show the due date for work received on FROM_DATE (default: today)."""
    run(ctx, "get_due_date", {"from_date": from_date}, "Due Date", highlight="formatted")


@main.command("parse-due")
@click.argument("request", nargs=-1, required=True)
@click.pass_context
def parse_due(ctx, request):
    """Resolve a request such as "in 2 weeks" to a due date."""
    run(
        ctx,
        "parse_due_date_request",
        {"request": " ".join(request)},
        "Due Date",
        highlight="formatted",
    )


@main.command()
@click.argument("name")
@click.argument("arguments", nargs=-1)
@click.pass_context
def call(ctx, name, arguments):
    """Run any tool by NAME with key=value ARGUMENTS."""
    run(ctx, name, parse_arguments(arguments), name)


@main.command()
@click.option("--host", "-h", default=None, help="Host to bind to (default: from config or 0.0.0.0)")
@click.option("--port", "-p", type=int, default=None, help="Port to bind to (default: from config or 8000)")
@click.pass_context
def serve(ctx, host, port):
    """Start the FastAPI server."""
    formatter = ConsoleFormatter()

    try:
        import uvicorn

        cfg = ctx.obj["service"].config
        api_host = host or cfg.api_host
        api_port = port or cfg.api_port

        formatter.console.print(f"Starting API server at http://{api_host}:{api_port}")
        formatter.console.print("Press Ctrl+C to stop")
        formatter.console.print()

        uvicorn.run(
            "date_operations.api:app",
            host=api_host,
            port=api_port,
            reload=False,
        )

    except ImportError:
        formatter.print_error("uvicorn is required for the API server. Install it with: pip install uvicorn")
        sys.exit(1)
    except Exception as e:
        formatter.print_error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
