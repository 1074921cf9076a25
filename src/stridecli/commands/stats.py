"""Stats commands for the stride CLI."""

import json
from datetime import UTC, date, datetime

import typer

from stridecli import display
from stridecli.store import open_repository
from stridekit.config import get_settings
from stridekit.models import StatsPeriod

PERIOD_TITLES = {
    StatsPeriod.WEEK: "This Week",
    StatsPeriod.MONTH: "This Month",
    StatsPeriod.YEAR: "This Year",
    StatsPeriod.ALL: "All Time",
}


def overall(
    period: StatsPeriod = typer.Option(StatsPeriod.ALL, "--period", "-p", help="week, month, year or all"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Show totals for a period, overall and per activity."""
    with open_repository() as repository:
        stats = repository.get_stats(period)

    if json_output:
        print(json.dumps(stats.model_dump(mode="json"), indent=2))
    else:
        display.display_stats(stats, get_settings().unit_system, title=PERIOD_TITLES[period])


def records(
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Show personal records."""
    with open_repository() as repository:
        bests = repository.get_personal_bests()

    if json_output:
        print(json.dumps(bests.model_dump(mode="json"), indent=2))
    else:
        display.display_records(bests, get_settings().unit_system)


def monthly(
    limit: int = typer.Option(12, "--limit", "-n", help="Number of months"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Show monthly statistics."""
    with open_repository() as repository:
        months = repository.get_monthly_stats(limit)

    if json_output:
        print(json.dumps([m.model_dump(mode="json") for m in months], indent=2))
    else:
        display.display_monthly_stats(months, get_settings().unit_system)


def month_calendar(
    month: str | None = typer.Argument(None, help="Month to show (YYYY-MM), defaults to this month"),
    day: str | None = typer.Option(None, "--day", "-d", help="Also list workouts on this day (YYYY-MM-DD)"),
) -> None:
    """Show a month calendar with workout days marked."""
    today = datetime.now(UTC).date()
    if month:
        try:
            first = date.fromisoformat(f"{month}-01")
        except ValueError:
            display.display_error(f"Invalid month: {month}. Use YYYY-MM.")
            raise typer.Exit(1) from None
    else:
        first = today.replace(day=1)

    selected: date | None = None
    if day:
        try:
            selected = date.fromisoformat(day)
        except ValueError:
            display.display_error(f"Invalid date format: {day}. Use YYYY-MM-DD.")
            raise typer.Exit(1) from None

    with open_repository() as repository:
        active_days = repository.get_active_days(first.year, first.month)
        workouts = repository.get_workouts_on(selected) if selected else []

    display.display_calendar(first.year, first.month, active_days, today=today)

    if selected is None:
        return
    if workouts:
        display.display_workouts(
            workouts, get_settings().unit_system, title=f"Workouts on {selected.isoformat()}"
        )
    else:
        display.display_info(f"No workouts on {selected.isoformat()}")
