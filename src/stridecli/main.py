#!/usr/bin/env python3
"""
stride - workout telemetry from the terminal

Replays recorded tracks through the live workout pipeline and browses the
workout history.

Usage:
    stride                   # Recent workouts
    stride replay run.gpx    # Replay a track as a live workout
    stride stats             # Totals, overall and per activity
    stride records           # Personal records
    stride calendar          # Workout days this month
    stride import export.json
"""

import logging

import typer
from rich.console import Console

from stridecli import __version__
from stridecli.commands import history, stats, workout
from stridekit.config import get_settings

# Create the main app
app = typer.Typer(
    name="stride",
    help="Track workouts and browse your history from the terminal.",
    no_args_is_help=False,
    add_completion=True,
)

# Console for output
console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"stride version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-V", callback=version_callback, is_eager=True, help="Show version"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """
    stride - Track workouts from the terminal.

    Run without arguments to see your recent workouts.
    """
    configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        # Default action: show recent workouts
        history.recent(limit=5, json_output=False)


# Register commands directly on the app
app.command(name="replay")(workout.replay)
app.command(name="stats")(stats.overall)
app.command(name="records")(stats.records)
app.command(name="monthly")(stats.monthly)
app.command(name="calendar")(stats.month_calendar)
app.command(name="recent")(history.recent)
app.command(name="list")(history.list_workouts)
app.command(name="show")(history.show)
app.command(name="delete")(history.delete)
app.command(name="import")(history.import_export)


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
