"""Workout commands for the stride CLI."""

import json
from pathlib import Path

import typer

from stridecli import display
from stridecli.store import open_repository
from stridekit.config import get_settings
from stridekit.models import ActivityType, StoredWorkout
from stridekit.telemetry import InvalidInput, PreconditionNotMet
from stridekit.telemetry.replay import load_track, replay_track


def replay(
    track: Path = typer.Argument(..., exists=True, dir_okay=False, help="GPX or JSON track file"),
    activity_type: ActivityType = typer.Option(
        ActivityType.RUNNING, "--type", "-t", case_sensitive=False, help="Activity type"
    ),
    weight: float | None = typer.Option(None, "--weight", "-w", help="Body weight in kg"),
    save: bool = typer.Option(True, "--save/--no-save", help="Store the workout in history"),
    show_ticks: bool = typer.Option(False, "--ticks", help="Show the stats published at each tick"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """
    Replay a recorded track as a live workout.

    Examples:
        stride replay morning.gpx
        stride replay ride.json --type Cycling --weight 82
        stride replay walk.gpx --no-save --ticks
    """
    settings = get_settings()

    try:
        points, skipped = load_track(track)
    except ValueError as e:
        display.display_error(str(e))
        raise typer.Exit(1) from None

    if skipped and not json_output:
        display.display_warning(f"Skipped {skipped} invalid point(s)")

    try:
        result = replay_track(points, activity_type, weight, settings=settings)
    except (PreconditionNotMet, InvalidInput) as e:
        display.display_error(str(e))
        raise typer.Exit(1) from None

    stored: StoredWorkout | None = None
    if save:
        with open_repository() as repository:
            stored = repository.save(result.record)

    if json_output:
        workout = stored or result.record
        print(json.dumps(workout.model_dump(mode="json", by_alias=True), indent=2))
        return

    if show_ticks:
        display.display_snapshots(result.snapshots, settings.unit_system)
    display.display_workout_summary(result.record, settings.unit_system)
    if stored is not None:
        display.display_success(f"Saved workout {stored.workout_id}")
