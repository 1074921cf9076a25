"""History commands for the stride CLI."""

import json
from pathlib import Path

import typer
from pydantic import BaseModel

from stridecli import display
from stridecli.store import open_repository
from stridekit.config import get_settings
from stridekit.history import import_workouts, load_workouts
from stridekit.models import ActivityType, SortKey, StoredWorkout


def _print_json(workouts: list[StoredWorkout] | BaseModel) -> None:
    if isinstance(workouts, BaseModel):
        data = workouts.model_dump(mode="json", by_alias=True)
    else:
        data = [w.model_dump(mode="json", by_alias=True, exclude={"route"}) for w in workouts]
    print(json.dumps(data, indent=2))


def recent(
    limit: int = typer.Option(5, "--limit", "-n", help="Number of workouts"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Show recent workouts."""
    with open_repository() as repository:
        workouts = repository.get_recent(limit)

    if json_output:
        _print_json(workouts)
    elif not workouts:
        display.display_info("No workouts yet")
    else:
        display.display_workouts(
            workouts, get_settings().unit_system, title=f"Recent Workouts ({len(workouts)})"
        )


def list_workouts(
    activity_type: ActivityType | None = typer.Option(
        None, "--type", "-t", case_sensitive=False, help="Only this activity type"
    ),
    sort_by: SortKey = typer.Option(SortKey.DATE, "--sort", "-s", help="Sort key"),
    offset: int = typer.Option(0, "--offset", "-o", help="Pagination offset"),
    limit: int = typer.Option(50, "--limit", "-n", help="Number of workouts"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """List workouts, filtered and sorted."""
    with open_repository() as repository:
        workouts = repository.list_workouts(activity_type, sort_by, limit=limit, offset=offset)
        total = repository.count()

    if json_output:
        _print_json(workouts)
        return

    display.display_info(f"Showing {len(workouts)} of {total}")
    display.display_workouts(workouts, get_settings().unit_system)


def show(
    workout_id: str = typer.Argument(..., help="Workout ID"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Show one workout."""
    with open_repository() as repository:
        workout = repository.get_workout(workout_id)

    if workout is None:
        display.display_error(f"Workout {workout_id} not found")
        raise typer.Exit(1)

    if json_output:
        _print_json(workout)
    else:
        display.display_workout_detail(workout, get_settings().unit_system)


def delete(
    workout_id: str = typer.Argument(..., help="Workout ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a workout from history."""
    if not yes:
        typer.confirm(f"Delete workout {workout_id}?", abort=True)

    with open_repository() as repository:
        deleted = repository.delete_workout(workout_id)

    if not deleted:
        display.display_error(f"Workout {workout_id} not found")
        raise typer.Exit(1)
    display.display_success(f"Deleted workout {workout_id}")


def import_export(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Workout export (JSON)"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Parse but don't store"),
) -> None:
    """
    Import workouts exported by the mobile app.

    Workouts already in history (same id) are replaced.
    """
    try:
        workouts, skipped = load_workouts(path)
    except (ValueError, OSError) as e:
        display.display_error(f"Cannot read {path}: {e}")
        raise typer.Exit(1) from None

    if skipped:
        display.display_warning(f"Skipped {skipped} invalid workout(s)")

    if dry_run:
        display.display_info(f"Dry run: {len(workouts)} workout(s) would be imported")
        return

    with open_repository() as repository:
        imported = import_workouts(repository, workouts)

    display.display_success(f"Imported {imported} workout(s)")
