"""Display utilities for the stride CLI with Rich formatting."""

import calendar
from datetime import date

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stridekit.models import (
    FitnessStats,
    MonthlySummary,
    PersonalBests,
    StoredWorkout,
    UnitSystem,
    WorkoutRecord,
    WorkoutStats,
    format_distance,
    format_duration,
    format_pace,
    format_speed,
)

console = Console()

ACTIVITY_STYLES = {
    "Running": "green",
    "Walking": "cyan",
    "Cycling": "yellow",
    "Other": "magenta",
}


def _activity(name: str) -> str:
    style = ACTIVITY_STYLES.get(name, "white")
    return f"[{style}]{name}[/{style}]"


def display_workout_summary(
    record: WorkoutRecord,
    unit: UnitSystem = UnitSystem.METRIC,
    title: str = "Workout Complete",
) -> None:
    """Display the totals of a finished workout."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Activity", _activity(record.activity_type.value))
    table.add_row("Duration", format_duration(record.duration_millis))
    table.add_row("Distance", format_distance(record.distance_km, unit))
    table.add_row("Pace", format_pace(record.pace_min_per_km, unit))
    table.add_row("Avg Speed", format_speed(record.average_speed_kph, unit))
    table.add_row("Calories", f"{record.calories_kcal:.0f} kcal")
    table.add_row("Steps", f"{record.step_count:,}")
    table.add_row("Elevation Gain", f"{record.elevation_gain_m:.0f} m")
    table.add_row("Route Points", str(len(record.route)))

    console.print(Panel(table, title=f"[bold cyan]{title}[/bold cyan]", border_style="cyan"))


def display_snapshots(snapshots: list[WorkoutStats], unit: UnitSystem = UnitSystem.METRIC) -> None:
    """Display the stats published at each commit tick."""
    table = Table(title=f"Live Stats ({len(snapshots)} ticks)", show_header=True, border_style="dim")
    table.add_column("Time", style="cyan", justify="right")
    table.add_column("Distance", justify="right", style="green")
    table.add_column("Pace", justify="right", style="yellow")
    table.add_column("Climb", justify="right")
    table.add_column("Steps", justify="right")
    table.add_column("kcal", justify="right", style="red")

    for stats in snapshots:
        table.add_row(
            format_duration(stats.elapsed_millis),
            format_distance(stats.distance_km, unit),
            format_pace(stats.pace_min_per_km, unit),
            f"{stats.elevation_gain_m:.0f} m",
            str(stats.step_count),
            f"{stats.calories_kcal:.0f}",
        )

    console.print(table)


def display_stats(stats: FitnessStats, unit: UnitSystem = UnitSystem.METRIC, title: str = "Statistics") -> None:
    """Display totals and the per-activity breakdown."""
    table = Table(title=title, show_header=True, border_style="cyan")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Total Workouts", f"{stats.total_workouts:,}")
    table.add_row("Total Distance", format_distance(stats.total_distance_km, unit, decimals=1))
    table.add_row("Total Time", format_duration(stats.total_duration_millis))
    table.add_row("Total Calories", f"{stats.total_calories_kcal:,.0f} kcal")
    table.add_row("Total Steps", f"{stats.total_steps:,}")
    table.add_row("Average Distance", format_distance(stats.average_distance_km, unit))
    table.add_row("Average Pace", format_pace(stats.average_pace_min_per_km, unit))

    console.print(table)

    if not stats.by_type:
        return

    breakdown = Table(title="By Activity", show_header=True, border_style="dim")
    breakdown.add_column("Activity")
    breakdown.add_column("Workouts", justify="right", style="green")
    breakdown.add_column("Distance", justify="right")
    breakdown.add_column("Time", justify="right")
    breakdown.add_column("Calories", justify="right", style="red")

    for activity_type, type_stats in stats.by_type.items():
        breakdown.add_row(
            _activity(activity_type.value),
            str(type_stats.count),
            format_distance(type_stats.distance_km, unit, decimals=1),
            format_duration(type_stats.duration_millis),
            f"{type_stats.calories_kcal:,.0f}",
        )

    console.print(breakdown)


def display_workouts(
    workouts: list[StoredWorkout],
    unit: UnitSystem = UnitSystem.METRIC,
    title: str | None = None,
) -> None:
    """Display workouts in a table."""
    table = Table(
        title=title or f"Workouts ({len(workouts)})",
        show_header=True,
        border_style="cyan",
    )
    table.add_column("Date", style="cyan")
    table.add_column("Activity")
    table.add_column("Distance", justify="right", style="green")
    table.add_column("Time", justify="right")
    table.add_column("Pace", justify="right", style="yellow")
    table.add_column("kcal", justify="right", style="red")
    table.add_column("ID", style="dim")

    for workout in workouts:
        table.add_row(
            workout.recorded_at.strftime("%Y-%m-%d %H:%M"),
            _activity(workout.activity_type.value),
            format_distance(workout.distance_km, unit),
            format_duration(workout.duration_millis),
            format_pace(workout.pace_min_per_km, unit),
            f"{workout.calories_kcal:.0f}",
            workout.workout_id[:8],
        )

    console.print(table)


def display_workout_detail(workout: StoredWorkout, unit: UnitSystem = UnitSystem.METRIC) -> None:
    """Display a single stored workout."""
    display_workout_summary(
        workout,
        unit,
        title=f"{workout.activity_type.value} on {workout.recorded_at:%Y-%m-%d %H:%M}",
    )
    console.print(f"[dim]ID: {workout.workout_id}[/dim]")


def display_records(bests: PersonalBests, unit: UnitSystem = UnitSystem.METRIC) -> None:
    """Display personal records."""
    table = Table(title="Personal Records", show_header=True, border_style="cyan")
    table.add_column("Record", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Date", style="yellow")

    if bests.longest_distance:
        table.add_row(
            "Longest Distance",
            format_distance(bests.longest_distance.value, unit),
            f"{bests.longest_distance.recorded_at:%Y-%m-%d}",
        )
    if bests.longest_duration:
        table.add_row(
            "Longest Workout",
            format_duration(bests.longest_duration.value),
            f"{bests.longest_duration.recorded_at:%Y-%m-%d}",
        )
    if bests.most_steps:
        table.add_row(
            "Most Steps",
            f"{bests.most_steps.value:,.0f}",
            f"{bests.most_steps.recorded_at:%Y-%m-%d}",
        )
    if bests.most_calories:
        table.add_row(
            "Most Calories",
            f"{bests.most_calories.value:,.0f} kcal",
            f"{bests.most_calories.recorded_at:%Y-%m-%d}",
        )

    console.print(table)


def display_monthly_stats(months: list[MonthlySummary], unit: UnitSystem = UnitSystem.METRIC) -> None:
    """Display monthly statistics."""
    table = Table(
        title=f"Monthly Stats ({len(months)} months)",
        show_header=True,
        border_style="cyan",
    )
    table.add_column("Month", style="cyan")
    table.add_column("Workouts", justify="right", style="green")
    table.add_column("Total", justify="right")
    table.add_column("Avg", justify="right")
    table.add_column("Pace", justify="right", style="yellow")

    for month in months:
        table.add_row(
            f"{month.month:%Y-%m}",
            str(month.workout_count),
            format_distance(month.total_distance_km, unit, decimals=1),
            format_distance(month.average_distance_km, unit),
            format_pace(month.average_pace_min_per_km, unit),
        )

    console.print(table)


def display_calendar(year: int, month: int, active_days: list[date], today: date | None = None) -> None:
    """Display a month grid with workout days highlighted."""
    active = {d.day for d in active_days if d.year == year and d.month == month}

    table = Table(
        title=f"{calendar.month_name[month]} {year}",
        show_header=True,
        border_style="cyan",
    )
    for name in ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"):
        table.add_column(name, justify="right")

    for week in calendar.monthcalendar(year, month):
        cells = []
        for day in week:
            if day == 0:
                cells.append("")
            elif day in active:
                cells.append(f"[bold green]{day}*[/bold green]")
            elif today is not None and date(year, month, day) == today:
                cells.append(f"[bold yellow]{day}[/bold yellow]")
            else:
                cells.append(f"[dim]{day}[/dim]")
        table.add_row(*cells)

    console.print(table)
    console.print(f"[green]*[/green] {len(active)} active day(s)")


def display_success(message: str) -> None:
    """Display success message."""
    console.print(f"[green]✓[/green] {message}")


def display_error(message: str) -> None:
    """Display error message."""
    console.print(f"[red]✗[/red] {message}")


def display_warning(message: str) -> None:
    """Display warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def display_info(message: str) -> None:
    """Display info message."""
    console.print(f"[dim]ℹ[/dim] {message}")
