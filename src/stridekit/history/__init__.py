"""DuckDB-backed workout history for stridekit."""

from .database import HistoryDatabase
from .importer import import_workouts, load_workouts, parse_workouts
from .repository import WorkoutRepository, period_start

__all__ = [
    "HistoryDatabase",
    "WorkoutRepository",
    "import_workouts",
    "load_workouts",
    "parse_workouts",
    "period_start",
]
