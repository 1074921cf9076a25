"""Data models for stridekit."""

from .enums import (
    ActivityType,
    SessionAction,
    SessionEvent,
    SessionState,
    SortKey,
    StatsPeriod,
)
from .stats import (
    ActivityTypeStats,
    FitnessStats,
    MonthlySummary,
    PersonalBest,
    PersonalBests,
)
from .telemetry import Coordinate, PendingDelta, WorkoutStats
from .units import (
    UnitSystem,
    convert_distance,
    convert_speed,
    format_distance,
    format_duration,
    format_pace,
    format_speed,
    km_to_miles,
    miles_to_km,
)
from .workout import StoredWorkout, WorkoutRecord

__all__ = [
    # Telemetry models
    "Coordinate",
    "PendingDelta",
    "WorkoutStats",
    # Workout models
    "WorkoutRecord",
    "StoredWorkout",
    # History aggregates
    "ActivityTypeStats",
    "FitnessStats",
    "MonthlySummary",
    "PersonalBest",
    "PersonalBests",
    # Enums
    "ActivityType",
    "SessionAction",
    "SessionEvent",
    "SessionState",
    "SortKey",
    "StatsPeriod",
    # Units
    "UnitSystem",
    "km_to_miles",
    "miles_to_km",
    "convert_distance",
    "convert_speed",
    "format_distance",
    "format_duration",
    "format_pace",
    "format_speed",
]
