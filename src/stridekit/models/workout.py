"""Finished workout models handed from a session to the history store."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .enums import ActivityType
from .telemetry import Coordinate


class WorkoutRecord(BaseModel):
    """
    Immutable summary of a finished workout.

    Serialized with the keys of the mobile app's workout export
    (``type``, ``duration``, ``distance``...) when dumped by alias.
    Distances are in kilometers, durations in milliseconds.
    """

    activity_type: ActivityType = Field(
        description="Type of workout",
        alias="type",
    )
    duration_millis: int = Field(
        description="Tracked duration in milliseconds, excluding pauses",
        alias="duration",
        ge=0,
    )
    distance_km: float = Field(
        description="Total distance in kilometers",
        alias="distance",
        ge=0,
    )
    calories_kcal: float = Field(
        description="Estimated energy expenditure in kcal",
        alias="calories",
        ge=0,
    )
    step_count: int = Field(
        default=0,
        description="Steps taken during the workout",
        alias="steps",
        ge=0,
    )
    elevation_gain_m: float = Field(
        default=0.0,
        description="Cumulative positive climb in meters",
        alias="elevationGain",
        ge=0,
    )
    route: tuple[Coordinate, ...] = Field(
        default=(),
        description="Recorded fixes in chronological order",
    )

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("step_count", "elevation_gain_m", "calories_kcal", mode="before")
    @classmethod
    def missing_as_zero(cls, v: Any) -> Any:
        """Exports from older app versions leave optional totals out or null."""
        return 0 if v is None else v

    @property
    def duration_minutes(self) -> float:
        return self.duration_millis / 60_000

    @property
    def pace_min_per_km(self) -> float | None:
        """Average pace in minutes per kilometer, or None for a zero-distance workout."""
        if self.distance_km <= 0:
            return None
        return self.duration_minutes / self.distance_km

    @property
    def average_speed_kph(self) -> float:
        """Average speed in kilometers per hour."""
        if self.duration_millis <= 0:
            return 0.0
        return self.distance_km / (self.duration_millis / 3_600_000)


class StoredWorkout(WorkoutRecord):
    """A workout record as kept in history, with its identity and save time."""

    workout_id: str = Field(
        description="Unique identifier assigned by the history store",
        alias="id",
    )
    recorded_at: datetime = Field(
        description="When the workout was saved",
        alias="date",
    )

    @classmethod
    def from_record(
        cls, record: WorkoutRecord, workout_id: str, recorded_at: datetime
    ) -> "StoredWorkout":
        return cls(
            workout_id=workout_id,
            recorded_at=recorded_at,
            **record.model_dump(),
        )
