"""Aggregate statistics computed over workout history."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from .enums import ActivityType


class ActivityTypeStats(BaseModel):
    """Totals for one activity type."""

    count: int = 0
    distance_km: float = 0.0
    calories_kcal: float = 0.0
    duration_millis: int = 0


class FitnessStats(BaseModel):
    """Totals and averages across a set of workouts."""

    total_workouts: int = 0
    total_distance_km: float = 0.0
    total_calories_kcal: float = 0.0
    total_duration_millis: int = 0
    total_steps: int = 0
    by_type: dict[ActivityType, ActivityTypeStats] = Field(default_factory=dict)

    @property
    def average_distance_km(self) -> float:
        if self.total_workouts == 0:
            return 0.0
        return self.total_distance_km / self.total_workouts

    @property
    def average_duration_millis(self) -> float:
        if self.total_workouts == 0:
            return 0.0
        return self.total_duration_millis / self.total_workouts

    @property
    def average_pace_min_per_km(self) -> float | None:
        if self.total_distance_km <= 0:
            return None
        return (self.total_duration_millis / 60_000) / self.total_distance_km


class PersonalBest(BaseModel):
    """A single best value and the workout that set it."""

    value: float
    workout_id: str
    recorded_at: datetime


class PersonalBests(BaseModel):
    """Best values across all workouts; None when history is empty."""

    longest_distance: PersonalBest | None = None
    longest_duration: PersonalBest | None = None
    most_steps: PersonalBest | None = None
    most_calories: PersonalBest | None = None


class MonthlySummary(BaseModel):
    """Workout totals for one calendar month."""

    month: date = Field(description="First day of the month")
    workout_count: int = 0
    total_distance_km: float = 0.0
    total_duration_millis: int = 0
    total_calories_kcal: float = 0.0

    @property
    def average_distance_km(self) -> float:
        if self.workout_count == 0:
            return 0.0
        return self.total_distance_km / self.workout_count

    @property
    def average_pace_min_per_km(self) -> float | None:
        if self.total_distance_km <= 0:
            return None
        return (self.total_duration_millis / 60_000) / self.total_distance_km
