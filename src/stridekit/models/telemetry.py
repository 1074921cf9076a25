"""Live telemetry models: position fixes, running totals and pending deltas."""

from pydantic import AliasChoices, BaseModel, Field


class Coordinate(BaseModel):
    """
    One reported device position.

    Produced by the location provider and never modified afterwards.
    Latitude and longitude are in degrees, altitude and accuracy in meters.
    """

    latitude: float = Field(
        description="Latitude in degrees",
        validation_alias=AliasChoices("latitude", "lat"),
        ge=-90,
        le=90,
    )
    longitude: float = Field(
        description="Longitude in degrees",
        validation_alias=AliasChoices("longitude", "lon", "lng"),
        ge=-180,
        le=180,
    )
    altitude: float | None = Field(
        default=None,
        description="Altitude in meters above sea level, if the fix has one",
        validation_alias=AliasChoices("altitude", "alt", "elevation"),
    )
    accuracy: float | None = Field(
        default=None,
        description="Horizontal accuracy radius in meters",
        ge=0,
    )

    model_config = {"frozen": True, "allow_inf_nan": False}


class WorkoutStats(BaseModel):
    """
    Running totals of a workout session.

    Owned by a single WorkoutSession and mutated only through its lifecycle
    methods. Everything handed to observers is a copy.
    """

    elapsed_millis: int = Field(default=0, ge=0, description="Tracked time, pauses excluded")
    distance_km: float = Field(default=0.0, ge=0, description="Committed distance")
    elevation_gain_m: float = Field(default=0.0, ge=0, description="Sum of positive climbs")
    step_count: int = Field(default=0, ge=0, description="Steps since the session started")
    calories_kcal: float = Field(default=0.0, ge=0, description="Derived from distance")
    heading_degrees: float = Field(default=0.0, ge=0, lt=360, description="Compass heading")

    @property
    def pace_min_per_km(self) -> float | None:
        """Average pace in minutes per kilometer, or None before any distance."""
        if self.distance_km <= 0:
            return None
        return (self.elapsed_millis / 60_000) / self.distance_km

    @property
    def average_speed_kph(self) -> float:
        """Average speed in kilometers per hour."""
        if self.elapsed_millis <= 0:
            return 0.0
        return self.distance_km / (self.elapsed_millis / 3_600_000)


class PendingDelta(BaseModel):
    """Distance and climb measured since the last commit."""

    distance_km: float = Field(default=0.0, ge=0)
    elevation_m: float = Field(default=0.0, ge=0)

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return self.distance_km == 0 and self.elevation_m == 0
