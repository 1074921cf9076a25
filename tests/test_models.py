"""Tests for Pydantic data models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from stridekit.models import (
    ActivityType,
    Coordinate,
    FitnessStats,
    MonthlySummary,
    StoredWorkout,
    WorkoutRecord,
    WorkoutStats,
)


def test_coordinate_accepts_short_keys():
    """Fixes from JSON tracks use lat/lon/alt."""
    coordinate = Coordinate.model_validate({"lat": 42.36, "lon": -71.06, "alt": 12.0})
    assert coordinate.latitude == 42.36
    assert coordinate.longitude == -71.06
    assert coordinate.altitude == 12.0
    assert coordinate.accuracy is None


@pytest.mark.parametrize(
    "data",
    [
        {"latitude": 91, "longitude": 0},
        {"latitude": 0, "longitude": -180.5},
        {"latitude": float("nan"), "longitude": 0},
        {"latitude": 0, "longitude": 0, "accuracy": -1},
    ],
)
def test_coordinate_rejects_invalid_values(data):
    with pytest.raises(ValidationError):
        Coordinate.model_validate(data)


def test_coordinate_is_immutable():
    coordinate = Coordinate(latitude=1.0, longitude=2.0)
    with pytest.raises(ValidationError):
        coordinate.latitude = 3.0


def test_activity_type_lookup():
    assert ActivityType("running") == ActivityType.RUNNING
    assert ActivityType(" Cycling ") == ActivityType.CYCLING
    assert ActivityType("Swimming") == ActivityType.OTHER


def test_workout_stats_pace_and_speed():
    # 5 km in 30 minutes
    stats = WorkoutStats(elapsed_millis=30 * 60_000, distance_km=5.0)
    assert stats.pace_min_per_km == pytest.approx(6.0)
    assert stats.average_speed_kph == pytest.approx(10.0)


def test_workout_stats_without_distance_or_time():
    assert WorkoutStats(elapsed_millis=60_000).pace_min_per_km is None
    assert WorkoutStats().average_speed_kph == 0.0


def test_workout_record_export_keys():
    """Records serialize with the mobile app's export keys."""
    record = WorkoutRecord(
        activity_type=ActivityType.RUNNING,
        duration_millis=1_800_000,
        distance_km=5.0,
        calories_kcal=500.0,
        step_count=5200,
        elevation_gain_m=35.0,
        route=(Coordinate(latitude=0, longitude=0),),
    )

    data = record.model_dump(by_alias=True)
    assert data["type"] == ActivityType.RUNNING
    assert data["duration"] == 1_800_000
    assert data["distance"] == 5.0
    assert data["calories"] == 500.0
    assert data["steps"] == 5200
    assert data["elevationGain"] == 35.0
    assert record.duration_minutes == pytest.approx(30.0)
    assert record.pace_min_per_km == pytest.approx(6.0)


def test_stored_workout_from_export():
    """Older exports may leave steps and elevation out or null."""
    workout = StoredWorkout.model_validate(
        {
            "id": "1717225200000",
            "date": "2024-06-01T07:00:00.000Z",
            "type": "Walking",
            "duration": 900_000,
            "distance": 1.2,
            "calories": 57.0,
            "steps": None,
            "route": [{"latitude": 0.0, "longitude": 0.0, "timestamp": 1717225200000}],
        }
    )

    assert workout.workout_id == "1717225200000"
    assert workout.recorded_at == datetime(2024, 6, 1, 7, 0, tzinfo=UTC)
    assert workout.activity_type == ActivityType.WALKING
    assert workout.step_count == 0
    assert workout.elevation_gain_m == 0.0
    assert len(workout.route) == 1


def test_stored_workout_from_record():
    record = WorkoutRecord(
        activity_type="Cycling", duration_millis=600_000, distance_km=4.0, calories_kcal=375.0
    )
    recorded_at = datetime(2024, 6, 1, 8, 30, tzinfo=UTC)
    workout = StoredWorkout.from_record(record, workout_id="abc", recorded_at=recorded_at)

    assert workout.workout_id == "abc"
    assert workout.recorded_at == recorded_at
    assert workout.distance_km == 4.0
    assert workout.average_speed_kph == pytest.approx(24.0)


def test_workout_record_rejects_negative_distance():
    with pytest.raises(ValidationError):
        WorkoutRecord(
            activity_type="Running", duration_millis=1000, distance_km=-1.0, calories_kcal=0
        )


def test_fitness_stats_averages():
    stats = FitnessStats(total_workouts=4, total_distance_km=20.0, total_duration_millis=120 * 60_000)
    assert stats.average_distance_km == pytest.approx(5.0)
    assert stats.average_duration_millis == pytest.approx(30 * 60_000)
    assert stats.average_pace_min_per_km == pytest.approx(6.0)
    assert FitnessStats().average_pace_min_per_km is None


def test_monthly_summary_averages():
    summary = MonthlySummary(
        month=datetime(2024, 6, 1).date(),
        workout_count=2,
        total_distance_km=12.0,
        total_duration_millis=72 * 60_000,
    )
    assert summary.average_distance_km == pytest.approx(6.0)
    assert summary.average_pace_min_per_km == pytest.approx(6.0)
