"""Tests for importing the mobile app's workout export."""

import json

import pytest

from stridekit.history import import_workouts, load_workouts, parse_workouts
from stridekit.models import ActivityType


@pytest.fixture
def export():
    """Workouts as the mobile app stores them."""
    return [
        {
            "id": "1717225200000",
            "date": "2024-06-01T07:00:00.000Z",
            "type": "Running",
            "duration": 1_800_000,
            "distance": 5.02,
            "calories": 502.0,
            "steps": 5400,
            "elevationGain": 32.0,
            "route": [
                {"latitude": 42.3601, "longitude": -71.0589, "altitude": 5.0},
                {"latitude": 42.3611, "longitude": -71.0579, "altitude": 7.5},
            ],
        },
        {
            "id": "1717311600000",
            "date": "2024-06-02T07:00:00.000Z",
            "type": "Walking",
            "duration": 1_200_000,
            "distance": 1.9,
            "calories": 90.0,
            "route": [],
        },
        {"id": "broken", "type": "Running", "distance": -3},
    ]


def test_parse_list_export(export):
    workouts, skipped = parse_workouts(export)

    assert skipped == 1
    assert [w.workout_id for w in workouts] == ["1717225200000", "1717311600000"]
    assert workouts[0].elevation_gain_m == 32.0
    assert workouts[0].route[1].altitude == 7.5
    assert workouts[1].activity_type == ActivityType.WALKING
    assert workouts[1].step_count == 0


def test_parse_wrapped_export(export):
    workouts, skipped = parse_workouts({"workouts": export[:2]})
    assert len(workouts) == 2
    assert skipped == 0


@pytest.mark.parametrize("data", [{"runs": []}, "workouts", 42])
def test_parse_rejects_other_documents(data):
    with pytest.raises(ValueError):
        parse_workouts(data)


def test_import_into_history(tmp_path, repository, export):
    path = tmp_path / "workouts.json"
    path.write_text(json.dumps(export), encoding="utf-8")

    workouts, _ = load_workouts(path)
    assert import_workouts(repository, workouts) == 2
    # Importing the same export again replaces rather than duplicates
    assert import_workouts(repository, workouts) == 2

    assert repository.count() == 2
    stored = repository.get_workout("1717225200000")
    assert stored.distance_km == pytest.approx(5.02)
    assert len(stored.route) == 2
