"""Tests for replaying recorded tracks through a session."""

import json
from unittest.mock import MagicMock

import pytest

from stridekit.models import ActivityType
from stridekit.telemetry import PreconditionNotMet
from stridekit.telemetry.geomath import distance_km
from stridekit.telemetry.replay import (
    TrackPoint,
    load_track,
    parse_gpx,
    parse_json_track,
    replay_track,
)

SAMPLE_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>Morning Run</name>
    <trkseg>
      <trkpt lat="0.0" lon="0.0"><ele>10.0</ele><time>2024-06-01T07:00:00Z</time></trkpt>
      <trkpt lat="0.0" lon="0.001"><ele>15.0</ele><time>2024-06-01T07:00:05Z</time></trkpt>
      <trkpt lat="95.0" lon="0.0015"><ele>15.0</ele><time>2024-06-01T07:00:07Z</time></trkpt>
      <trkpt lat="0.0" lon="0.002"><ele>12.0</ele><time>2024-06-01T07:00:10Z</time></trkpt>
    </trkseg>
  </trk>
</gpx>
"""


@pytest.fixture
def json_track():
    return [
        {"t": 1000, "lat": 0.0, "lon": 0.0, "steps": 100},
        {"t": 3000, "lat": 0.0, "lon": 0.001, "alt": 4.0, "steps": 104},
        {"lat": "not a number", "lon": 0.0},
    ]


def test_parse_gpx():
    points, skipped = parse_gpx(SAMPLE_GPX)

    assert skipped == 1
    assert [p.offset_ms for p in points] == [0, 5000, 10_000]
    assert points[1].coordinate.longitude == pytest.approx(0.001)
    assert points[1].coordinate.altitude == pytest.approx(15.0)


def test_parse_json_track(json_track):
    points, skipped = parse_json_track(json_track)

    assert skipped == 1
    assert [p.offset_ms for p in points] == [0, 2000]
    assert points[0].steps == 100
    assert points[1].coordinate.altitude == pytest.approx(4.0)


def test_json_track_without_times_assumes_one_hertz():
    points, _ = parse_json_track([{"lat": 0, "lon": 0}, {"lat": 0, "lon": 0.001}])
    assert [p.offset_ms for p in points] == [0, 1000]


def test_replay_gpx_track(settings):
    points, _ = parse_gpx(SAMPLE_GPX)
    result = replay_track(points, ActivityType.RUNNING, 70, settings=settings)

    record = result.record
    expected_km = distance_km(points[0].coordinate, points[2].coordinate)
    assert record.distance_km == pytest.approx(expected_km, rel=1e-6)
    assert record.elevation_gain_m == pytest.approx(5.0)
    assert record.duration_millis == 10_000
    assert record.calories_kcal == pytest.approx(expected_km * 100)
    assert len(record.route) == 3

    # One snapshot per commit interval: 2, 4, 6, 8 and 10 seconds
    assert [s.elapsed_millis for s in result.snapshots] == [2000, 4000, 6000, 8000, 10_000]
    distances = [s.distance_km for s in result.snapshots]
    assert distances == sorted(distances)


def test_replay_json_track_counts_steps(settings, json_track):
    points, _ = parse_json_track(json_track)
    result = replay_track(points, "Walking", 60, settings=settings)

    assert result.record.activity_type == ActivityType.WALKING
    assert result.record.step_count == 4
    assert result.record.elevation_gain_m == 0.0


def test_replay_hands_record_to_sink(settings, json_track):
    sink = MagicMock()
    points, _ = parse_json_track(json_track)
    result = replay_track(points, settings=settings, sink=sink)
    sink.save.assert_called_once_with(result.record)


def test_replay_empty_track(settings):
    with pytest.raises(PreconditionNotMet):
        replay_track([], settings=settings)


def test_load_track_from_files(tmp_path, json_track):
    gpx_file = tmp_path / "run.gpx"
    gpx_file.write_text(SAMPLE_GPX, encoding="utf-8")
    json_file = tmp_path / "walk.json"
    json_file.write_text(json.dumps(json_track), encoding="utf-8")

    gpx_points, _ = load_track(gpx_file)
    json_points, _ = load_track(json_file)
    assert len(gpx_points) == 3
    assert len(json_points) == 2
    assert all(isinstance(p, TrackPoint) for p in gpx_points + json_points)


def test_load_track_unsupported_format(tmp_path):
    path = tmp_path / "track.csv"
    path.write_text("lat,lon\n0,0\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported track format"):
        load_track(path)
