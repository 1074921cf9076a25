"""Tests for magnetometer heading stabilization."""

import math

import pytest

from stridekit.telemetry import HeadingTracker, ManualClock


def vector_for(heading: float) -> tuple[float, float, float]:
    """Magnetometer reading that points the device at ``heading``."""
    angle = math.radians(-heading)
    return math.cos(angle), math.sin(angle), 0.0


@pytest.fixture
def tracker(clock):
    return HeadingTracker(clock=clock)


@pytest.mark.parametrize(
    "x,y,expected",
    [
        (1.0, 0.0, 0.0),
        (0.0, 1.0, 270.0),
        (-1.0, 0.0, 180.0),
        (0.0, -1.0, 90.0),
    ],
)
def test_vector_to_heading(x, y, expected):
    assert HeadingTracker.vector_to_heading(x, y) == pytest.approx(expected)


def test_first_reading_always_propagates(tracker):
    assert tracker.last_heading is None
    heading = tracker.ingest(*vector_for(42.0))
    assert heading == pytest.approx(42.0)
    assert tracker.last_heading == pytest.approx(42.0)


def test_small_changes_are_suppressed(tracker, clock):
    tracker.ingest(*vector_for(100.0))
    clock.advance(1000)
    assert tracker.ingest(*vector_for(104.0)) is None
    assert tracker.last_heading == pytest.approx(100.0)


def test_large_change_propagates_after_throttle(tracker, clock):
    tracker.ingest(*vector_for(100.0))
    clock.advance(300)
    assert tracker.ingest(*vector_for(120.0)) == pytest.approx(120.0)


def test_changes_within_throttle_window_are_dropped(tracker, clock):
    tracker.ingest(*vector_for(100.0))
    clock.advance(100)
    assert tracker.ingest(*vector_for(150.0)) is None
    clock.advance(250)
    assert tracker.ingest(*vector_for(150.0)) == pytest.approx(150.0)


def test_change_across_north_uses_short_way(tracker, clock):
    """Turning from 358 to 2 is a 4 degree change and stays suppressed."""
    tracker.ingest(*vector_for(358.0))
    clock.advance(1000)
    assert tracker.ingest(*vector_for(2.0)) is None

    clock.advance(1000)
    assert tracker.ingest(*vector_for(10.0)) == pytest.approx(10.0)


def test_non_finite_reading_is_ignored(tracker):
    assert tracker.ingest(math.nan, 1.0, 0.0) is None
    assert tracker.last_heading is None


def test_reset_lets_next_reading_through(tracker, clock):
    tracker.ingest(*vector_for(100.0))
    tracker.reset()
    assert tracker.ingest(*vector_for(101.0)) == pytest.approx(101.0)


def test_smoothing_window_averages_readings():
    clock = ManualClock()
    tracker = HeadingTracker(clock=clock, smoothing_window=2)
    tracker.ingest(*vector_for(350.0))
    clock.advance(1000)
    # Mean of 350 and 30 is 10
    assert tracker.ingest(*vector_for(30.0)) == pytest.approx(10.0)


def test_headings_stay_in_range(tracker, clock):
    for heading in range(0, 720, 37):
        clock.advance(500)
        value = tracker.ingest(*vector_for(float(heading)))
        if value is not None:
            assert 0 <= value < 360


def test_invalid_smoothing_window():
    with pytest.raises(ValueError):
        HeadingTracker(smoothing_window=0)
