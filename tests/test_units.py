"""Tests for unit conversion utilities."""

import pytest

from stridekit.models import (
    UnitSystem,
    convert_speed,
    format_distance,
    format_duration,
    format_pace,
    format_speed,
    km_to_miles,
    miles_to_km,
)
from stridekit.models.units import KM_TO_MILES


def test_km_to_miles_conversion():
    """Test kilometer to miles conversion."""
    assert km_to_miles(5.0) == pytest.approx(3.10686, rel=0.01)
    assert km_to_miles(10.0) == pytest.approx(6.21371, rel=0.01)
    assert km_to_miles(42.195) == pytest.approx(26.2, rel=0.01)  # Marathon


def test_miles_to_km_conversion():
    """Test miles to kilometers conversion."""
    assert miles_to_km(3.1) == pytest.approx(4.989, rel=0.01)
    assert miles_to_km(26.2) == pytest.approx(42.165, rel=0.01)  # Marathon


def test_format_distance_metric():
    """Test distance formatting in kilometers."""
    assert format_distance(8.43) == "8.43 km"
    assert format_distance(21.1, UnitSystem.METRIC) == "21.10 km"
    assert format_distance(0.1112, UnitSystem.METRIC, decimals=3) == "0.111 km"


def test_format_distance_imperial():
    """Distances are stored in km and converted for display."""
    assert format_distance(10.0, UnitSystem.IMPERIAL) == "6.21 mi"
    assert format_distance(42.195, UnitSystem.IMPERIAL, decimals=1) == "26.2 mi"


def test_format_pace_metric():
    """Test pace formatting in min/km."""
    assert format_pace(5.0) == "5:00 /km"
    assert format_pace(4.5, UnitSystem.METRIC) == "4:30 /km"
    assert format_pace(6.0 + 59.6 / 60) == "7:00 /km"


def test_format_pace_imperial():
    """Test pace formatting in min/mile."""
    # 7:30 min/mile expressed in min/km
    assert format_pace(7.5 * KM_TO_MILES, UnitSystem.IMPERIAL) == "7:30 /mi"
    assert format_pace(6.0, UnitSystem.IMPERIAL) == "9:39 /mi"


def test_format_pace_without_distance():
    """No pace yet is shown as a placeholder, never a division error."""
    assert format_pace(None) == "--:-- /km"
    assert format_pace(0.0, UnitSystem.IMPERIAL) == "--:-- /mi"


def test_format_speed():
    assert format_speed(10.0) == "10.0 km/h"
    assert format_speed(10.0, UnitSystem.IMPERIAL) == "6.2 mph"
    assert convert_speed(10.0, UnitSystem.IMPERIAL) == pytest.approx(6.21371)


@pytest.mark.parametrize(
    "millis,expected",
    [
        (0, "0:00"),
        (59_999, "0:59"),
        (61_000, "1:01"),
        (3_599_000, "59:59"),
        (3_600_000, "1:00:00"),
        (3_725_000, "1:02:05"),
    ],
)
def test_format_duration(millis, expected):
    assert format_duration(millis) == expected


def test_format_pace_not_finite():
    assert format_pace(float("inf")) == "--:-- /km"
    assert format_pace(float("nan"), UnitSystem.IMPERIAL) == "--:-- /mi"
