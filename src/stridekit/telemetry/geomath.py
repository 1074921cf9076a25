"""
Geodesic and angular helpers.

Pure functions with no state. Inputs are degrees; callers validate ranges
(Coordinate does this at construction).
"""

import math
from collections.abc import Sequence

from ..models.telemetry import Coordinate

# Mean Earth radius
EARTH_RADIUS_KM = 6371.0


def normalize_degrees(angle: float) -> float:
    """Map a finite angle into [0, 360)."""
    result = angle % 360.0
    # -1e-20 % 360.0 rounds to 360.0
    if result >= 360.0:
        return 0.0
    return result


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """
    Great-circle distance between two coordinates using the haversine formula.

    Args:
        a: Start coordinate
        b: End coordinate

    Returns:
        Distance in kilometers; 0 when both coordinates are the same point
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def elevation_delta(a: Coordinate, b: Coordinate) -> float:
    """
    Climb in meters from ``a`` to ``b``.

    Only gains count: descents and fixes without altitude give 0.
    """
    if a.altitude is None or b.altitude is None:
        return 0.0
    return max(0.0, b.altitude - a.altitude)


def shortest_angle_diff(target: float, current: float) -> float:
    """
    Signed rotation from ``current`` to ``target`` in (-180, 180].

    Crosses the 0/360 boundary the short way: ``shortest_angle_diff(359, 1)``
    is -2, not 358.
    """
    diff = (target - current) % 360.0
    if diff > 180.0:
        diff -= 360.0
    return diff


def circular_mean(headings: Sequence[float]) -> float:
    """
    Mean of angles in degrees, computed by summing unit vectors.

    Arithmetic averaging breaks across north (mean of 350 and 10 would be
    180); the vector mean gives 0.
    """
    if not headings:
        return 0.0
    if len(headings) == 1:
        return headings[0]

    sin_sum = sum(math.sin(math.radians(h)) for h in headings)
    cos_sum = sum(math.cos(math.radians(h)) for h in headings)
    return normalize_degrees(math.degrees(math.atan2(sin_sum, cos_sum)))
