"""Unit conversion and display formatting for distance, speed, pace and time."""

import math
from enum import Enum


class UnitSystem(str, Enum):
    """Unit system for distance measurements."""

    METRIC = "metric"  # kilometers
    IMPERIAL = "imperial"  # miles


# Conversion constants
KM_TO_MILES = 0.621371
MILES_TO_KM = 1.609344

PACE_PLACEHOLDER = "--:--"


def km_to_miles(km: float) -> float:
    """
    Convert kilometers to miles.

    Args:
        km: Distance in kilometers

    Returns:
        Distance in miles
    """
    return km * KM_TO_MILES


def miles_to_km(miles: float) -> float:
    """
    Convert miles to kilometers.

    Args:
        miles: Distance in miles

    Returns:
        Distance in kilometers
    """
    return miles * MILES_TO_KM


def convert_distance(distance_km: float, unit: UnitSystem = UnitSystem.METRIC) -> float:
    """Convert a distance in kilometers to the display unit."""
    if unit == UnitSystem.IMPERIAL:
        return km_to_miles(distance_km)
    return distance_km


def convert_speed(speed_kph: float, unit: UnitSystem = UnitSystem.METRIC) -> float:
    """Convert a speed in km/h to the display unit (km/h or mph)."""
    if unit == UnitSystem.IMPERIAL:
        return speed_kph * KM_TO_MILES
    return speed_kph


def distance_unit(unit: UnitSystem = UnitSystem.METRIC) -> str:
    return "mi" if unit == UnitSystem.IMPERIAL else "km"


def speed_unit(unit: UnitSystem = UnitSystem.METRIC) -> str:
    return "mph" if unit == UnitSystem.IMPERIAL else "km/h"


def format_distance(
    distance_km: float, unit: UnitSystem = UnitSystem.METRIC, decimals: int = 2
) -> str:
    """
    Format a distance stored in kilometers with the unit label.

    Args:
        distance_km: Distance in kilometers
        unit: Unit system to display in
        decimals: Number of decimal places

    Returns:
        Formatted distance string (e.g., "5.24 km" or "3.26 mi")
    """
    converted = convert_distance(distance_km, unit)
    return f"{converted:.{decimals}f} {distance_unit(unit)}"


def format_speed(speed_kph: float, unit: UnitSystem = UnitSystem.METRIC, decimals: int = 1) -> str:
    """Format a speed stored in km/h with the unit label (e.g., "10.4 km/h")."""
    converted = convert_speed(speed_kph, unit)
    return f"{converted:.{decimals}f} {speed_unit(unit)}"


def format_pace(pace_min_per_km: float | None, unit: UnitSystem = UnitSystem.METRIC) -> str:
    """
    Format pace as MM:SS per unit.

    Args:
        pace_min_per_km: Pace in minutes per kilometer, or None when no pace
            is available yet (no distance covered)
        unit: Unit system to display in

    Returns:
        Formatted pace string (e.g., "4:41 /km" or "7:32 /mi"), or a
        placeholder when there is no pace
    """
    unit_label = distance_unit(unit)
    if pace_min_per_km is None or not math.isfinite(pace_min_per_km) or pace_min_per_km <= 0:
        return f"{PACE_PLACEHOLDER} /{unit_label}"

    pace = pace_min_per_km / KM_TO_MILES if unit == UnitSystem.IMPERIAL else pace_min_per_km
    minutes, seconds = divmod(round(pace * 60), 60)
    return f"{minutes}:{seconds:02d} /{unit_label}"


def format_duration(milliseconds: int | float) -> str:
    """
    Format an elapsed time as a stopwatch string.

    Returns "H:MM:SS" once the duration reaches an hour, otherwise "M:SS".
    """
    total_seconds = int((milliseconds or 0) // 1000)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"
