"""
Distance-based energy expenditure estimate.

Calories scale with distance covered, the activity's MET relative to running
and body weight relative to a 70 kg reference: about 100 kcal per km for a
70 kg runner. Time spent standing still burns nothing in this model.
"""

import math

from ..models.enums import ActivityType
from .errors import InvalidInput

REFERENCE_MET = 8.0  # Running
REFERENCE_KCAL_PER_KM = 100.0
REFERENCE_WEIGHT_KG = 70.0

# Metabolic Equivalent of Task at a moderate pace
MET_TABLE: dict[ActivityType, float] = {
    ActivityType.RUNNING: 8.0,
    ActivityType.WALKING: 3.8,
    ActivityType.CYCLING: 7.5,
    ActivityType.OTHER: 5.0,
}


def met_for(activity_type: ActivityType | str) -> float:
    """MET value for an activity type; unknown types use the "Other" value."""
    return MET_TABLE[ActivityType(activity_type)]


def calories_per_km(activity_type: ActivityType | str, weight_kg: float) -> float:
    """
    Energy cost of one kilometer.

    Raises:
        InvalidInput: If weight is not a positive finite number
    """
    if not math.isfinite(weight_kg) or weight_kg <= 0:
        raise InvalidInput(f"Body weight must be a positive number, got {weight_kg}")
    return (
        (met_for(activity_type) / REFERENCE_MET)
        * REFERENCE_KCAL_PER_KM
        * (weight_kg / REFERENCE_WEIGHT_KG)
    )


def estimate(activity_type: ActivityType | str, distance_km: float, weight_kg: float) -> float:
    """
    Estimate calories burned over a distance.

    Args:
        activity_type: Running, Walking, Cycling or Other
        distance_km: Cumulative distance in kilometers
        weight_kg: Body weight in kilograms

    Returns:
        Energy in kcal

    Raises:
        InvalidInput: If distance is negative or non-finite, or weight is not
            a positive finite number
    """
    if not math.isfinite(distance_km) or distance_km < 0:
        raise InvalidInput(f"Distance must be a non-negative number, got {distance_km}")
    return distance_km * calories_per_km(activity_type, weight_kg)
