"""Import workouts exported by the mobile app into the history store."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..models import StoredWorkout
from .repository import WorkoutRepository

logger = logging.getLogger(__name__)


def parse_workouts(data: Any) -> tuple[list[StoredWorkout], int]:
    """
    Parse a workout export.

    Accepts either a bare list of workouts or an object with a ``workouts``
    list. Each entry uses the export keys (``id``, ``date``, ``type``,
    ``duration``, ``distance``, ``calories``, ``steps``, ``route``,
    ``elevationGain``).

    Args:
        data: Decoded JSON document

    Returns:
        (valid workouts, number of entries skipped as invalid)

    Raises:
        ValueError: If the document holds no workout list at all
    """
    if isinstance(data, dict):
        data = data.get("workouts")
    if not isinstance(data, list):
        raise ValueError("Expected a list of workouts or an object with a 'workouts' list")

    workouts: list[StoredWorkout] = []
    skipped = 0
    for index, entry in enumerate(data):
        try:
            workouts.append(StoredWorkout.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Skipping invalid workout at index {index}: {e.error_count()} error(s)")
            skipped += 1

    logger.info(f"Parsed {len(workouts)} workout(s), skipped {skipped}")
    return workouts, skipped


def load_workouts(path: str | Path) -> tuple[list[StoredWorkout], int]:
    """Read and parse a workout export file."""
    path = Path(path)
    logger.info(f"Loading workouts from {path}")
    with open(path, encoding="utf-8") as f:
        return parse_workouts(json.load(f))


def import_workouts(repository: WorkoutRepository, workouts: list[StoredWorkout]) -> int:
    """
    Store imported workouts, replacing any with the same id.

    Returns:
        Number of workouts stored
    """
    for workout in workouts:
        repository.upsert_workout(workout)
    logger.info(f"Imported {len(workouts)} workout(s)")
    return len(workouts)
