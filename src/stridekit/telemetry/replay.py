"""
Replay a recorded track through a WorkoutSession.

Time comes from the recording: a ManualClock is moved to each fix's offset
and the session is ticked on every commit boundary in between, exactly as the
live cadence would. Useful for testing tracks and importing GPX files.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import gpxpy
from pydantic import BaseModel, Field, ValidationError

from ..config import Settings
from ..models.enums import ActivityType, SessionEvent
from ..models.telemetry import Coordinate, WorkoutStats
from ..models.workout import WorkoutRecord
from .clock import ManualClock
from .errors import PreconditionNotMet
from .providers import PersistenceSink
from .session import WorkoutSession

logger = logging.getLogger(__name__)

# Spacing assumed between fixes that carry no timestamp (a 1 Hz provider)
DEFAULT_FIX_INTERVAL_MS = 1000


class TrackPoint(BaseModel):
    """One recorded fix and when it arrived, relative to the first fix."""

    offset_ms: int = Field(ge=0)
    coordinate: Coordinate
    steps: int | None = Field(default=None, description="Cumulative pedometer reading")

    model_config = {"frozen": True}


class ReplayResult(BaseModel):
    """Outcome of a replay: the finished workout and every tick snapshot."""

    record: WorkoutRecord
    snapshots: list[WorkoutStats] = Field(default_factory=list)


def _offsets_from_times(times: list[datetime | None]) -> list[int]:
    if times and all(t is not None for t in times):
        first = times[0]
        return [max(0, int((t - first).total_seconds() * 1000)) for t in times]  # type: ignore[operator]
    return [i * DEFAULT_FIX_INTERVAL_MS for i in range(len(times))]


def parse_gpx(text: str) -> tuple[list[TrackPoint], int]:
    """
    Parse GPX track points.

    Returns:
        (points sorted by offset, number of points skipped as invalid)
    """
    gpx = gpxpy.parse(text)

    coordinates: list[Coordinate] = []
    times: list[datetime | None] = []
    skipped = 0
    for track in gpx.tracks:
        for segment in track.segments:
            for point in segment.points:
                try:
                    coordinates.append(
                        Coordinate(
                            latitude=point.latitude,
                            longitude=point.longitude,
                            altitude=point.elevation,
                        )
                    )
                except ValidationError as e:
                    logger.warning(f"Skipping invalid GPX point: {e.errors()[0]['msg']}")
                    skipped += 1
                    continue
                times.append(point.time)

    offsets = _offsets_from_times(times)
    points = [
        TrackPoint(offset_ms=offset, coordinate=coordinate)
        for offset, coordinate in zip(offsets, coordinates, strict=True)
    ]
    return sorted(points, key=lambda p: p.offset_ms), skipped


def parse_json_track(data: list[dict[str, Any]]) -> tuple[list[TrackPoint], int]:
    """
    Parse the JSON track format.

    Each entry is ``{"t": <ms since start>, "lat": .., "lon": .., "alt": .., "steps": ..}``;
    ``t`` may be omitted, in which case fixes are assumed one second apart.

    Returns:
        (points sorted by offset, number of entries skipped as invalid)
    """
    points: list[TrackPoint] = []
    skipped = 0
    for index, entry in enumerate(data):
        try:
            points.append(
                TrackPoint(
                    offset_ms=entry.get("t", index * DEFAULT_FIX_INTERVAL_MS),
                    coordinate=Coordinate.model_validate(entry),
                    steps=entry.get("steps"),
                )
            )
        except (ValidationError, AttributeError) as e:
            logger.warning(f"Skipping invalid track entry {index}: {e}")
            skipped += 1

    if points:
        first = min(p.offset_ms for p in points)
        points = [p.model_copy(update={"offset_ms": p.offset_ms - first}) for p in points]
    return sorted(points, key=lambda p: p.offset_ms), skipped


def load_track(path: str | Path) -> tuple[list[TrackPoint], int]:
    """
    Load a track from a .gpx or .json file.

    Raises:
        ValueError: If the file extension is not supported
    """
    path = Path(path)
    suffix = path.suffix.lower()
    logger.info(f"Loading track from {path}")

    if suffix == ".gpx":
        return parse_gpx(path.read_text(encoding="utf-8"))
    if suffix == ".json":
        with open(path, encoding="utf-8") as f:
            return parse_json_track(json.load(f))
    raise ValueError(f"Unsupported track format: {path.suffix or path.name}")


def replay_track(
    points: list[TrackPoint],
    activity_type: ActivityType | str = ActivityType.RUNNING,
    weight_kg: float | None = None,
    settings: Settings | None = None,
    sink: PersistenceSink | None = None,
) -> ReplayResult:
    """
    Drive a fresh session through a recorded track.

    Args:
        points: Fixes sorted by offset
        activity_type: Workout type to record
        weight_kg: Body weight for calories
        settings: Cadence and threshold configuration
        sink: Receives the finished workout

    Returns:
        The finished workout and the snapshot published at each tick

    Raises:
        PreconditionNotMet: If the track has no fixes
    """
    if not points:
        raise PreconditionNotMet("Track has no usable fixes")

    clock = ManualClock()
    snapshots: list[WorkoutStats] = []

    def on_event(event: SessionEvent, stats: WorkoutStats) -> None:
        if event == SessionEvent.TICK:
            snapshots.append(stats)

    with WorkoutSession(clock=clock, settings=settings, sink=sink) as session:
        session.subscribe(on_event)
        session.start(activity_type, weight_kg, current_fix=points[0].coordinate)

        interval = session.commit_interval_ms
        next_tick = interval
        for point in points:
            while point.offset_ms >= next_tick:
                clock.set(next_tick)
                session.tick()
                next_tick += interval
            clock.set(point.offset_ms)
            session.record_sample(point.coordinate)
            if point.steps is not None:
                session.record_step(point.steps)

        record = session.stop()

    logger.info(f"Replayed {len(points)} fixes into {len(snapshots)} ticks")
    return ReplayResult(record=record, snapshots=snapshots)
