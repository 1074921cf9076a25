"""Contracts for the collaborators around a workout session."""

from collections.abc import Callable
from typing import Any, Protocol

from ..models.enums import SessionEvent
from ..models.telemetry import Coordinate, WorkoutStats
from ..models.workout import WorkoutRecord


class Subscription(Protocol):
    """Handle to a sensor subscription."""

    def remove(self) -> None: ...


class LocationProvider(Protocol):
    """Delivers position fixes at roughly 1 Hz or faster."""

    def watch(self, callback: Callable[[Coordinate], None]) -> Subscription: ...


class OrientationProvider(Protocol):
    """Delivers raw (x, y, z) magnetometer vectors, typically around 2 Hz."""

    def watch(self, callback: Callable[[float, float, float], None]) -> Subscription: ...


class StepProvider(Protocol):
    """Delivers cumulative step counts since an arbitrary epoch."""

    def watch(self, callback: Callable[[int], None]) -> Subscription: ...


class PersistenceSink(Protocol):
    """Accepts one finished workout per stopped session."""

    def save(self, record: WorkoutRecord) -> Any: ...


class SessionObserver(Protocol):
    """Receives a copy of the stats after each tick, transition and heading change."""

    def __call__(self, event: SessionEvent, stats: WorkoutStats) -> None: ...
