"""Live workout telemetry: geodesy, accumulation, calories, heading and the session."""

from .accumulator import COMMIT_INTERVAL_MS, MetricsAccumulator
from .clock import Clock, ManualClock, MonotonicClock
from .driver import SessionDriver
from .errors import (
    InvalidInput,
    InvalidTransition,
    PersistenceFailed,
    PreconditionNotMet,
    WorkoutError,
)
from .heading import HeadingTracker
from .session import TRANSITIONS, WorkoutSession

__all__ = [
    "COMMIT_INTERVAL_MS",
    "Clock",
    "HeadingTracker",
    "InvalidInput",
    "InvalidTransition",
    "ManualClock",
    "MetricsAccumulator",
    "MonotonicClock",
    "PersistenceFailed",
    "PreconditionNotMet",
    "SessionDriver",
    "TRANSITIONS",
    "WorkoutError",
    "WorkoutSession",
]
