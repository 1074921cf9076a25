"""Errors raised by the workout telemetry pipeline."""

from ..models.enums import SessionAction, SessionState
from ..models.workout import WorkoutRecord


class WorkoutError(Exception):
    """Base class for workout session errors."""


class PreconditionNotMet(WorkoutError):
    """An operation needed a state or input that was not available."""


class InvalidTransition(WorkoutError):
    """A lifecycle method was called from a state that does not allow it."""

    def __init__(self, state: SessionState, action: SessionAction) -> None:
        self.state = state
        self.action = action
        super().__init__(f"Cannot {action.value} a workout that is {state.value}")


class InvalidInput(WorkoutError, ValueError):
    """A numeric input was malformed (negative, zero or non-finite where not allowed)."""


class PersistenceFailed(WorkoutError):
    """The persistence sink could not save a finished workout.

    The workout itself is complete; ``record`` carries it so the caller can
    retry or save it somewhere else.
    """

    def __init__(self, record: WorkoutRecord, cause: Exception) -> None:
        self.record = record
        super().__init__(f"Failed to save finished workout: {cause}")
