"""Enumeration types for workout data models."""

from enum import Enum


class ActivityType(str, Enum):
    """Type of outdoor workout."""

    RUNNING = "Running"
    WALKING = "Walking"
    CYCLING = "Cycling"
    OTHER = "Other"

    @classmethod
    def _missing_(cls, value: object) -> "ActivityType":
        # Case-insensitive lookup; anything unrecognised is an "Other" workout
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return cls.OTHER


class SessionState(str, Enum):
    """Lifecycle state of a workout session."""

    IDLE = "idle"
    TRACKING = "tracking"
    PAUSED = "paused"
    STOPPED = "stopped"


class SessionAction(str, Enum):
    """Lifecycle operations that move a session between states."""

    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    STOP = "stop"


class SessionEvent(str, Enum):
    """What an observer notification is about."""

    STARTED = "started"
    TICK = "tick"
    PAUSED = "paused"
    RESUMED = "resumed"
    HEADING = "heading"
    STOPPED = "stopped"


class StatsPeriod(str, Enum):
    """Window used when aggregating workout history."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class SortKey(str, Enum):
    """Ordering for workout history listings."""

    DATE = "date"
    DISTANCE = "distance"
    DURATION = "duration"
    CALORIES = "calories"
