"""Shared fixtures for stridekit tests."""

import pytest

from stridekit.config import Settings, reset_settings
from stridekit.history import HistoryDatabase, WorkoutRepository
from stridekit.models import Coordinate
from stridekit.telemetry import ManualClock, WorkoutSession


@pytest.fixture
def settings():
    """Default settings, isolated from any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def session(clock, settings):
    """Idle session on a manual clock."""
    with WorkoutSession(clock=clock, settings=settings) as s:
        yield s


@pytest.fixture
def origin():
    return Coordinate(latitude=0.0, longitude=0.0)


@pytest.fixture
def repository():
    """Workout repository on a fresh in-memory database."""
    database = HistoryDatabase(":memory:")
    database.initialize_schema()
    yield WorkoutRepository(database.connect())
    database.close()


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop the cached settings singleton around every test."""
    reset_settings()
    yield
    reset_settings()
