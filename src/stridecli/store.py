"""History store access for the stride CLI."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import duckdb  # type: ignore[import-not-found]
import typer

from stridecli.display import display_error
from stridekit.config import get_settings
from stridekit.history import HistoryDatabase, WorkoutRepository

logger = logging.getLogger(__name__)


@contextmanager
def open_repository() -> Iterator[WorkoutRepository]:
    """
    Open the configured workout history.

    The schema is created on first use. Exits the CLI with status 1 when the
    database cannot be opened.
    """
    settings = get_settings()
    database = HistoryDatabase(settings.database_path)
    try:
        database.initialize_schema()
    except (duckdb.Error, OSError) as e:
        logger.error(f"Failed to open history at {settings.database_path}: {e}")
        display_error(f"Cannot open workout history at {settings.database_path}: {e}")
        database.close()
        raise typer.Exit(1) from None

    try:
        yield WorkoutRepository(database.connect())
    finally:
        database.close()
