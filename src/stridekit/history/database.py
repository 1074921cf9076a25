"""DuckDB database operations for the workout history."""

import logging
from pathlib import Path
from typing import Any

import duckdb  # type: ignore[import-not-found]

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


class HistoryDatabase:
    """
    Manages the DuckDB connection for the workout history.

    Works with a local database file (created on first use, parent directories
    included) or with an in-memory database for tests.
    """

    def __init__(self, database_path: str | Path, read_only: bool = False) -> None:
        """
        Initialize the database manager.

        Args:
            database_path: Path to the DuckDB database file, or ":memory:"
            read_only: If True, open database in read-only mode
        """
        path = str(database_path)
        self.database_path = path if path == IN_MEMORY else str(Path(path).expanduser())
        self.read_only = read_only
        self._connection: duckdb.DuckDBPyConnection | None = None

    @property
    def is_in_memory(self) -> bool:
        return self.database_path == IN_MEMORY

    def connect(self) -> duckdb.DuckDBPyConnection:
        """
        Establish connection to the DuckDB database.

        Returns:
            DuckDB connection object
        """
        if self._connection is None:
            if not self.is_in_memory and not self.read_only:
                Path(self.database_path).parent.mkdir(parents=True, exist_ok=True)

            logger.info(f"Connecting to DuckDB at {self.database_path}")
            self._connection = duckdb.connect(self.database_path, read_only=self.read_only)

        return self._connection

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            logger.info("Closing DuckDB connection")
            self._connection.close()
            self._connection = None

    def __enter__(self) -> duckdb.DuckDBPyConnection:
        """Context manager entry."""
        return self.connect()

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def initialize_schema(self, schema_path: str | Path | None = None) -> None:
        """
        Initialize database schema from SQL file.

        Safe to run on every start: all statements are idempotent.

        Args:
            schema_path: Path to schema.sql file. If None, uses default schema.
        """
        if schema_path is None:
            schema_path = Path(__file__).parent / "schema.sql"
        else:
            schema_path = Path(schema_path)

        if not schema_path.exists():
            raise FileNotFoundError(f"Schema file not found: {schema_path}")

        logger.info(f"Initializing schema from {schema_path}")

        with open(schema_path) as f:
            schema_sql = f.read()

        conn = self.connect()
        conn.execute(schema_sql)
        conn.commit()

        logger.info("Schema initialized successfully")

    def get_schema_version(self) -> int | None:
        """
        Get current schema version.

        Returns:
            Current schema version number, or None if schema_version table doesn't exist
        """
        conn = self.connect()

        try:
            result = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
            return result[0] if result else None
        except duckdb.CatalogException:
            # schema_version table doesn't exist yet
            return None

    def table_exists(self, table_name: str) -> bool:
        """
        Check if a table exists in the database.

        Args:
            table_name: Name of the table to check

        Returns:
            True if table exists, False otherwise
        """
        conn = self.connect()

        result = conn.execute(
            """
            SELECT COUNT(*)
            FROM information_schema.tables
            WHERE table_name = ?
            """,
            [table_name],
        ).fetchone()

        return bool(result and result[0] > 0)
