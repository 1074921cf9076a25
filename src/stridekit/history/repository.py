"""Repository pattern for workout history operations."""

import json
import logging
from datetime import UTC, date, datetime, timedelta
from typing import Any
from uuid import uuid4

import duckdb  # type: ignore[import-not-found]

from ..models import (
    ActivityType,
    ActivityTypeStats,
    Coordinate,
    FitnessStats,
    MonthlySummary,
    PersonalBest,
    PersonalBests,
    SortKey,
    StatsPeriod,
    StoredWorkout,
    WorkoutRecord,
)

logger = logging.getLogger(__name__)

# Sort keys map to fixed column names, never to user input
SORT_COLUMNS: dict[SortKey, str] = {
    SortKey.DATE: "recorded_at",
    SortKey.DISTANCE: "distance_km",
    SortKey.DURATION: "duration_millis",
    SortKey.CALORIES: "calories_kcal",
}

PERSONAL_BEST_COLUMNS: dict[str, str] = {
    "longest_distance": "distance_km",
    "longest_duration": "duration_millis",
    "most_steps": "step_count",
    "most_calories": "calories_kcal",
}


def period_start(period: StatsPeriod, today: date | None = None) -> date | None:
    """
    First day included in a stats period.

    Weeks start on Monday; months and years are calendar months and years.
    Returns None for all-time.
    """
    today = today or datetime.now(UTC).date()
    if period == StatsPeriod.WEEK:
        return today - timedelta(days=today.weekday())
    if period == StatsPeriod.MONTH:
        return today.replace(day=1)
    if period == StatsPeriod.YEAR:
        return today.replace(month=1, day=1)
    return None


def _to_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def _route_to_json(route: tuple[Coordinate, ...]) -> str:
    return json.dumps([c.model_dump(exclude_none=True) for c in route])


class WorkoutRepository:
    """
    Repository for workout history CRUD and aggregate queries.

    Also acts as the persistence sink of a WorkoutSession: ``save`` accepts
    the finished record and assigns it an id and timestamp.
    """

    def __init__(self, connection: duckdb.DuckDBPyConnection) -> None:
        """
        Initialize repository with a DuckDB connection.

        Args:
            connection: Active DuckDB connection with the schema initialized
        """
        self.connection = connection

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, record: WorkoutRecord, recorded_at: datetime | None = None) -> StoredWorkout:
        """
        Store a finished workout.

        Args:
            record: Workout handed over by a stopped session
            recorded_at: Save time; defaults to now (UTC)

        Returns:
            The stored workout with its new id
        """
        workout = StoredWorkout.from_record(
            record,
            workout_id=str(uuid4()),
            recorded_at=recorded_at or datetime.now(UTC),
        )
        self.insert_workout(workout)
        return workout

    def insert_workout(self, workout: StoredWorkout) -> None:
        """
        Insert a new workout into the database.

        Args:
            workout: Workout to insert

        Raises:
            duckdb.ConstraintException: If workout_id already exists
        """
        logger.info(f"Inserting workout {workout.workout_id}")

        recorded_at = _to_utc_naive(workout.recorded_at)
        try:
            self.connection.execute(
                """
                INSERT INTO workouts (
                    workout_id, recorded_at, recorded_date, activity_type,
                    duration_millis, distance_km, calories_kcal,
                    step_count, elevation_gain_m,
                    pace_min_per_km, average_speed_kph,
                    route_json
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    workout.workout_id,
                    recorded_at,
                    recorded_at.date(),
                    workout.activity_type.value,
                    workout.duration_millis,
                    workout.distance_km,
                    workout.calories_kcal,
                    workout.step_count,
                    workout.elevation_gain_m,
                    workout.pace_min_per_km,
                    workout.average_speed_kph,
                    _route_to_json(workout.route),
                ],
            )
        except duckdb.Error as e:
            logger.error(f"Failed to insert workout {workout.workout_id}: {e}")
            raise

        self.connection.commit()
        logger.info(f"Successfully inserted workout {workout.workout_id}")

    def update_workout(self, workout: StoredWorkout) -> None:
        """
        Update an existing workout.

        Args:
            workout: Workout with updated data
        """
        logger.info(f"Updating workout {workout.workout_id}")

        recorded_at = _to_utc_naive(workout.recorded_at)
        self.connection.execute(
            """
            UPDATE workouts SET
                recorded_at = ?, recorded_date = ?, activity_type = ?,
                duration_millis = ?, distance_km = ?, calories_kcal = ?,
                step_count = ?, elevation_gain_m = ?,
                pace_min_per_km = ?, average_speed_kph = ?,
                route_json = ?,
                updated_at = CURRENT_TIMESTAMP
            WHERE workout_id = ?
            """,
            [
                recorded_at,
                recorded_at.date(),
                workout.activity_type.value,
                workout.duration_millis,
                workout.distance_km,
                workout.calories_kcal,
                workout.step_count,
                workout.elevation_gain_m,
                workout.pace_min_per_km,
                workout.average_speed_kph,
                _route_to_json(workout.route),
                workout.workout_id,
            ],
        )

        self.connection.commit()
        logger.info(f"Successfully updated workout {workout.workout_id}")

    def upsert_workout(self, workout: StoredWorkout) -> None:
        """
        Insert or update a workout (upsert operation).

        Args:
            workout: Workout to insert or update
        """
        if self.get_workout(workout.workout_id) is None:
            self.insert_workout(workout)
        else:
            logger.info(f"Workout {workout.workout_id} already exists, updating")
            self.update_workout(workout)

    def delete_workout(self, workout_id: str) -> bool:
        """
        Delete a workout.

        Returns:
            True if a workout was deleted, False if it did not exist
        """
        if self.get_workout(workout_id) is None:
            logger.info(f"Workout {workout_id} not found, nothing to delete")
            return False

        self.connection.execute("DELETE FROM workouts WHERE workout_id = ?", [workout_id])
        self.connection.commit()
        logger.info(f"Deleted workout {workout_id}")
        return True

    def clear(self) -> int:
        """
        Delete every workout.

        Returns:
            Number of workouts deleted
        """
        count = self.count()
        self.connection.execute("DELETE FROM workouts")
        self.connection.commit()
        logger.info(f"Cleared {count} workout(s)")
        return count

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _fetch_workouts(self, query: str, parameters: list[Any] | None = None) -> list[StoredWorkout]:
        results = self.connection.execute(query, parameters or []).fetchall()
        columns = [desc[0] for desc in self.connection.description]
        return [self._row_to_workout(dict(zip(columns, row, strict=True))) for row in results]

    @staticmethod
    def _row_to_workout(row: dict[str, Any]) -> StoredWorkout:
        return StoredWorkout(
            workout_id=row["workout_id"],
            recorded_at=row["recorded_at"].replace(tzinfo=UTC),
            activity_type=row["activity_type"],
            duration_millis=row["duration_millis"],
            distance_km=row["distance_km"],
            calories_kcal=row["calories_kcal"],
            step_count=row["step_count"],
            elevation_gain_m=row["elevation_gain_m"],
            route=json.loads(row["route_json"]),
        )

    def get_workout(self, workout_id: str) -> StoredWorkout | None:
        """
        Retrieve a workout by its id.

        Returns:
            The workout, or None if not found
        """
        workouts = self._fetch_workouts("SELECT * FROM workouts WHERE workout_id = ?", [workout_id])
        return workouts[0] if workouts else None

    def count(self) -> int:
        """Total number of stored workouts."""
        result = self.connection.execute("SELECT COUNT(*) FROM workouts").fetchone()
        return result[0] if result else 0

    def list_workouts(
        self,
        activity_type: ActivityType | None = None,
        sort_by: SortKey = SortKey.DATE,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[StoredWorkout]:
        """
        List workouts, largest first by the chosen sort key.

        Args:
            activity_type: Only include this type of workout
            sort_by: date, distance, duration or calories
            limit: Maximum number of workouts
            offset: Number of workouts to skip (pagination)
        """
        query = "SELECT * FROM workouts"
        parameters: list[Any] = []
        if activity_type is not None:
            query += " WHERE activity_type = ?"
            parameters.append(ActivityType(activity_type).value)

        query += f" ORDER BY {SORT_COLUMNS[SortKey(sort_by)]} DESC, recorded_at DESC"
        if limit is not None:
            query += " LIMIT ? OFFSET ?"
            parameters.extend([limit, offset])

        return self._fetch_workouts(query, parameters)

    def get_recent(self, limit: int = 5) -> list[StoredWorkout]:
        """Most recent workouts first."""
        return self.list_workouts(limit=limit)

    def get_workouts_on(self, day: date) -> list[StoredWorkout]:
        """Workouts recorded on one (UTC) calendar day, latest first."""
        return self._fetch_workouts(
            """
            SELECT * FROM workouts
            WHERE recorded_date = ?
            ORDER BY recorded_at DESC
            """,
            [day],
        )

    def get_active_days(self, year: int, month: int) -> list[date]:
        """Days of a month with at least one workout, in order."""
        first = date(year, month, 1)
        next_month = date(year + month // 12, month % 12 + 1, 1)
        results = self.connection.execute(
            """
            SELECT DISTINCT recorded_date FROM workouts
            WHERE recorded_date >= ? AND recorded_date < ?
            ORDER BY recorded_date
            """,
            [first, next_month],
        ).fetchall()
        return [row[0] for row in results]

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def get_stats(self, period: StatsPeriod = StatsPeriod.ALL, today: date | None = None) -> FitnessStats:
        """
        Totals over a period, overall and per activity type.

        Args:
            period: week, month, year or all
            today: Reference day for the period (defaults to today, UTC)
        """
        query = """
            SELECT
                activity_type,
                COUNT(*) AS workout_count,
                SUM(distance_km) AS distance_km,
                SUM(calories_kcal) AS calories_kcal,
                SUM(duration_millis) AS duration_millis,
                SUM(step_count) AS step_count
            FROM workouts
        """
        parameters: list[Any] = []
        since = period_start(StatsPeriod(period), today)
        if since is not None:
            query += " WHERE recorded_date >= ?"
            parameters.append(since)
        query += " GROUP BY activity_type ORDER BY activity_type"

        stats = FitnessStats()
        for activity_type, count, distance, kcal, duration, steps in self.connection.execute(
            query, parameters
        ).fetchall():
            stats.by_type[ActivityType(activity_type)] = ActivityTypeStats(
                count=count,
                distance_km=distance or 0.0,
                calories_kcal=kcal or 0.0,
                duration_millis=int(duration or 0),
            )
            stats.total_workouts += count
            stats.total_distance_km += distance or 0.0
            stats.total_calories_kcal += kcal or 0.0
            stats.total_duration_millis += int(duration or 0)
            stats.total_steps += int(steps or 0)

        return stats

    def get_personal_bests(self) -> PersonalBests:
        """Longest distance, longest duration, most steps and most calories."""
        bests: dict[str, PersonalBest] = {}
        for name, column in PERSONAL_BEST_COLUMNS.items():
            result = self.connection.execute(
                f"""
                SELECT workout_id, recorded_at, {column}
                FROM workouts
                ORDER BY {column} DESC, recorded_at ASC
                LIMIT 1
                """
            ).fetchone()
            if result is not None:
                workout_id, recorded_at, value = result
                bests[name] = PersonalBest(
                    value=value,
                    workout_id=workout_id,
                    recorded_at=recorded_at.replace(tzinfo=UTC),
                )
        return PersonalBests(**bests)

    def get_monthly_stats(self, limit: int = 12) -> list[MonthlySummary]:
        """Per-month totals, most recent month first."""
        results = self.connection.execute(
            """
            SELECT
                date_trunc('month', recorded_date) AS month,
                COUNT(*) AS workout_count,
                SUM(distance_km) AS distance_km,
                SUM(duration_millis) AS duration_millis,
                SUM(calories_kcal) AS calories_kcal
            FROM workouts
            GROUP BY month
            ORDER BY month DESC
            LIMIT ?
            """,
            [limit],
        ).fetchall()

        summaries = []
        for month, count, distance, duration, kcal in results:
            # date_trunc yields a TIMESTAMP on some DuckDB versions
            if isinstance(month, datetime):
                month = month.date()
            summaries.append(
                MonthlySummary(
                    month=month,
                    workout_count=count,
                    total_distance_km=distance or 0.0,
                    total_duration_millis=int(duration or 0),
                    total_calories_kcal=kcal or 0.0,
                )
            )
        return summaries
