"""
Workout session: the state machine behind a live workout screen.

A session moves idle -> tracking -> paused <-> tracking -> stopped. It owns the
running totals, the route, the elapsed-time clock, a MetricsAccumulator and a
HeadingTracker, and republishes a stats snapshot to its observers whenever
something visible changes. One session records one workout; a new workout gets
a new session.
"""

import logging
from collections.abc import Callable
from types import TracebackType

from ..config import Settings, get_settings
from ..models.enums import ActivityType, SessionAction, SessionEvent, SessionState
from ..models.telemetry import Coordinate, PendingDelta, WorkoutStats
from ..models.workout import WorkoutRecord
from . import calories, geomath
from .accumulator import MetricsAccumulator
from .clock import Clock, MonotonicClock
from .errors import InvalidInput, InvalidTransition, PersistenceFailed, PreconditionNotMet
from .heading import HeadingTracker
from .providers import PersistenceSink, SessionObserver

logger = logging.getLogger(__name__)

TRANSITIONS: dict[tuple[SessionState, SessionAction], SessionState] = {
    (SessionState.IDLE, SessionAction.START): SessionState.TRACKING,
    (SessionState.TRACKING, SessionAction.PAUSE): SessionState.PAUSED,
    (SessionState.PAUSED, SessionAction.RESUME): SessionState.TRACKING,
    (SessionState.TRACKING, SessionAction.STOP): SessionState.STOPPED,
    (SessionState.PAUSED, SessionAction.STOP): SessionState.STOPPED,
}


class WorkoutSession:
    """
    Live workout tracker.

    Lifecycle methods (``start``, ``pause``, ``resume``, ``stop``) raise
    ``InvalidTransition`` when the current state does not allow them and leave
    the session untouched. Sensor inputs (``record_sample``, ``record_step``,
    ``tick``) arriving outside tracking are ignored, since sensor callbacks
    can still be in flight when a workout is paused or stopped.

    All methods are synchronous and must be called from a single thread or
    event loop.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        settings: Settings | None = None,
        sink: PersistenceSink | None = None,
    ) -> None:
        """
        Create an idle session.

        Args:
            clock: Millisecond clock for elapsed time and heading throttling
            settings: Cadence and threshold configuration
            sink: Receives the finished workout on ``stop()``
        """
        settings = settings or get_settings()
        self.clock = clock or MonotonicClock()
        self.sink = sink
        self.default_weight_kg = settings.default_weight_kg

        self._accumulator = MetricsAccumulator(settings.commit_interval_ms)
        self._heading = HeadingTracker(
            clock=self.clock,
            threshold_degrees=settings.heading_threshold_degrees,
            throttle_ms=settings.heading_throttle_ms,
            smoothing_window=settings.heading_smoothing_window,
        )

        self._state = SessionState.IDLE
        self._stats = WorkoutStats()
        self._route: list[Coordinate] = []
        self._last_fix: Coordinate | None = None
        self._start_fix: Coordinate | None = None
        self._activity_type = ActivityType.RUNNING
        self._weight_kg = settings.default_weight_kg
        self._step_baseline: int | None = None
        self._clock_origin_ms = 0
        self._frozen_elapsed_ms = 0
        self._observers: list[SessionObserver] = []
        self._record: WorkoutRecord | None = None
        self._active = True

    def __enter__(self) -> "WorkoutSession":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        """False once the session has been closed."""
        return self._active

    @property
    def activity_type(self) -> ActivityType:
        return self._activity_type

    @property
    def weight_kg(self) -> float:
        """Body weight used for calories (after falling back to the default)."""
        return self._weight_kg

    @property
    def start_fix(self) -> Coordinate | None:
        """Location fix the workout was started from."""
        return self._start_fix

    @property
    def route(self) -> tuple[Coordinate, ...]:
        return tuple(self._route)

    @property
    def record(self) -> WorkoutRecord | None:
        """The finished workout once stopped, even if the sink failed to save it."""
        return self._record

    @property
    def commit_interval_ms(self) -> int:
        return self._accumulator.commit_interval_ms

    @property
    def elapsed_millis(self) -> int:
        """Tracked time so far; runs while tracking, frozen otherwise."""
        if self._state == SessionState.TRACKING:
            return max(0, self.clock.now_ms() - self._clock_origin_ms)
        return self._frozen_elapsed_ms

    @property
    def stats(self) -> WorkoutStats:
        """Copy of the current totals with an up-to-date elapsed time."""
        return self._stats.model_copy(update={"elapsed_millis": self.elapsed_millis})

    @property
    def pace_min_per_km(self) -> float | None:
        """Average pace, or None while no distance has been committed."""
        return self.stats.pace_min_per_km

    def is_commit_due(self) -> bool:
        """Whether a host driving the cadence by polling should call ``tick()`` now."""
        return self._state == SessionState.TRACKING and self._accumulator.is_commit_due(
            self.clock.now_ms()
        )

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, observer: SessionObserver) -> Callable[[], None]:
        """
        Register an observer for stats snapshots.

        Returns:
            A function that removes the observer again
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self, event: SessionEvent) -> WorkoutStats:
        snapshot = self.stats
        for observer in list(self._observers):
            try:
                observer(event, snapshot.model_copy())
            except Exception:
                logger.exception(f"Session observer failed while handling '{event.value}'")
        return snapshot

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _next_state(self, action: SessionAction) -> SessionState:
        if not self._active:
            raise PreconditionNotMet(f"Cannot {action.value} a workout session that was closed")
        try:
            return TRANSITIONS[(self._state, action)]
        except KeyError:
            raise InvalidTransition(self._state, action) from None

    def start(
        self,
        activity_type: ActivityType | str,
        weight_kg: float | None,
        current_fix: Coordinate | None,
        step_baseline: int | None = None,
    ) -> None:
        """
        Begin tracking.

        Args:
            activity_type: Running, Walking, Cycling or Other
            weight_kg: Body weight for calories; unusable values fall back to
                the configured default
            current_fix: The device's current position; required
            step_baseline: Cumulative step count at start. When omitted the
                first step reading becomes the baseline.

        Raises:
            InvalidTransition: If the session is not idle
            PreconditionNotMet: If there is no current location fix
        """
        target = self._next_state(SessionAction.START)
        if current_fix is None:
            raise PreconditionNotMet("A current location fix is required to start a workout")

        self._activity_type = ActivityType(activity_type)
        self._weight_kg = self._usable_weight(weight_kg)
        self._stats = WorkoutStats()
        self._route = []
        self._last_fix = None
        self._start_fix = current_fix
        self._step_baseline = step_baseline
        self._accumulator.reset()
        self._heading.reset()

        now = self.clock.now_ms()
        self._clock_origin_ms = now
        self._frozen_elapsed_ms = 0
        self._accumulator.mark_committed(now)
        self._state = target

        logger.info(
            f"Started {self._activity_type.value} workout "
            f"(weight={self._weight_kg} kg, commit every {self.commit_interval_ms} ms)"
        )
        self._notify(SessionEvent.STARTED)

    def pause(self) -> None:
        """
        Pause tracking: flush pending deltas and freeze the clock.

        Raises:
            InvalidTransition: If the session is not tracking
        """
        target = self._next_state(SessionAction.PAUSE)
        self._flush()
        self._frozen_elapsed_ms = self.elapsed_millis
        self._stats.elapsed_millis = self._frozen_elapsed_ms
        self._state = target

        logger.info(f"Paused workout at {self._frozen_elapsed_ms} ms")
        self._notify(SessionEvent.PAUSED)

    def resume(self) -> None:
        """
        Resume tracking; elapsed time continues from where it was paused.

        The heading tracker starts over, so the first reading after resuming
        always publishes.

        Raises:
            InvalidTransition: If the session is not paused
        """
        target = self._next_state(SessionAction.RESUME)
        now = self.clock.now_ms()
        self._clock_origin_ms = now - self._frozen_elapsed_ms
        self._accumulator.mark_committed(now)
        self._heading.reset()
        self._state = target

        logger.info(f"Resumed workout at {self._frozen_elapsed_ms} ms")
        self._notify(SessionEvent.RESUMED)

    def stop(self) -> WorkoutRecord:
        """
        Finish the workout.

        Flushes pending deltas, stops the clock and hands the finished record
        to the persistence sink, if there is one.

        Returns:
            The finished workout

        Raises:
            InvalidTransition: If the session is idle or already stopped
            PersistenceFailed: If the sink raised; the session is stopped and
                the error carries the finished record
        """
        target = self._next_state(SessionAction.STOP)
        self._flush()
        if self._state == SessionState.TRACKING:
            self._frozen_elapsed_ms = self.elapsed_millis
        self._stats.elapsed_millis = self._frozen_elapsed_ms
        self._state = target

        record = WorkoutRecord(
            activity_type=self._activity_type,
            duration_millis=self._stats.elapsed_millis,
            distance_km=self._stats.distance_km,
            calories_kcal=self._stats.calories_kcal,
            step_count=self._stats.step_count,
            elevation_gain_m=self._stats.elevation_gain_m,
            route=tuple(self._route),
        )
        self._record = record
        logger.info(
            f"Stopped {record.activity_type.value} workout: {record.distance_km:.3f} km "
            f"in {record.duration_millis} ms, {len(record.route)} fixes"
        )
        self._notify(SessionEvent.STOPPED)

        if self.sink is not None:
            try:
                self.sink.save(record)
            except Exception as e:
                logger.error(f"Failed to save finished workout: {e}")
                raise PersistenceFailed(record, e) from e

        return record

    def close(self) -> None:
        """
        Tear the session down.

        Observers are dropped and any later sensor input or tick is ignored,
        so callbacks still in flight cannot mutate a discarded session.
        """
        if not self._active:
            return
        self._active = False
        self._observers.clear()
        logger.info(f"Closed workout session ({self._state.value})")

    # ------------------------------------------------------------------
    # Sensor input and cadence
    # ------------------------------------------------------------------

    def record_sample(self, coordinate: Coordinate) -> None:
        """Append a location fix to the route and buffer its distance and climb."""
        if not self._accepts_input("location fix"):
            return

        self._route.append(coordinate)
        if self._last_fix is not None:
            self._accumulator.add_sample(
                geomath.distance_km(self._last_fix, coordinate),
                geomath.elevation_delta(self._last_fix, coordinate),
            )
        self._last_fix = coordinate

    def record_step(self, cumulative_step_count: int) -> None:
        """
        Update the step count from a cumulative pedometer reading.

        The count never decreases, even if the pedometer glitches downward.
        """
        if not self._accepts_input("step count"):
            return

        if self._step_baseline is None:
            self._step_baseline = cumulative_step_count
        steps = cumulative_step_count - self._step_baseline
        if steps > self._stats.step_count:
            self._stats.step_count = steps

    def record_heading(self, x: float, y: float, z: float) -> float | None:
        """
        Feed a magnetometer reading to the heading tracker.

        Headings are tracked in every state but stopped. Observers are
        notified only when the tracker propagates a change.

        Returns:
            The new heading if it was propagated, else None
        """
        if not self._active or self._state == SessionState.STOPPED:
            return None

        heading = self._heading.ingest(x, y, z)
        if heading is not None:
            self._stats.heading_degrees = heading
            self._notify(SessionEvent.HEADING)
        return heading

    def tick(self) -> WorkoutStats | None:
        """
        Commit buffered deltas into the totals and publish a snapshot.

        Called once per commit interval by the host. Does nothing outside
        tracking.

        Returns:
            The published snapshot, or None if the tick was ignored
        """
        if not self._accepts_input("tick"):
            return None

        self._flush()
        now = self.clock.now_ms()
        self._accumulator.mark_committed(now)
        self._stats.elapsed_millis = max(0, now - self._clock_origin_ms)
        return self._notify(SessionEvent.TICK)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _accepts_input(self, kind: str) -> bool:
        if not self._active:
            logger.debug(f"Ignoring {kind} for a closed session")
            return False
        if self._state != SessionState.TRACKING:
            logger.debug(f"Ignoring {kind} while {self._state.value}")
            return False
        return True

    def _flush(self) -> None:
        self._fold(self._accumulator.commit())

    def _fold(self, delta: PendingDelta) -> None:
        if delta.is_empty:
            return
        self._stats.distance_km += delta.distance_km
        self._stats.elevation_gain_m += delta.elevation_m
        self._stats.calories_kcal = calories.estimate(
            self._activity_type, self._stats.distance_km, self._weight_kg
        )

    def _usable_weight(self, weight_kg: float | None) -> float:
        if weight_kg is None:
            return self.default_weight_kg
        try:
            weight = float(weight_kg)
            calories.calories_per_km(self._activity_type, weight)
        except (TypeError, ValueError, InvalidInput) as e:
            logger.warning(f"Unusable body weight {weight_kg!r} ({e}), using {self.default_weight_kg} kg")
            return self.default_weight_kg
        return weight
