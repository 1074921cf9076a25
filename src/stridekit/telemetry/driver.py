"""
asyncio host for a WorkoutSession.

The driver owns everything with a lifetime outside the session's pure state:
the commit cadence task and the sensor subscriptions. Closing the driver
cancels the task, removes every subscription and closes the session.
"""

import asyncio
import logging

from ..models.enums import ActivityType, SessionState
from ..models.telemetry import Coordinate
from ..models.workout import WorkoutRecord
from .providers import LocationProvider, OrientationProvider, StepProvider, Subscription
from .session import WorkoutSession

logger = logging.getLogger(__name__)


class SessionDriver:
    """
    Runs a session's commit cadence and wires sensor callbacks into it.

    The orientation subscription is opened with the driver, so the compass
    works before a workout starts. Location and step subscriptions exist only
    while tracking, and the commit task only runs while tracking.
    """

    def __init__(
        self,
        session: WorkoutSession,
        location: LocationProvider | None = None,
        orientation: OrientationProvider | None = None,
        steps: StepProvider | None = None,
    ) -> None:
        self.session = session
        self.location = location
        self.orientation = orientation
        self.steps = steps
        self._orientation_sub: Subscription | None = None
        self._tracking_subs: list[Subscription] = []
        self._commit_task: asyncio.Task | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> "SessionDriver":
        self.open()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    def open(self) -> None:
        """Subscribe to the orientation provider."""
        if self.orientation is not None and self._orientation_sub is None:
            self._orientation_sub = self.orientation.watch(self._on_orientation)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(
        self,
        activity_type: ActivityType | str,
        weight_kg: float | None,
        current_fix: Coordinate | None,
        step_baseline: int | None = None,
    ) -> None:
        """Start the session, then begin the cadence and sensor subscriptions."""
        self._ensure_open()
        self.session.start(activity_type, weight_kg, current_fix, step_baseline)
        self._subscribe_tracking()
        self._start_cadence()

    async def pause(self) -> None:
        self._ensure_open()
        self.session.pause()
        await self._stop_cadence()
        self._unsubscribe_tracking()

    async def resume(self) -> None:
        self._ensure_open()
        self.session.resume()
        self._subscribe_tracking()
        self._start_cadence()

    async def stop(self) -> WorkoutRecord:
        self._ensure_open()
        try:
            return self.session.stop()
        finally:
            await self._stop_cadence()
            self._unsubscribe_tracking()

    async def aclose(self) -> None:
        """Cancel the cadence, release every subscription and close the session."""
        if self._closed:
            return
        self._closed = True
        await self._stop_cadence()
        self._unsubscribe_tracking()
        if self._orientation_sub is not None:
            self._orientation_sub.remove()
            self._orientation_sub = None
        self.session.close()
        logger.info("Session driver closed")

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("SessionDriver has been closed")

    # ------------------------------------------------------------------
    # Commit cadence
    # ------------------------------------------------------------------

    def _start_cadence(self) -> None:
        if self._commit_task is None or self._commit_task.done():
            self._commit_task = asyncio.get_running_loop().create_task(self._run_cadence())

    async def _stop_cadence(self) -> None:
        task, self._commit_task = self._commit_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run_cadence(self) -> None:
        interval = self.session.commit_interval_ms / 1000
        while True:
            await asyncio.sleep(interval)
            if self._closed or not self.session.is_active:
                return
            if self.session.state == SessionState.TRACKING:
                self.session.tick()

    # ------------------------------------------------------------------
    # Sensor callbacks
    # ------------------------------------------------------------------

    def _subscribe_tracking(self) -> None:
        if self._tracking_subs:
            return
        if self.location is not None:
            self._tracking_subs.append(self.location.watch(self._on_fix))
        if self.steps is not None:
            self._tracking_subs.append(self.steps.watch(self._on_steps))

    def _unsubscribe_tracking(self) -> None:
        while self._tracking_subs:
            self._tracking_subs.pop().remove()

    def _on_fix(self, coordinate: Coordinate) -> None:
        if not self._closed:
            self.session.record_sample(coordinate)

    def _on_steps(self, cumulative_steps: int) -> None:
        if not self._closed:
            self.session.record_step(cumulative_steps)

    def _on_orientation(self, x: float, y: float, z: float) -> None:
        if not self._closed:
            self.session.record_heading(x, y, z)
