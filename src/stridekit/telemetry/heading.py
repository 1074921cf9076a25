"""Compass heading from raw magnetometer vectors."""

import logging
import math
from collections import deque

from .clock import Clock, MonotonicClock
from .geomath import circular_mean, normalize_degrees, shortest_angle_diff

logger = logging.getLogger(__name__)

HEADING_THRESHOLD_DEGREES = 5.0
HEADING_THROTTLE_MS = 300


class HeadingTracker:
    """
    Turns magnetometer readings into a stable heading.

    A new heading is only propagated when it differs from the last published
    one by more than ``threshold_degrees``, and at most once per
    ``throttle_ms``. This keeps high-frequency sensor callbacks from
    triggering a redraw on every reading.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        threshold_degrees: float = HEADING_THRESHOLD_DEGREES,
        throttle_ms: int = HEADING_THROTTLE_MS,
        smoothing_window: int = 1,
    ) -> None:
        """
        Initialize the tracker.

        Args:
            clock: Millisecond clock for the throttle window
            threshold_degrees: Minimum change worth propagating
            throttle_ms: Minimum time between two propagated headings
            smoothing_window: Number of readings averaged (1 disables smoothing)
        """
        if smoothing_window < 1:
            raise ValueError("smoothing_window must be at least 1")
        self.clock = clock or MonotonicClock()
        self.threshold_degrees = threshold_degrees
        self.throttle_ms = throttle_ms
        self._readings: deque[float] = deque(maxlen=smoothing_window)
        self._last_published: float | None = None
        self._last_publish_ms: int | None = None

    @property
    def last_heading(self) -> float | None:
        """Last propagated heading, or None if nothing was published yet."""
        return self._last_published

    def reset(self) -> None:
        """Forget published state so the next reading propagates."""
        self._readings.clear()
        self._last_published = None
        self._last_publish_ms = None

    @staticmethod
    def vector_to_heading(x: float, y: float) -> float:
        """Convert the horizontal magnetometer components to a compass heading."""
        raw_angle = normalize_degrees(math.degrees(math.atan2(y, x)))
        return normalize_degrees(360.0 - raw_angle)

    def ingest(self, x: float, y: float, z: float) -> float | None:
        """
        Process one magnetometer reading.

        Args:
            x: Magnetic field along the device x axis
            y: Magnetic field along the device y axis
            z: Magnetic field along the device z axis (unused for heading)

        Returns:
            The new heading in [0, 360) when it should be propagated, else None
        """
        if not (math.isfinite(x) and math.isfinite(y)):
            logger.debug(f"Ignoring non-finite magnetometer reading ({x}, {y}, {z})")
            return None

        self._readings.append(self.vector_to_heading(x, y))
        heading = circular_mean(self._readings)

        now = self.clock.now_ms()
        if self._last_published is not None:
            if abs(shortest_angle_diff(heading, self._last_published)) <= self.threshold_degrees:
                return None
            if self._last_publish_ms is not None and now - self._last_publish_ms < self.throttle_ms:
                logger.debug(f"Heading change to {heading:.1f} throttled")
                return None

        self._last_published = heading
        self._last_publish_ms = now
        return heading
