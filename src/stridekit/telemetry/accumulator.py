"""Buffering of per-fix measurements between commits to the session totals."""

import logging
import math

from ..models.telemetry import PendingDelta

logger = logging.getLogger(__name__)

COMMIT_INTERVAL_MS = 2000


class MetricsAccumulator:
    """
    Holds distance and climb measured since the last commit.

    Location fixes can arrive at 1 Hz or faster with jitter. Each fix adds to
    the pending delta; the session folds the delta into its totals once per
    commit interval. Nothing is dropped, only delayed by up to one interval.
    """

    def __init__(self, commit_interval_ms: int = COMMIT_INTERVAL_MS) -> None:
        """
        Initialize an empty accumulator.

        Args:
            commit_interval_ms: Cadence at which the host should commit
        """
        if commit_interval_ms <= 0:
            raise ValueError("commit_interval_ms must be positive")
        self.commit_interval_ms = commit_interval_ms
        self._distance_km = 0.0
        self._elevation_m = 0.0
        self._samples_pending = 0
        self._last_commit_ms: int | None = None

    @property
    def samples_pending(self) -> int:
        """Number of samples added since the last commit."""
        return self._samples_pending

    def add_sample(self, distance_delta_km: float, elevation_delta_m: float) -> None:
        """
        Add one fix's deltas to the pending totals.

        Negative or non-finite values are clamped to zero.
        """
        self._distance_km += _clamp(distance_delta_km, "distance")
        self._elevation_m += _clamp(elevation_delta_m, "elevation")
        self._samples_pending += 1

    def commit(self) -> PendingDelta:
        """
        Take everything buffered since the last commit.

        Returns:
            The pending delta; the accumulator is empty afterwards
        """
        delta = PendingDelta(distance_km=self._distance_km, elevation_m=self._elevation_m)
        if self._samples_pending:
            logger.debug(
                f"Committing {self._samples_pending} sample(s): "
                f"{delta.distance_km:.4f} km, {delta.elevation_m:.1f} m"
            )
        self._distance_km = 0.0
        self._elevation_m = 0.0
        self._samples_pending = 0
        return delta

    def reset(self) -> None:
        """Drop pending deltas and forget the commit schedule."""
        self._distance_km = 0.0
        self._elevation_m = 0.0
        self._samples_pending = 0
        self._last_commit_ms = None

    def mark_committed(self, now_ms: int) -> None:
        """Record the time of a commit (or of the start of a cadence window)."""
        self._last_commit_ms = now_ms

    def is_commit_due(self, now_ms: int) -> bool:
        """Whether a full commit interval has passed since the last commit."""
        if self._last_commit_ms is None:
            return False
        return now_ms - self._last_commit_ms >= self.commit_interval_ms


def _clamp(value: float, label: str) -> float:
    if not math.isfinite(value) or value < 0:
        logger.warning(f"Ignoring invalid {label} delta: {value}")
        return 0.0
    return value
