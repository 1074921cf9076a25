"""Millisecond clocks used for elapsed time and throttle windows."""

import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic millisecond timestamp source."""

    def now_ms(self) -> int: ...


class MonotonicClock:
    """Clock backed by ``time.monotonic_ns``."""

    def now_ms(self) -> int:
        return time.monotonic_ns() // 1_000_000


class ManualClock:
    """
    Clock that only moves when told to.

    Used for deterministic tests and for replaying recorded tracks, where
    time comes from the recording rather than the wall.
    """

    def __init__(self, start_ms: int = 0) -> None:
        self._now_ms = start_ms

    def now_ms(self) -> int:
        return self._now_ms

    def advance(self, delta_ms: int) -> int:
        """Move the clock forward and return the new time."""
        if delta_ms < 0:
            raise ValueError("ManualClock cannot go backwards")
        self._now_ms += delta_ms
        return self._now_ms

    def set(self, now_ms: int) -> None:
        """Jump to an absolute time that is not earlier than the current one."""
        if now_ms < self._now_ms:
            raise ValueError(f"ManualClock cannot go backwards ({now_ms} < {self._now_ms})")
        self._now_ms = now_ms
