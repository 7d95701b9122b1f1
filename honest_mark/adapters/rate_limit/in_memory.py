"""In-memory fixed-window quota tracker.

Notes:
- Per-process only: two processes sharing one token each get the full quota.
- Thread-safe: refill and decrement run under a single lock, so the tracker
  can be shared by tasks on several event loops.
- Optimistic decrement, no refund: a denied attempt still consumes its
  decrement. A burst of K over-quota callers all wait for the same boundary
  and then compete again for a fresh pool of ``capacity`` permits.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

from honest_mark.adapters.rate_limit.base import AbstractQuotaTracker, AcquireResult

logger = logging.getLogger(__name__)


@dataclass
class _QuotaWindow:
    window_start: float
    remaining: int


class InMemoryQuotaTracker(AbstractQuotaTracker):
    """Quota tracker holding one fixed window for the whole client.

    The window is anchored at the first call after the previous window has
    elapsed (not aligned to wall-clock multiples), matching "at most N
    requests per time unit" counted from the first request of a burst.
    """

    def __init__(
        self,
        *,
        capacity: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the tracker with a full window.

        Args:
            capacity: Maximum number of permits per window.
            window_seconds: Window length in seconds.
            clock: Monotonic time source returning seconds.

        Raises:
            ValueError: If capacity or window_seconds are not positive.
        """
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        self._capacity = capacity
        self._window_seconds = float(window_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._state = _QuotaWindow(window_start=clock(), remaining=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    @property
    def remaining(self) -> int:
        with self._lock:
            return self._state.remaining

    def _refill_if_elapsed(self, now: float) -> None:
        # Caller holds the lock.
        if now - self._state.window_start >= self._window_seconds:
            self._state.window_start = now
            self._state.remaining = self._capacity
            logger.debug(
                "quota.refilled",
                extra={"capacity": self._capacity, "window_s": self._window_seconds},
            )

    def try_acquire(self) -> AcquireResult:
        """Refill if the window elapsed, then take one permit.

        Returns:
            AcquireResult; when not granted, ``wait_seconds`` is the time left
            until the shared window boundary.
        """
        now = self._clock()

        with self._lock:
            self._refill_if_elapsed(now)

            before = self._state.remaining
            self._state.remaining = before - 1
            window_start = self._state.window_start
            remaining = self._state.remaining

        if before > 0:
            return AcquireResult(
                granted=True,
                wait_seconds=0.0,
                capacity=self._capacity,
                remaining=remaining,
                window_start=window_start,
            )

        wait = max(0.0, self._window_seconds - (now - window_start))
        return AcquireResult(
            granted=False,
            wait_seconds=wait,
            capacity=self._capacity,
            remaining=remaining,
            window_start=window_start,
        )
