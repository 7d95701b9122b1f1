"""Admission gate throttling outbound calls to a fixed quota per window.

This module wires a quota tracker around arbitrary asynchronous work.

Admission strategy:
- Ask the tracker for a permit. Granted work runs immediately, without
  suspending.
- Denied callers sleep until the window boundary the tracker reported and
  then ask again. Waking up does not entitle a caller to a permit: several
  callers may have slept towards the same boundary.
- No queue depth limit and no FIFO ordering. This is a throttle, not a load
  shedder; callers bound their own waiting with ``asyncio.timeout`` or
  ``asyncio.wait_for``.
- Cancellation during the sleep propagates as ``CancelledError``. The one
  decrement the cancelled caller already took is not returned to the pool.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from honest_mark.adapters.rate_limit.base import AbstractQuotaTracker
from honest_mark.adapters.rate_limit.in_memory import InMemoryQuotaTracker
from honest_mark.schemas.time_unit import TimeUnit

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AdmissionGate:
    """Run coroutine factories under a quota tracker.

    Attributes:
        tracker: Quota tracker shared by every call through this gate.
    """

    def __init__(
        self,
        tracker: AbstractQuotaTracker,
        *,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self.tracker = tracker
        self._sleep = sleep

    async def execute(self, task: Callable[[], Awaitable[T]]) -> T:
        """Run ``task`` once a permit is available.

        Args:
            task: Zero-argument callable returning an awaitable. It is invoked
                exactly once, after admission.

        Returns:
            Whatever the task returns. Task exceptions propagate unchanged;
            the gate raises nothing of its own.
        """
        attempts = 0
        while True:
            attempts += 1
            result = self.tracker.try_acquire()
            if result.granted:
                break

            logger.debug(
                "admission.waiting",
                extra={
                    "wait_s": round(result.wait_seconds, 3),
                    "remaining": result.remaining,
                    "attempt": attempts,
                },
            )
            await self._sleep(result.wait_seconds)

        if attempts > 1:
            logger.info(
                "admission.granted_after_wait",
                extra={"attempts": attempts, "remaining": result.remaining},
            )
        return await task()


def build_admission_gate(time_unit: TimeUnit, request_limit: int) -> AdmissionGate:
    """Create a gate admitting ``request_limit`` calls per ``time_unit``.

    Raises:
        ValueError: If request_limit is not positive.
    """
    tracker = InMemoryQuotaTracker(
        capacity=request_limit,
        window_seconds=time_unit.seconds,
    )
    return AdmissionGate(tracker)
