"""Quota tracker interfaces.

The admission gate depends on this abstraction (not the concrete
implementation) so the window state could move to a shared store later
without touching the gate or the client.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AcquireResult:
    """Result of a single permit acquisition attempt.

    Attributes:
        granted: Whether the caller may proceed right now.
        wait_seconds: Time until the current window ends (0.0 when granted).
        capacity: Permits per window.
        remaining: Permits left after this attempt. Negative when several
            callers over-subscribed the same window.
        window_start: Clock reading at which the current window began.
    """

    granted: bool
    wait_seconds: float
    capacity: int
    remaining: int
    window_start: float


class AbstractQuotaTracker(ABC):
    """Interface for quota trackers."""

    @property
    @abstractmethod
    def capacity(self) -> int:
        raise NotImplementedError

    @property
    @abstractmethod
    def window_seconds(self) -> float:
        raise NotImplementedError

    @abstractmethod
    def try_acquire(self) -> AcquireResult:
        """Attempt to take one permit from the current window.

        Refill (when the window has elapsed) and the decrement happen as one
        indivisible step.

        Returns:
            AcquireResult describing whether the permit was granted.
        """
        raise NotImplementedError
