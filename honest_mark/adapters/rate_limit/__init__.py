"""Quota tracking adapters.

This package provides a small abstraction layer so the client can start with
an in-memory window and later move to a shared store without changing the
admission gate.
"""

from honest_mark.adapters.rate_limit.base import AbstractQuotaTracker, AcquireResult
from honest_mark.adapters.rate_limit.in_memory import InMemoryQuotaTracker

__all__ = [
    "AbstractQuotaTracker",
    "AcquireResult",
    "InMemoryQuotaTracker",
]
