"""Operation Context — deadline threaded from the request edge to every storage call.

Invariants:
    - Immutable once created; one per request
    - deadline is on the time.monotonic() clock (same clock as the asyncio loop)
    - deadline None means unbounded

Design Decisions:
    - Only storage implementations honor the deadline; service and entity just pass it on
    - Task cancellation needs no token: asyncio propagates CancelledError through awaits
"""

import time
from dataclasses import dataclass


@dataclass(frozen=True)
class OperationContext:
    deadline: float | None = None

    @classmethod
    def with_timeout(cls, seconds: float | None) -> "OperationContext":
        """Context expiring `seconds` from now. None or <= 0 means no deadline."""
        if seconds is None or seconds <= 0:
            return cls()
        return cls(deadline=time.monotonic() + seconds)

    @classmethod
    def background(cls) -> "OperationContext":
        return cls()

    def remaining(self) -> float | None:
        """Seconds left before the deadline (never negative), or None if unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline
