"""Time source and deadlines for bounded operations.

Every polling loop goes through a ``Clock`` so tests can substitute a virtual
one whose ``sleep`` advances time instantly.
"""

from __future__ import annotations

import time
from dataclasses import dataclass


class Clock:
    """Monotonic wall clock with a blocking sleep."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        if seconds <= 0:
            return
        time.sleep(seconds)

    def deadline(self, timeout: float) -> Deadline:
        """Start a deadline ``timeout`` seconds from now."""
        return Deadline(expires_at=self.now() + timeout, clock=self)


@dataclass(frozen=True)
class Deadline:
    """Absolute expiry point computed once at the start of an operation.

    Attributes:
        expires_at: Clock time at which the deadline passes
        clock: Clock the deadline is measured against
    """

    expires_at: float
    clock: Clock

    def expired(self) -> bool:
        return self.clock.now() >= self.expires_at

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self.clock.now())
