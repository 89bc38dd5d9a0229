"""
Injectable time sources for tick-driven state machines.

Every timing decision the engine makes derives from a single ``now()`` sample
per tick, so swapping the clock is enough to simulate a run deterministically.
"""

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Monotonic time source measured in seconds."""

    @abstractmethod
    def now(self) -> float:
        """Return the current time in seconds."""
        pass


class MonotonicClock(Clock):
    """Clock backed by :func:`time.monotonic`."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock(Clock):
    """
    Clock that only moves when told to.

    Used by tests and simulations to step a machine through time without
    sleeping.
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        """
        Move the clock forward.

        Args:
            seconds: Non-negative number of seconds to advance

        Returns:
            The new current time
        """
        if seconds < 0:
            raise ValueError(f"Cannot move a monotonic clock backwards (got {seconds})")
        self._now += seconds
        return self._now

    def set(self, value: float) -> None:
        """Jump to an absolute time that is not earlier than the current one."""
        if value < self._now:
            raise ValueError(f"Cannot move a monotonic clock backwards ({value} < {self._now})")
        self._now = float(value)


def elapsed_since(clock: Clock, start: float) -> float:
    """Seconds elapsed on ``clock`` since ``start``."""
    return clock.now() - start
