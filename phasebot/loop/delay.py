"""Fixed-cadence delay for periodic control loops."""

import time
from typing import Callable, Optional

from ..logging.config import get_loop_logger
from ..utils.time import Clock, MonotonicClock

logger = get_loop_logger(__name__)


class PreciseDelay:
    """
    Sleeps until the next period boundary.

    Deadlines advance by exactly one period per call, so time spent doing
    work inside the loop is absorbed instead of accumulating.

    Usage::

        with PreciseDelay(0.020) as delay:
            while running():
                tick()
                delay.delay()
    """

    def __init__(
        self,
        period: float,
        clock: Optional[Clock] = None,
        sleep: Callable[[float], None] = time.sleep,
        yield_time: float = 0.0002,
        min_delay: float = 0.0001
    ) -> None:
        """
        Args:
            period: Delay period in seconds
            clock: Time source used to compute the remaining wait
            sleep: Function used to block for a number of seconds
            yield_time: Sleep always taken so other threads get to run
            min_delay: Remaining waits at or below this are skipped
        """
        if period <= 0:
            raise ValueError(f"Delay period must be positive (got {period})")

        self.period = period
        self.clock = clock or MonotonicClock()
        self.sleep = sleep
        self.yield_time = yield_time
        self.min_delay = min_delay
        self._next_deadline = self.clock.now() + period

    @property
    def next_deadline(self) -> float:
        return self._next_deadline

    def delay(self) -> None:
        """Block until the current period ends."""
        self.sleep(self.yield_time)

        remaining = self._next_deadline - self.clock.now()
        if remaining > self.min_delay:
            self.sleep(remaining)
        elif remaining < -self.period:
            logger.warning(
                "Control loop overran its period",
                period_s=self.period,
                behind_s=round(-remaining, 4)
            )

        self._next_deadline += self.period

    def __enter__(self) -> "PreciseDelay":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        return None
