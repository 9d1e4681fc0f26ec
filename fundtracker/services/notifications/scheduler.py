"""
Cooperative Interval Scheduler

There is no background thread here. The host loop calls `advance()`
(the confetti frame loop does it every frame) and any interval whose
deadline has passed fires on that call, in handle order.
"""

import itertools
import time
from dataclasses import dataclass
from typing import Callable, Optional

from fundtracker.services.notifications.interface import IntervalSchedulerInterface


@dataclass
class _Interval:
    callback: Callable[[], None]
    interval_ms: float
    next_due_ms: float


class CooperativeIntervalScheduler(IntervalSchedulerInterface):
    """Interval timers advanced explicitly by the host."""

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """
        Args:
            clock: Returns the current time in ms. Defaults to a
                   monotonic clock.
        """
        self._clock = clock or (lambda: time.monotonic() * 1000.0)
        self._timers: dict[int, _Interval] = {}
        self._handles = itertools.count(1)

    @property
    def pending(self) -> int:
        """Number of intervals still registered."""
        return len(self._timers)

    def set_interval(self, callback: Callable[[], None], interval_ms: int) -> int:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        handle = next(self._handles)
        self._timers[handle] = _Interval(
            callback=callback,
            interval_ms=float(interval_ms),
            next_due_ms=self._clock() + interval_ms,
        )
        return handle

    def clear_interval(self, handle: int) -> None:
        self._timers.pop(handle, None)

    def next_due_ms(self) -> Optional[float]:
        """Earliest pending deadline, or None when nothing is scheduled."""
        if not self._timers:
            return None
        return min(t.next_due_ms for t in self._timers.values())

    def advance(self, now_ms: Optional[float] = None) -> int:
        """
        Fire every interval that is due at `now_ms`.

        An interval that fell behind fires once per missed period.
        Callbacks may clear their own or other intervals.

        Returns:
            Number of callbacks fired
        """
        now = self._clock() if now_ms is None else now_ms
        fired = 0
        for handle in sorted(self._timers):
            timer = self._timers.get(handle)
            while timer is not None and timer.next_due_ms <= now:
                timer.next_due_ms += timer.interval_ms
                timer.callback()
                fired += 1
                timer = self._timers.get(handle)
        return fired
