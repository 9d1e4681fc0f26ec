"""
Staggered Announcements

When one contribution crosses several milestones we do not show them
all at once: the first message goes out immediately, the rest follow
one per interval. The repeating timer is cleared as soon as the queue
is empty so no callback stays registered after the last message.
"""

from collections import deque
from typing import Hashable, Optional, Sequence

from fundtracker.services.notifications.interface import (
    IntervalSchedulerInterface,
    NotifierInterface,
)


class StaggeredAnnouncer:
    """Delivers a queue of messages through a notifier, one per interval."""

    def __init__(
        self,
        notifier: NotifierInterface,
        scheduler: IntervalSchedulerInterface,
        interval_ms: int,
        duration_ms: int,
    ):
        self._notifier = notifier
        self._scheduler = scheduler
        self._interval_ms = interval_ms
        self._duration_ms = duration_ms
        self._queue: deque[str] = deque()
        self._handle: Optional[Hashable] = None

    @property
    def active(self) -> bool:
        return self._handle is not None

    @property
    def queued(self) -> int:
        return len(self._queue)

    def announce(self, messages: Sequence[str]) -> None:
        """Show messages[0] now and schedule the rest. Cancels any earlier queue."""
        self.cancel()
        if not messages:
            return

        self._notifier.notify(messages[0], self._duration_ms)
        self._queue.extend(messages[1:])
        if self._queue:
            self._handle = self._scheduler.set_interval(
                self._deliver_next, self._interval_ms
            )

    def cancel(self) -> None:
        """Drop queued messages and clear the timer."""
        if self._handle is not None:
            self._scheduler.clear_interval(self._handle)
            self._handle = None
        self._queue.clear()

    def _deliver_next(self) -> None:
        if self._queue:
            self._notifier.notify(self._queue.popleft(), self._duration_ms)
        if not self._queue:
            self.cancel()
