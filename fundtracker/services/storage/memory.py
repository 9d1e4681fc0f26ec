"""
In-Memory Storage

Used when no file storage is configured and for the UI's activity
panel. Nothing survives a restart.
"""

from collections import deque
from decimal import Decimal
from typing import Iterable, Optional

from fundtracker.ledger import InvalidAmountError, to_cents
from fundtracker.models.audit import AuditEvent
from fundtracker.services.storage.interface import (
    AuditStorageInterface,
    ContributionStoreInterface,
)


class InMemoryContributionStore(ContributionStoreInterface):
    """Contribution store that keeps the last saved list in memory."""

    def __init__(self, initial: Optional[Iterable] = None):
        self._amounts: list = list(initial or [])
        self.last_recovery: Optional[str] = None

    def load(self) -> list[Decimal]:
        self.last_recovery = None
        amounts = []
        for item in self._amounts:
            try:
                amounts.append(to_cents(item, allow_zero=True))
            except InvalidAmountError:
                continue
        dropped = len(self._amounts) - len(amounts)
        if dropped:
            self.last_recovery = f"dropped {dropped} invalid entries"
        return amounts

    def save(self, amounts: Iterable[Decimal]) -> None:
        self._amounts = list(amounts)


class InMemoryAuditStorage(AuditStorageInterface):
    """Bounded, newest-last audit history."""

    def __init__(self, max_events: int = 200):
        self._events: deque[AuditEvent] = deque(maxlen=max_events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_recent_events(self, limit: int = 50) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
