"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the local JSON file for browser storage or a database later
2. Use in-memory storage for testing
3. Keep the session logic decoupled from storage implementation

The persisted state is deliberately tiny: an ordered list of amounts
under one key. There is no versioning.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable

from fundtracker.models.audit import AuditEvent


class ContributionStoreInterface(ABC):
    """
    Abstract interface for contribution persistence.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> list[Decimal]:
        """
        Load persisted contributions, oldest first.

        Must tolerate missing or corrupt data by returning an empty
        list, and must silently drop entries that are not finite,
        non-negative numbers. Zero is kept: it is what a sub-cent
        addition rounds to.

        Returns:
            Contributions rounded to cents
        """
        pass

    @abstractmethod
    def save(self, amounts: Iterable[Decimal]) -> None:
        """
        Replace the persisted contributions.

        Args:
            amounts: The full ledger, oldest first

        Raises:
            StorageError: If the write ultimately fails
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 50,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Args:
            limit: Maximum number of events to return

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptPersistedStateError(StorageError):
    """
    Persisted data could not be decoded.

    Recovered inside the store (treated as an empty ledger);
    never surfaced to the user.
    """
    pass
