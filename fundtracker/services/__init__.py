"""Services package."""

from fundtracker.services.notifications import (
    ConfirmationInterface,
    CooperativeIntervalScheduler,
    IntervalSchedulerInterface,
    NotifierInterface,
    StaggeredAnnouncer,
)
from fundtracker.services.storage import (
    AuditStorageInterface,
    ContributionStoreInterface,
    CorruptPersistedStateError,
    InMemoryAuditStorage,
    InMemoryContributionStore,
    JsonFileContributionStore,
    StorageError,
)

__all__ = [
    # Notification services
    "ConfirmationInterface",
    "CooperativeIntervalScheduler",
    "IntervalSchedulerInterface",
    "NotifierInterface",
    "StaggeredAnnouncer",
    # Storage services
    "AuditStorageInterface",
    "ContributionStoreInterface",
    "CorruptPersistedStateError",
    "InMemoryAuditStorage",
    "InMemoryContributionStore",
    "JsonFileContributionStore",
    "StorageError",
]
