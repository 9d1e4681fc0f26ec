"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Contributions live in a local JSON file; in-memory stores are available
for running without a file and for the activity history.
"""

from fundtracker.services.storage.interface import (
    AuditStorageInterface,
    ContributionStoreInterface,
    CorruptPersistedStateError,
    StorageError,
)
from fundtracker.services.storage.json_file import JsonFileContributionStore
from fundtracker.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryContributionStore,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "ContributionStoreInterface",
    # Exceptions
    "CorruptPersistedStateError",
    "StorageError",
    # Implementations
    "InMemoryAuditStorage",
    "InMemoryContributionStore",
    "JsonFileContributionStore",
]
