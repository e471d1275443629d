"""
Storage Package

Provides abstract interfaces and in-memory implementations for the
notification history and the audit trail.
"""

from govledger.storage.interface import (
    AuditStorageInterface,
    NotificationStorageInterface,
    StorageError,
    StorageFullError,
)
from govledger.storage.memory import (
    InMemoryAuditStorage,
    InMemoryNotificationStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "NotificationStorageInterface",
    # Exceptions
    "StorageError",
    "StorageFullError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryNotificationStorage",
]
