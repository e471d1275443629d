"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for the two append-only
logs that sit beside the ledger: the notification history and the audit
trail. This allows us to:
1. Use in-memory storage for tests and single-process hosts
2. Swap in a database or a message bus later
3. Keep the ledger's rules decoupled from where records end up

The ledger's own state (proposals, votes, administrator) is NOT behind
this interface. It lives in the ledger instance.
"""

from abc import ABC, abstractmethod
from typing import Optional

from govledger.models.audit import AuditEvent
from govledger.models.notifications import LedgerNotification, NotificationKind


class NotificationStorageInterface(ABC):
    """
    Abstract interface for notification history.

    Notifications are append-only and kept in emission order.
    """

    @abstractmethod
    def append(self, notification: LedgerNotification) -> None:
        """
        Append a notification to the history.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def get_notifications(
        self,
        proposal_id: Optional[int] = None,
        kind: Optional[NotificationKind] = None,
        limit: Optional[int] = None,
    ) -> list[LedgerNotification]:
        """
        List notifications with optional filters.

        Args:
            proposal_id: Only notifications about this proposal
            kind: Only notifications of this kind
            limit: Maximum number of results (oldest first)

        Returns:
            Matching notifications in emission order
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of notifications recorded."""
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
    def get_events_by_proposal(self, proposal_id: int) -> list[AuditEvent]:
        """
        Get all events for a proposal, in chronological order.
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events (newest first).
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageFullError(StorageError):
    """Storage refused the write because it reached its capacity."""
    pass
