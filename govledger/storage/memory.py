"""
In-Memory Storage Implementation

Backs the notification history and the audit trail with plain lists.
Suitable for tests and for a ledger that lives in a single process.
"""

import threading
from typing import Optional

from govledger.models.audit import AuditEvent
from govledger.models.notifications import LedgerNotification, NotificationKind
from govledger.storage.interface import (
    AuditStorageInterface,
    NotificationStorageInterface,
    StorageFullError,
)


class InMemoryNotificationStorage(NotificationStorageInterface):
    """Notification history kept in a list, oldest first."""

    def __init__(self, capacity: Optional[int] = None):
        self._notifications: list[LedgerNotification] = []
        self._capacity = capacity
        self._lock = threading.Lock()

    def append(self, notification: LedgerNotification) -> None:
        with self._lock:
            if self._capacity is not None and len(self._notifications) >= self._capacity:
                raise StorageFullError(
                    f"Notification history is full ({self._capacity} entries)"
                )
            self._notifications.append(notification)

    def get_notifications(
        self,
        proposal_id: Optional[int] = None,
        kind: Optional[NotificationKind] = None,
        limit: Optional[int] = None,
    ) -> list[LedgerNotification]:
        with self._lock:
            snapshot = list(self._notifications)

        results = [
            n for n in snapshot
            if (proposal_id is None or n.id == proposal_id)
            and (kind is None or n.kind == kind)
        ]
        if limit is not None:
            results = results[:max(limit, 0)]
        return results

    def count(self) -> int:
        with self._lock:
            return len(self._notifications)


class InMemoryAuditStorage(AuditStorageInterface):
    """Audit trail kept in a list, oldest first."""

    def __init__(self):
        self._events: list[AuditEvent] = []
        self._lock = threading.Lock()

    def append_event(self, event: AuditEvent) -> bool:
        with self._lock:
            self._events.append(event)
        return True

    def get_events_by_proposal(self, proposal_id: int) -> list[AuditEvent]:
        with self._lock:
            return [e for e in self._events if e.proposal_id == proposal_id]

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        with self._lock:
            return list(reversed(self._events[-limit:])) if limit > 0 else []
