"""
Notification Dispatcher

Delivers each notification to the history store and then to every
subscribed listener, in subscription order.

Delivery happens AFTER the mutation is committed. A listener that raises
cannot undo the mutation; the failure is written to the audit log and
the remaining listeners still run.
"""

import threading
from typing import Callable, Optional

import structlog

from govledger.audit import AuditLogger
from govledger.models.notifications import LedgerNotification, NotificationKind
from govledger.storage import NotificationStorageInterface, StorageError


logger = structlog.get_logger("govledger.notifier")


Listener = Callable[[LedgerNotification], None]


class NotificationDispatcher:
    """Observer list plus optional history."""

    def __init__(
        self,
        audit_logger: AuditLogger,
        history: Optional[NotificationStorageInterface] = None,
    ):
        self._audit_logger = audit_logger
        self._history = history
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            A callable that removes the listener again
        """
        if not callable(listener):
            raise TypeError("Listener must be callable")
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def emit(self, notification: LedgerNotification) -> None:
        kind = notification.kind.value

        if self._history is not None:
            try:
                self._history.append(notification)
            except StorageError as e:
                self._audit_logger.log_history_write_failed(
                    notification_kind=kind,
                    error_message=str(e),
                    proposal_id=notification.id,
                )

        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(notification)
            except Exception as e:
                # Listeners are external; their failure is logged, not raised
                self._report_listener_failure(listener, kind, e, notification.id)

    def _report_listener_failure(
        self,
        listener: Listener,
        kind: str,
        error: Exception,
        proposal_id: int,
    ) -> None:
        name = getattr(listener, "__qualname__", None) or repr(listener)
        try:
            self._audit_logger.log_listener_failed(
                listener=name[:200],
                notification_kind=kind,
                error_message=str(error),
                proposal_id=proposal_id,
            )
        except Exception as log_error:
            # The mutation is already committed; never raise from here
            logger.error(
                "listener_failure_not_audited",
                notification_kind=kind,
                proposal_id=proposal_id,
                error=str(log_error),
            )

    def get_notifications(
        self,
        proposal_id: Optional[int] = None,
        kind: Optional[NotificationKind] = None,
        limit: Optional[int] = None,
    ) -> list[LedgerNotification]:
        if self._history is None:
            return []
        return self._history.get_notifications(
            proposal_id=proposal_id,
            kind=kind,
            limit=limit,
        )
