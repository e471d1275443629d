"""
Audit Logger

DESIGN DECISION: Every request the ledger handles is logged, accepted or
not. This provides:
1. Complete traceability of who changed what
2. A record of refused requests and the reason for each
3. Visibility into listeners that fail after a mutation was committed

The audit logger:
- Is synchronous, like the ledger it serves
- Gracefully handles storage failures (a failing audit store never
  undoes or blocks a committed mutation)
"""

import logging
from typing import Optional

import structlog

from govledger.config import LoggingSettings
from govledger.errors import LedgerError
from govledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from govledger.storage import AuditStorageInterface


def _processors(json_output: bool) -> list:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


# Configure structlog for local logging
structlog.configure(
    processors=_processors(json_output=True),
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Apply logging settings.

    Sets the standard library level that `filter_by_level` consults and
    picks the JSON or console renderer.

    Call it at startup, before the first log line. Loggers are cached on
    first use, so one that has already logged keeps the renderer it was
    built with; the level change applies to every logger.
    """
    settings = settings or LoggingSettings()
    logging.basicConfig(format="%(message)s", level=settings.level)
    logging.getLogger().setLevel(settings.level)
    structlog.configure(processors=_processors(settings.json_output))


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit store, when one is configured (for later queries)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("govledger.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_proposal_created(
        self,
        proposal_id: int,
        title: str,
        creator: str,
        timestamp: int,
    ) -> None:
        self.log(AuditEventBuilder.proposal_created(
            proposal_id=proposal_id,
            title=title,
            creator=creator,
            timestamp=timestamp,
        ))

    def log_vote_cast(
        self,
        proposal_id: int,
        voter: str,
        support: bool,
        timestamp: int,
    ) -> None:
        self.log(AuditEventBuilder.vote_cast(
            proposal_id=proposal_id,
            voter=voter,
            support=support,
            timestamp=timestamp,
        ))

    def log_proposal_closed(
        self,
        proposal_id: int,
        caller: str,
        yes_count: int,
        no_count: int,
        timestamp: int,
    ) -> None:
        self.log(AuditEventBuilder.proposal_closed(
            proposal_id=proposal_id,
            caller=caller,
            yes_count=yes_count,
            no_count=no_count,
            timestamp=timestamp,
        ))

    def log_administrator_transferred(
        self,
        previous: str,
        new_admin: str,
    ) -> None:
        self.log(AuditEventBuilder.administrator_transferred(
            previous=previous,
            new_admin=new_admin,
        ))

    def log_request_rejected(
        self,
        operation: str,
        actor: Optional[str],
        error: LedgerError,
        proposal_id: Optional[int] = None,
    ) -> None:
        """Log a refused request. The error itself is re-raised by the caller."""
        self.log(AuditEventBuilder.request_rejected(
            operation=operation,
            actor=None if actor is None else str(actor),
            error_code=error.code,
            error_message=str(error),
            proposal_id=(
                proposal_id
                if isinstance(proposal_id, int) and not isinstance(proposal_id, bool)
                else None
            ),
        ))

    def log_listener_failed(
        self,
        listener: str,
        notification_kind: str,
        error_message: str,
        proposal_id: Optional[int] = None,
    ) -> None:
        self.log(AuditEventBuilder.listener_failed(
            listener=listener,
            notification_kind=notification_kind,
            error_message=error_message,
            proposal_id=proposal_id,
        ))

    def log_history_write_failed(
        self,
        notification_kind: str,
        error_message: str,
        proposal_id: Optional[int] = None,
    ) -> None:
        self.log(AuditEventBuilder.history_write_failed(
            notification_kind=notification_kind,
            error_message=error_message,
            proposal_id=proposal_id,
        ))
