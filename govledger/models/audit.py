"""
Audit Models for the Governance Ledger

Every request the ledger handles is logged for audit purposes, whether it
was accepted or rejected. This provides:
1. Complete traceability of who changed what
2. Debugging information when a request is refused
3. A record of administrator handoffs, which emit no notification

DESIGN DECISION: Audit entries are append-only. We never modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Accepted mutations
    PROPOSAL_CREATED = "proposal_created"
    VOTE_CAST = "vote_cast"
    PROPOSAL_CLOSED = "proposal_closed"
    ADMINISTRATOR_TRANSFERRED = "administrator_transferred"

    # Refusals
    REQUEST_REJECTED = "request_rejected"

    # Delivery problems after a mutation was committed
    LISTENER_FAILED = "listener_failed"
    HISTORY_WRITE_FAILED = "history_write_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    logged_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the entry was written (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context
    proposal_id: Optional[int] = Field(
        default=None,
        description="Proposal this event relates to, if any"
    )
    actor: Optional[str] = Field(
        default=None,
        description="Identity that made the request"
    )
    operation: Optional[str] = Field(
        default=None,
        description="Ledger operation that was requested"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "logged_at": self.logged_at.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "proposal_id": self.proposal_id,
            "actor": self.actor,
            "operation": self.operation,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.proposal_created(0, "Raise quorum", "0xabc", 1700000000)
        event = AuditEventBuilder.request_rejected("cast_vote", "0xdef", error)
    """

    @staticmethod
    def proposal_created(
        proposal_id: int,
        title: str,
        creator: str,
        timestamp: int
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROPOSAL_CREATED,
            proposal_id=proposal_id,
            actor=creator,
            operation="create",
            description=f"Proposal {proposal_id} created: {title[:200]}",
            details={
                "title": title,
                "timestamp": timestamp,
            },
        )

    @staticmethod
    def vote_cast(
        proposal_id: int,
        voter: str,
        support: bool,
        timestamp: int
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VOTE_CAST,
            proposal_id=proposal_id,
            actor=voter,
            operation="cast_vote",
            description=f"Vote cast on proposal {proposal_id}",
            details={
                "support": support,
                "timestamp": timestamp,
            },
        )

    @staticmethod
    def proposal_closed(
        proposal_id: int,
        caller: str,
        yes_count: int,
        no_count: int,
        timestamp: int
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROPOSAL_CLOSED,
            proposal_id=proposal_id,
            actor=caller,
            operation="close",
            description=f"Proposal {proposal_id} closed at {yes_count} yes / {no_count} no",
            details={
                "yes_count": yes_count,
                "no_count": no_count,
                "timestamp": timestamp,
            },
        )

    @staticmethod
    def administrator_transferred(
        previous: str,
        new_admin: str
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ADMINISTRATOR_TRANSFERRED,
            actor=previous,
            operation="transfer_administrator",
            description="Administrator role transferred",
            details={
                "previous_administrator": previous,
                "new_administrator": new_admin,
            },
        )

    @staticmethod
    def request_rejected(
        operation: str,
        actor: Optional[str],
        error_code: str,
        error_message: str,
        proposal_id: Optional[int] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REQUEST_REJECTED,
            severity=AuditSeverity.WARNING,
            proposal_id=proposal_id,
            actor=actor,
            operation=operation,
            description=f"{operation} rejected: {error_code}",
            error_code=error_code,
            error_message=error_message,
        )

    @staticmethod
    def listener_failed(
        listener: str,
        notification_kind: str,
        error_message: str,
        proposal_id: Optional[int] = None
    ) -> AuditEvent:
        listener = listener[:200]
        return AuditEvent(
            event_type=AuditEventType.LISTENER_FAILED,
            severity=AuditSeverity.ERROR,
            proposal_id=proposal_id,
            description=f"Listener {listener} failed on {notification_kind}",
            error_message=error_message,
            details={
                "listener": listener,
                "notification_kind": notification_kind,
            },
        )

    @staticmethod
    def history_write_failed(
        notification_kind: str,
        error_message: str,
        proposal_id: Optional[int] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HISTORY_WRITE_FAILED,
            severity=AuditSeverity.ERROR,
            proposal_id=proposal_id,
            description=f"Could not record {notification_kind} in history",
            error_message=error_message,
            details={
                "notification_kind": notification_kind,
            },
        )
