"""
Data Models Package

This package contains all Pydantic models used by the Governance Ledger.
All data flowing in or out of the ledger must conform to these schemas.
"""

from govledger.models.proposal import (
    PERCENTAGE_SCALE,
    Proposal,
    ProposalInfo,
    ProposalTally,
    VotePercentages,
)
from govledger.models.notifications import (
    LedgerNotification,
    Notification,
    NotificationKind,
    ProposalClosed,
    ProposalCreated,
    Voted,
)
from govledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Proposal models
    "PERCENTAGE_SCALE",
    "Proposal",
    "ProposalInfo",
    "ProposalTally",
    "VotePercentages",
    # Notification models
    "LedgerNotification",
    "Notification",
    "NotificationKind",
    "ProposalClosed",
    "ProposalCreated",
    "Voted",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
