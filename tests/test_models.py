"""
Tests for the Governance Ledger data models

Test strategy:
1. Unit tests for models and the pure tally helpers
2. Component tests for store, votes, access and tally
3. End-to-end tests through GovernanceLedger
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from govledger.models import (
    PERCENTAGE_SCALE,
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    Notification,
    NotificationKind,
    Proposal,
    ProposalClosed,
    ProposalCreated,
    ProposalInfo,
    ProposalTally,
    Voted,
)


class TestProposalModel:
    """Tests for the Proposal model."""

    def test_proposal_defaults(self):
        """Test a new proposal starts active with an empty tally."""
        proposal = Proposal(id=0, title="A", description="desc", created_at=10, creator="0xa")
        assert proposal.yes_count == 0
        assert proposal.no_count == 0
        assert proposal.active is True
        assert proposal.total_votes == 0

    def test_proposal_is_frozen(self):
        """Test stored proposals cannot be mutated in place."""
        proposal = Proposal(id=0, title="A", description="desc", created_at=10, creator="0xa")
        with pytest.raises(ValidationError):
            proposal.yes_count = 5

    def test_proposal_rejects_negative_counts(self):
        """Test tallies are non-negative."""
        with pytest.raises(ValidationError):
            Proposal(
                id=0, title="A", description="desc",
                created_at=10, creator="0xa", no_count=-1,
            )

    def test_proposal_rejects_empty_title(self):
        """Test the schema itself refuses an empty title."""
        with pytest.raises(ValidationError):
            Proposal(id=0, title="", description="desc", created_at=10, creator="0xa")

    def test_proposal_info_tuple(self):
        """Test info() matches the (title, description, yes, no, active) shape."""
        proposal = Proposal(
            id=3, title="A", description="desc",
            created_at=10, creator="0xa", yes_count=2, no_count=1,
        )
        assert proposal.info() == ("A", "desc", 2, 1, True)
        assert isinstance(proposal.info(), ProposalInfo)
        assert proposal.info().yes_count == 2

    def test_tally_percentages_bounded(self):
        """Test tally percentages cannot exceed the scale."""
        with pytest.raises(ValidationError):
            ProposalTally(
                proposal_id=0, yes_count=1, no_count=0, total_votes=1,
                yes_pct=PERCENTAGE_SCALE + 1, no_pct=0,
                approved=True, active=True,
            )


class TestNotificationModels:
    """Tests for the three notification kinds."""

    def test_proposal_created_fields(self):
        """Test ProposalCreated carries id, title, creator and timestamp."""
        n = ProposalCreated(id=0, title="A", creator="0xa", timestamp=5)
        assert n.kind == NotificationKind.PROPOSAL_CREATED
        assert n.to_log_dict() == {
            "id": 0,
            "timestamp": 5,
            "kind": "ProposalCreated",
            "title": "A",
            "creator": "0xa",
        }

    def test_voted_fields(self):
        """Test Voted carries voter, id, support and timestamp."""
        n = Voted(id=1, voter="0xb", support=False, timestamp=6)
        assert n.kind == NotificationKind.VOTED
        assert n.voter == "0xb"
        assert n.support is False

    def test_proposal_closed_fields(self):
        """Test ProposalClosed carries the final tally."""
        n = ProposalClosed(id=2, yes_count=3, no_count=4, timestamp=7)
        assert n.kind == NotificationKind.PROPOSAL_CLOSED
        assert (n.yes_count, n.no_count) == (3, 4)

    def test_notification_union_parses_by_kind(self):
        """Test serialized notifications parse back to the right class."""
        adapter = TypeAdapter(Notification)
        parsed = adapter.validate_python(
            {"kind": NotificationKind.VOTED, "id": 0, "voter": "0xb", "support": True, "timestamp": 1}
        )
        assert isinstance(parsed, Voted)

    def test_notifications_are_frozen(self):
        """Test listeners cannot alter a notification."""
        n = Voted(id=1, voter="0xb", support=True, timestamp=6)
        with pytest.raises(ValidationError):
            n.support = False


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.VOTE_CAST,
            description="Vote cast",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.proposal_id is None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.proposal_created(
            proposal_id=0, title="A", creator="0xa", timestamp=5,
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "proposal_created"
        assert log_dict["details"]["title"] == "A"
        assert log_dict["actor"] == "0xa"

    def test_audit_event_builder_request_rejected(self):
        """Test rejected requests are logged as warnings with their code."""
        event = AuditEventBuilder.request_rejected(
            operation="cast_vote",
            actor="0xb",
            error_code="DuplicateVote",
            error_message="already voted",
            proposal_id=4,
        )
        assert event.event_type == AuditEventType.REQUEST_REJECTED
        assert event.severity == AuditSeverity.WARNING
        assert event.error_code == "DuplicateVote"
        assert event.proposal_id == 4

    def test_audit_event_builder_administrator_transferred(self):
        """Test administrator handoffs record both identities."""
        event = AuditEventBuilder.administrator_transferred("0xa", "0xb")
        assert event.details == {
            "previous_administrator": "0xa",
            "new_administrator": "0xb",
        }

    def test_audit_event_ids_are_unique(self):
        """Test each audit event gets its own identifier."""
        ids = {
            AuditEvent(event_type=AuditEventType.VOTE_CAST, description="x").event_id
            for _ in range(5)
        }
        assert len(ids) == 5


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
