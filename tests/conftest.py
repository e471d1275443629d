"""Shared fixtures for the governance ledger tests."""

import pytest

from govledger.audit import AuditLogger
from govledger.ledger import GovernanceLedger
from govledger.storage import InMemoryAuditStorage, InMemoryNotificationStorage


ADMIN = "0xA11CE00000000000000000000000000000000001"
VOTER_X = "0x1000000000000000000000000000000000000001"
VOTER_Y = "0x2000000000000000000000000000000000000002"
VOTER_Z = "0x3000000000000000000000000000000000000003"
OUTSIDER = "0xBAD0000000000000000000000000000000000BAD"

NOW = 1_700_000_000


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def notification_storage():
    return InMemoryNotificationStorage()


@pytest.fixture
def ledger(audit_storage, notification_storage):
    return GovernanceLedger(
        administrator=ADMIN,
        audit_logger=AuditLogger(audit_storage),
        notification_storage=notification_storage,
        clock=lambda: NOW,
    )


@pytest.fixture
def received(ledger):
    """Notifications delivered to a subscribed listener."""
    notifications = []
    ledger.subscribe(notifications.append)
    return notifications


def snapshot(ledger):
    """Everything a failed request must leave untouched."""
    return (
        ledger.administrator,
        ledger.proposal_count,
        [ledger.get_proposal(i) for i in ledger.get_all_proposal_ids()],
    )
