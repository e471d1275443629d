"""Governance ledger package."""

from govledger.ledger.access import ZERO_ADDRESS, AccessController, is_null_identity
from govledger.ledger.governance import GovernanceLedger, create_ledger
from govledger.ledger.notifier import NotificationDispatcher
from govledger.ledger.proposals import ProposalStore
from govledger.ledger.tally import TallyEngine, is_approved, vote_percentages
from govledger.ledger.votes import VoteLedger

__all__ = [
    "ZERO_ADDRESS",
    "AccessController",
    "GovernanceLedger",
    "NotificationDispatcher",
    "ProposalStore",
    "TallyEngine",
    "VoteLedger",
    "create_ledger",
    "is_approved",
    "is_null_identity",
    "vote_percentages",
]
