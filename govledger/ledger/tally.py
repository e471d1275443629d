"""
Tally Engine

DESIGN DECISION: Tally arithmetic is DETERMINISTIC integer arithmetic.
Percentages are scaled by PERCENTAGE_SCALE and floor-divided; the two
shares may sum to slightly less than 100.00% and that loss is never
redistributed.

Nothing here mutates state. The only failure is an unknown proposal.
"""

from typing import Any

from govledger.ledger.proposals import ProposalStore
from govledger.models.proposal import (
    PERCENTAGE_SCALE,
    Proposal,
    ProposalInfo,
    ProposalTally,
    VotePercentages,
)


def vote_percentages(proposal: Proposal) -> VotePercentages:
    """(0, 0) when nobody has voted, otherwise floored scaled shares."""
    total = proposal.yes_count + proposal.no_count
    if total == 0:
        return VotePercentages(0, 0)
    return VotePercentages(
        yes_pct=proposal.yes_count * PERCENTAGE_SCALE // total,
        no_pct=proposal.no_count * PERCENTAGE_SCALE // total,
    )


def is_approved(proposal: Proposal) -> bool:
    """Strict majority. A tie is not approved."""
    return proposal.yes_count > proposal.no_count


class TallyEngine:
    """Read-only query surface over the proposal store."""

    def __init__(self, store: ProposalStore):
        self._store = store

    def get_proposal_info(self, proposal_id: Any) -> ProposalInfo:
        return self._store.get(proposal_id).info()

    def get_all_proposal_ids(self) -> list[int]:
        return self._store.all_ids()

    def get_active_proposal_ids(self) -> list[int]:
        return self._store.active_ids()

    def get_vote_percentages(self, proposal_id: Any) -> VotePercentages:
        return vote_percentages(self._store.get(proposal_id))

    def get_proposal_result(self, proposal_id: Any) -> bool:
        return is_approved(self._store.get(proposal_id))

    def get_tally(self, proposal_id: Any) -> ProposalTally:
        # One snapshot read, so every derived field agrees
        proposal = self._store.get(proposal_id)
        yes_pct, no_pct = vote_percentages(proposal)
        return ProposalTally(
            proposal_id=proposal.id,
            yes_count=proposal.yes_count,
            no_count=proposal.no_count,
            total_votes=proposal.total_votes,
            yes_pct=yes_pct,
            no_pct=no_pct,
            approved=is_approved(proposal),
            active=proposal.active,
        )
