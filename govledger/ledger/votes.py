"""
Vote Ledger

Records which identity has voted on which proposal. A vote is a one-way
membership fact: once (proposal, voter) is recorded it is never removed,
and the vote value lives only in the proposal's tally.
"""

from collections import defaultdict
from typing import Any

from govledger.errors import DuplicateVoteError, InactiveError, InvalidInputError
from govledger.ledger.access import is_null_identity
from govledger.ledger.proposals import ProposalStore
from govledger.models.proposal import Proposal


class VoteLedger:
    """One vote per identity per proposal."""

    def __init__(self, store: ProposalStore):
        self._store = store
        self._voters: defaultdict[int, set[str]] = defaultdict(set)

    def has_voted(self, proposal_id: Any, voter: Any) -> bool:
        proposal = self._store.get(proposal_id)
        if is_null_identity(voter):
            return False
        return voter in self._voters.get(proposal.id, ())

    def cast(self, proposal_id: Any, voter: str, support: bool) -> Proposal:
        """
        Record the vote and update the tally.

        Checks, in order:
        - proposal exists (NotFoundError)
        - voter is a real identity (InvalidInputError)
        - support is a bool (InvalidInputError)
        - proposal is active (InactiveError)
        - voter has not voted on it yet (DuplicateVoteError)

        Returns:
            The updated proposal snapshot
        """
        proposal = self._store.get(proposal_id)
        if is_null_identity(voter):
            raise InvalidInputError("Voter identity cannot be empty", voter=voter)
        if not isinstance(support, bool):
            raise InvalidInputError("Vote must be True or False", support=repr(support)[:50])
        if not proposal.active:
            raise InactiveError(proposal.id)
        if voter in self._voters.get(proposal.id, ()):
            raise DuplicateVoteError(proposal.id, voter)

        if support:
            updated = proposal.model_copy(update={"yes_count": proposal.yes_count + 1})
        else:
            updated = proposal.model_copy(update={"no_count": proposal.no_count + 1})

        self._store.replace(updated)
        self._voters[proposal.id].add(voter)
        return updated

