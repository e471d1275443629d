"""
Proposal Store

Append-only registry of proposals keyed by sequential identifier.
Identifiers start at 0 and are never reused; the valid range is always
[0, count).

Stored proposals are frozen models. Updating one means building a copy
and swapping it into its slot.
"""

from typing import Any

from govledger.errors import AlreadyClosedError, InvalidInputError, NotFoundError
from govledger.models.proposal import Proposal


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


class ProposalStore:
    """Owns every Proposal the ledger has ever created."""

    def __init__(self):
        self._proposals: list[Proposal] = []

    @property
    def count(self) -> int:
        """Number of proposals ever created (also the next identifier)."""
        return len(self._proposals)

    def get(self, proposal_id: Any) -> Proposal:
        """Return the stored snapshot or raise NotFoundError."""
        # bool is an int subclass but never a valid identifier
        if (
            not isinstance(proposal_id, int)
            or isinstance(proposal_id, bool)
            or not 0 <= proposal_id < len(self._proposals)
        ):
            raise NotFoundError(proposal_id, proposal_count=len(self._proposals))
        return self._proposals[proposal_id]

    def validate_new(self, title: Any, description: Any) -> None:
        if _is_blank(title):
            raise InvalidInputError("Proposal title cannot be empty", field="title")
        if _is_blank(description):
            raise InvalidInputError(
                "Proposal description cannot be empty", field="description"
            )

    def add(self, title: str, description: str, creator: str, now: int) -> Proposal:
        """Validate and store a new active proposal with an empty tally."""
        self.validate_new(title, description)
        proposal = Proposal(
            id=len(self._proposals),
            title=title,
            description=description,
            created_at=now,
            creator=creator,
        )
        self._proposals.append(proposal)
        return proposal

    def close(self, proposal_id: Any) -> Proposal:
        """Mark a proposal inactive. Closing is terminal."""
        proposal = self.get(proposal_id)
        if not proposal.active:
            raise AlreadyClosedError(proposal.id)
        closed = proposal.model_copy(update={"active": False})
        self._proposals[proposal.id] = closed
        return closed

    def replace(self, proposal: Proposal) -> None:
        """Swap in an updated snapshot of an existing proposal."""
        current = self.get(proposal.id)
        if not current.active and proposal.active:
            raise ValueError(f"Proposal {proposal.id} cannot be reopened")
        self._proposals[proposal.id] = proposal

    def all_ids(self) -> list[int]:
        return list(range(len(self._proposals)))

    def active_ids(self) -> list[int]:
        return [p.id for p in list(self._proposals) if p.active]
