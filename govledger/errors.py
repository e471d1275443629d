"""
Ledger Errors

Every rejected request raises one of these. They are expected,
recoverable outcomes: the caller decides what to do with them.

IMPORTANT: An error is always raised BEFORE any state is touched.
A failed request leaves the ledger exactly as it was.
"""

from typing import Any, Optional


class LedgerError(Exception):
    """Base exception for all ledger request failures."""

    code = "LedgerError"

    def __init__(self, message: str, **context: Any):
        self.context = context
        super().__init__(message)


class InvalidInputError(LedgerError):
    """Empty required text, null target identity, or bad timestamp."""

    code = "InvalidInput"


class NotFoundError(LedgerError):
    """Proposal identifier outside the valid range."""

    code = "NotFound"

    def __init__(self, proposal_id: Any, proposal_count: Optional[int] = None):
        self.proposal_id = proposal_id
        super().__init__(
            f"Proposal {proposal_id!r} does not exist",
            proposal_id=proposal_id,
            proposal_count=proposal_count,
        )


class InactiveError(LedgerError):
    """Vote attempted on a closed proposal."""

    code = "Inactive"

    def __init__(self, proposal_id: int):
        self.proposal_id = proposal_id
        super().__init__(
            f"Proposal {proposal_id} is closed and no longer accepts votes",
            proposal_id=proposal_id,
        )


class AlreadyClosedError(LedgerError):
    """Close attempted on a proposal that is already closed."""

    code = "AlreadyClosed"

    def __init__(self, proposal_id: int):
        self.proposal_id = proposal_id
        super().__init__(
            f"Proposal {proposal_id} is already closed",
            proposal_id=proposal_id,
        )


class DuplicateVoteError(LedgerError):
    """Identity has already voted on this proposal."""

    code = "DuplicateVote"

    def __init__(self, proposal_id: int, voter: str):
        self.proposal_id = proposal_id
        self.voter = voter
        super().__init__(
            f"{voter} has already voted on proposal {proposal_id}",
            proposal_id=proposal_id,
            voter=voter,
        )


class UnauthorizedError(LedgerError):
    """Caller is not the administrator."""

    code = "Unauthorized"

    def __init__(self, caller: Any, action: str):
        self.caller = caller
        self.action = action
        super().__init__(
            f"{caller!r} is not the administrator and may not {action}",
            caller=caller,
            action=action,
        )
