"""
Governance Ledger

This module ties the ledger's parts together and defines the request
surface the presentation layer talks to:
1. Mutations: create_proposal, cast_vote, close_proposal,
   transfer_administrator
2. Queries: proposal info, id listings, percentages, results, tallies

DESIGN DECISION: The ledger enforces the boundaries:
- Every request is fully validated before anything changes
- Mutations run one at a time under a single lock
- Every mutation is audited and announced to listeners
- A refused request is audited and re-raised to the caller unchanged
"""

import threading
import time
from typing import Any, Callable, Optional

from govledger.audit import AuditLogger
from govledger.config import LedgerSettings, get_settings
from govledger.errors import InvalidInputError, LedgerError
from govledger.ledger.access import AccessController
from govledger.ledger.notifier import Listener, NotificationDispatcher
from govledger.ledger.proposals import ProposalStore
from govledger.ledger.tally import TallyEngine
from govledger.ledger.votes import VoteLedger
from govledger.models.notifications import (
    LedgerNotification,
    NotificationKind,
    ProposalClosed,
    ProposalCreated,
    Voted,
)
from govledger.models.proposal import (
    Proposal,
    ProposalInfo,
    ProposalTally,
    VotePercentages,
)
from govledger.storage import (
    InMemoryNotificationStorage,
    NotificationStorageInterface,
)


class GovernanceLedger:
    """
    Proposal/vote state machine.

    Mutations are serialized by a re-entrant lock, so a listener may call
    back into the ledger while being notified. Queries do not take the
    lock: stored proposals are frozen and replaced whole, so a reader
    always sees one consistent version of each proposal.
    """

    def __init__(
        self,
        administrator: str,
        audit_logger: Optional[AuditLogger] = None,
        notification_storage: Optional[NotificationStorageInterface] = None,
        history_limit: int = 1000,
        clock: Callable[[], float] = time.time,
    ):
        self._access = AccessController(administrator)
        self._store = ProposalStore()
        self._votes = VoteLedger(self._store)
        self._tally = TallyEngine(self._store)
        self._audit_logger = audit_logger or AuditLogger()
        self._notifier = NotificationDispatcher(self._audit_logger, notification_storage)
        self._history_limit = history_limit
        self._clock = clock
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Queryable state
    # -------------------------------------------------------------------------

    @property
    def administrator(self) -> str:
        return self._access.administrator

    @property
    def proposal_count(self) -> int:
        return self._store.count

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_proposal(
        self,
        title: str,
        description: str,
        creator: str,
        now: Optional[int] = None,
    ) -> int:
        """
        Create a new active proposal.

        Fails with:
            UnauthorizedError: creator is not the administrator
            InvalidInputError: empty title or description, bad timestamp

        Returns:
            The new proposal's identifier
        """
        with self._lock:
            try:
                self._access.require_administrator(creator, "create proposals")
                timestamp = self._resolve_now(now)
                proposal = self._store.add(title, description, creator, timestamp)
            except LedgerError as e:
                self._audit_logger.log_request_rejected("create", creator, e)
                raise

            self._audit_logger.log_proposal_created(
                proposal_id=proposal.id,
                title=proposal.title,
                creator=creator,
                timestamp=timestamp,
            )
            self._notifier.emit(ProposalCreated(
                id=proposal.id,
                title=proposal.title,
                creator=creator,
                timestamp=timestamp,
            ))
            return proposal.id

    def close_proposal(
        self,
        proposal_id: int,
        caller: str,
        now: Optional[int] = None,
    ) -> None:
        """
        Permanently close a proposal.

        Fails with:
            NotFoundError: unknown proposal
            UnauthorizedError: caller is not the administrator
            AlreadyClosedError: proposal was closed before
        """
        with self._lock:
            try:
                self._store.get(proposal_id)
                self._access.require_administrator(caller, "close proposals")
                timestamp = self._resolve_now(now)
                closed = self._store.close(proposal_id)
            except LedgerError as e:
                self._audit_logger.log_request_rejected(
                    "close", caller, e, proposal_id=proposal_id
                )
                raise

            self._audit_logger.log_proposal_closed(
                proposal_id=closed.id,
                caller=caller,
                yes_count=closed.yes_count,
                no_count=closed.no_count,
                timestamp=timestamp,
            )
            self._notifier.emit(ProposalClosed(
                id=closed.id,
                yes_count=closed.yes_count,
                no_count=closed.no_count,
                timestamp=timestamp,
            ))

    def cast_vote(
        self,
        proposal_id: int,
        voter: str,
        support: bool,
        now: Optional[int] = None,
    ) -> None:
        """
        Cast a yes (support=True) or no vote.

        Fails with:
            NotFoundError: unknown proposal
            InvalidInputError: empty voter, non-bool support or bad timestamp
            InactiveError: proposal is closed
            DuplicateVoteError: voter already voted on this proposal
        """
        with self._lock:
            try:
                # Validate the proposal before the clock so errors keep their order
                self._store.get(proposal_id)
                timestamp = self._resolve_now(now)
                updated = self._votes.cast(proposal_id, voter, support)
            except LedgerError as e:
                self._audit_logger.log_request_rejected(
                    "cast_vote", voter, e, proposal_id=proposal_id
                )
                raise

            self._audit_logger.log_vote_cast(
                proposal_id=updated.id,
                voter=voter,
                support=support,
                timestamp=timestamp,
            )
            self._notifier.emit(Voted(
                id=updated.id,
                voter=voter,
                support=support,
                timestamp=timestamp,
            ))

    def transfer_administrator(self, new_admin: str, caller: str) -> None:
        """
        Hand the administrator role to `new_admin`.

        Fails with:
            UnauthorizedError: caller is not the administrator
            InvalidInputError: new_admin is the null identity
        """
        with self._lock:
            try:
                previous = self._access.transfer(new_admin, caller)
            except LedgerError as e:
                self._audit_logger.log_request_rejected(
                    "transfer_administrator", caller, e
                )
                raise

            self._audit_logger.log_administrator_transferred(
                previous=previous,
                new_admin=new_admin,
            )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_voted(self, proposal_id: int, voter: str) -> bool:
        return self._votes.has_voted(proposal_id, voter)

    def get_proposal(self, proposal_id: int) -> Proposal:
        """Full snapshot, including creation time and creator."""
        return self._store.get(proposal_id)

    def get_proposal_info(self, proposal_id: int) -> ProposalInfo:
        return self._tally.get_proposal_info(proposal_id)

    def get_all_proposal_ids(self) -> list[int]:
        return self._tally.get_all_proposal_ids()

    def get_active_proposal_ids(self) -> list[int]:
        return self._tally.get_active_proposal_ids()

    def get_vote_percentages(self, proposal_id: int) -> VotePercentages:
        return self._tally.get_vote_percentages(proposal_id)

    def get_proposal_result(self, proposal_id: int) -> bool:
        return self._tally.get_proposal_result(proposal_id)

    def get_tally(self, proposal_id: int) -> ProposalTally:
        return self._tally.get_tally(proposal_id)

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a notification listener. Returns its unsubscribe callable."""
        return self._notifier.subscribe(listener)

    def get_notifications(
        self,
        proposal_id: Optional[int] = None,
        kind: Optional[NotificationKind] = None,
        limit: Optional[int] = None,
    ) -> list[LedgerNotification]:
        """
        Query the notification history, oldest first.

        Returns an empty list when the ledger keeps no history.

        Raises:
            InvalidInputError: limit is not a non-negative integer
        """
        if limit is not None and (
            isinstance(limit, bool) or not isinstance(limit, int) or limit < 0
        ):
            raise InvalidInputError("Limit must be a non-negative integer", limit=limit)
        if limit is None or limit > self._history_limit:
            limit = self._history_limit
        return self._notifier.get_notifications(
            proposal_id=proposal_id,
            kind=kind,
            limit=limit,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _resolve_now(self, now: Any) -> int:
        if now is None:
            return int(self._clock())
        if isinstance(now, bool) or not isinstance(now, int) or now < 0:
            raise InvalidInputError(
                "Timestamp must be a non-negative integer", timestamp=now
            )
        return now


def create_ledger(
    administrator: Optional[str] = None,
    settings: Optional[LedgerSettings] = None,
    audit_logger: Optional[AuditLogger] = None,
    clock: Callable[[], float] = time.time,
) -> GovernanceLedger:
    """
    Factory function to build a ledger from settings.

    Args:
        administrator: Deployer identity. Defaults to the configured one.
        settings: Ledger settings. Defaults to the environment.
        audit_logger: Audit logger. Defaults to a local-only logger.

    Returns:
        A ready GovernanceLedger
    """
    settings = settings or get_settings().ledger
    history = InMemoryNotificationStorage() if settings.record_history else None

    return GovernanceLedger(
        administrator=administrator or settings.administrator,
        audit_logger=audit_logger or AuditLogger(),
        notification_storage=history,
        history_limit=settings.history_limit,
        clock=clock,
    )
