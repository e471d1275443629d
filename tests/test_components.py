"""
Tests for the ledger's parts in isolation: access controller, proposal
store, vote ledger and tally engine.
"""

import pytest

from govledger.errors import (
    AlreadyClosedError,
    DuplicateVoteError,
    InactiveError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from govledger.ledger import (
    ZERO_ADDRESS,
    AccessController,
    ProposalStore,
    TallyEngine,
    VoteLedger,
    is_approved,
    is_null_identity,
    vote_percentages,
)
from govledger.models import Proposal


def make_proposal(yes: int, no: int, active: bool = True) -> Proposal:
    return Proposal(
        id=0, title="A", description="desc", created_at=1, creator="0xa",
        yes_count=yes, no_count=no, active=active,
    )


class TestAccessController:
    """Tests for the administrator gate."""

    def test_initial_administrator(self):
        """Test the deployer starts as administrator."""
        access = AccessController("0xdeployer")
        assert access.administrator == "0xdeployer"
        assert access.is_administrator("0xdeployer")
        assert not access.is_administrator("0xother")

    def test_null_deployer_rejected(self):
        """Test a ledger cannot start without an administrator."""
        with pytest.raises(InvalidInputError):
            AccessController("")

    def test_require_administrator_rejects_others(self):
        """Test non-administrators are refused."""
        access = AccessController("0xdeployer")
        with pytest.raises(UnauthorizedError) as exc_info:
            access.require_administrator("0xother", "close proposals")
        assert exc_info.value.code == "Unauthorized"
        assert exc_info.value.caller == "0xother"

    def test_transfer(self):
        """Test the holder can hand the role over."""
        access = AccessController("0xdeployer")
        previous = access.transfer("0xnext", caller="0xdeployer")
        assert previous == "0xdeployer"
        assert access.administrator == "0xnext"
        assert not access.is_administrator("0xdeployer")

    def test_transfer_by_non_holder(self):
        """Test only the holder can transfer."""
        access = AccessController("0xdeployer")
        with pytest.raises(UnauthorizedError):
            access.transfer("0xnext", caller="0xnext")
        assert access.administrator == "0xdeployer"

    @pytest.mark.parametrize("target", [None, "", "   ", ZERO_ADDRESS, "0X" + "0" * 40])
    def test_transfer_to_null_identity(self, target):
        """Test the role cannot be handed to nobody."""
        access = AccessController("0xdeployer")
        with pytest.raises(InvalidInputError):
            access.transfer(target, caller="0xdeployer")
        assert access.administrator == "0xdeployer"

    def test_unauthorized_checked_before_null_target(self):
        """Test a stranger gets Unauthorized even with a null target."""
        access = AccessController("0xdeployer")
        with pytest.raises(UnauthorizedError):
            access.transfer(None, caller="0xother")

    def test_is_null_identity(self):
        """Test which values count as the null identity."""
        assert is_null_identity(None)
        assert is_null_identity(0)
        assert is_null_identity(" ")
        assert is_null_identity(ZERO_ADDRESS)
        assert not is_null_identity("0x01")


class TestProposalStore:
    """Tests for the append-only proposal registry."""

    def test_sequential_ids(self):
        """Test identifiers are 0-based and sequential."""
        store = ProposalStore()
        ids = [store.add(f"T{i}", "D", "0xa", 100 + i).id for i in range(3)]
        assert ids == [0, 1, 2]
        assert store.count == 3
        assert store.all_ids() == [0, 1, 2]

    def test_new_proposal_state(self):
        """Test a new proposal records its creator and timestamp."""
        store = ProposalStore()
        proposal = store.add("Title", "Body", "0xa", 1234)
        assert proposal.active is True
        assert (proposal.yes_count, proposal.no_count) == (0, 0)
        assert proposal.created_at == 1234
        assert proposal.creator == "0xa"

    @pytest.mark.parametrize("title,description", [
        ("", "D"),
        ("T", ""),
        ("   ", "D"),
        (None, "D"),
    ])
    def test_empty_text_rejected(self, title, description):
        """Test title and description are required."""
        store = ProposalStore()
        with pytest.raises(InvalidInputError):
            store.add(title, description, "0xa", 1)
        assert store.count == 0

    @pytest.mark.parametrize("proposal_id", [-1, 1, 99, True, "0", None, 0.0])
    def test_get_out_of_range(self, proposal_id):
        """Test anything outside [0, count) is NotFound."""
        store = ProposalStore()
        store.add("T", "D", "0xa", 1)
        with pytest.raises(NotFoundError):
            store.get(proposal_id)

    def test_close_is_terminal(self):
        """Test a closed proposal cannot be closed again."""
        store = ProposalStore()
        store.add("T", "D", "0xa", 1)
        closed = store.close(0)
        assert closed.active is False
        with pytest.raises(AlreadyClosedError):
            store.close(0)

    def test_replace_cannot_reopen(self):
        """Test the store refuses to reactivate a closed proposal."""
        store = ProposalStore()
        store.add("T", "D", "0xa", 1)
        store.close(0)
        reopened = store.get(0).model_copy(update={"active": True})
        with pytest.raises(ValueError):
            store.replace(reopened)
        assert store.get(0).active is False

    def test_active_ids_preserve_order(self):
        """Test active ids are filtered in ascending order."""
        store = ProposalStore()
        for i in range(5):
            store.add(f"T{i}", "D", "0xa", 1)
        store.close(1)
        store.close(3)
        assert store.active_ids() == [0, 2, 4]


class TestVoteLedger:
    """Tests for one-vote-per-identity recording."""

    @pytest.fixture
    def votes(self):
        store = ProposalStore()
        store.add("T", "D", "0xa", 1)
        return VoteLedger(store), store

    def test_yes_and_no_votes(self, votes):
        """Test support picks the counter that is incremented."""
        ledger, store = votes
        ledger.cast(0, "0x1", True)
        ledger.cast(0, "0x2", False)
        ledger.cast(0, "0x3", True)
        assert (store.get(0).yes_count, store.get(0).no_count) == (2, 1)

    def test_duplicate_vote(self, votes):
        """Test a second vote is refused and not counted."""
        ledger, store = votes
        ledger.cast(0, "0x1", True)
        with pytest.raises(DuplicateVoteError) as exc_info:
            ledger.cast(0, "0x1", False)
        assert exc_info.value.voter == "0x1"
        assert (store.get(0).yes_count, store.get(0).no_count) == (1, 0)

    def test_vote_on_closed_proposal(self, votes):
        """Test closed proposals refuse votes."""
        ledger, store = votes
        store.close(0)
        with pytest.raises(InactiveError):
            ledger.cast(0, "0x1", True)
        assert not ledger.has_voted(0, "0x1")

    def test_has_voted(self, votes):
        """Test membership lookup, including unknown identities."""
        ledger, _ = votes
        assert ledger.has_voted(0, "0xnever") is False
        ledger.cast(0, "0x1", True)
        assert ledger.has_voted(0, "0x1") is True

    def test_has_voted_unknown_proposal(self, votes):
        """Test has_voted still checks the proposal exists."""
        ledger, _ = votes
        with pytest.raises(NotFoundError):
            ledger.has_voted(7, "0x1")

    def test_null_voter(self, votes):
        """Test an empty voter identity is refused."""
        ledger, store = votes
        with pytest.raises(InvalidInputError):
            ledger.cast(0, "", True)
        assert store.get(0).total_votes == 0

    def test_non_bool_support(self, votes):
        """Test support must be an actual bool."""
        ledger, store = votes
        with pytest.raises(InvalidInputError):
            ledger.cast(0, "0x1", "false")
        assert store.get(0).total_votes == 0
        assert ledger.has_voted(0, "0x1") is False

    def test_has_voted_unhashable_identity(self, votes):
        """Test a list identity is answered, not a TypeError."""
        ledger, _ = votes
        assert ledger.has_voted(0, ["0x1"]) is False

    def test_votes_are_per_proposal(self, votes):
        """Test one identity may vote once on each proposal."""
        ledger, store = votes
        store.add("T2", "D2", "0xa", 2)
        ledger.cast(0, "0x1", True)
        ledger.cast(1, "0x1", False)
        assert store.get(0).yes_count == 1
        assert store.get(1).no_count == 1


class TestTallyArithmetic:
    """Tests for percentage and result calculations."""

    def test_no_votes(self):
        """Test the defined zero case: no division by zero."""
        assert vote_percentages(make_proposal(0, 0)) == (0, 0)

    def test_even_split(self):
        """Test a 1/1 split is 50.00% each."""
        assert vote_percentages(make_proposal(1, 1)) == (5000, 5000)

    def test_unanimous(self):
        """Test a unanimous vote is 100.00%."""
        assert vote_percentages(make_proposal(4, 0)) == (10000, 0)

    def test_floor_rounding_not_corrected(self):
        """Test thirds floor to 3333 + 6666 and the loss is kept."""
        yes_pct, no_pct = vote_percentages(make_proposal(1, 2))
        assert (yes_pct, no_pct) == (3333, 6666)
        assert yes_pct + no_pct == 9999

    @pytest.mark.parametrize("yes,no", [(1, 2), (2, 5), (7, 3), (1, 6), (13, 17)])
    def test_percentages_never_exceed_scale(self, yes, no):
        """Test the two shares never sum past 100.00%."""
        yes_pct, no_pct = vote_percentages(make_proposal(yes, no))
        assert yes_pct + no_pct <= 10000
        assert yes_pct == yes * 10000 // (yes + no)

    def test_tie_is_not_approved(self):
        """Test the tie-breaking policy: a tie does not pass."""
        assert is_approved(make_proposal(3, 3)) is False
        assert is_approved(make_proposal(0, 0)) is False

    def test_strict_majority_approved(self):
        """Test one extra yes vote passes the proposal."""
        assert is_approved(make_proposal(4, 3)) is True
        assert is_approved(make_proposal(3, 4)) is False

    def test_tally_engine_combined_read(self):
        """Test get_tally agrees with the individual queries."""
        store = ProposalStore()
        store.add("T", "D", "0xa", 1)
        votes = VoteLedger(store)
        for voter, support in [("0x1", True), ("0x2", True), ("0x3", False)]:
            votes.cast(0, voter, support)
        engine = TallyEngine(store)

        tally = engine.get_tally(0)
        assert tally.total_votes == 3
        assert (tally.yes_pct, tally.no_pct) == tuple(engine.get_vote_percentages(0))
        assert tally.approved is engine.get_proposal_result(0) is True
        assert engine.get_proposal_info(0) == ("T", "D", 2, 1, True)
