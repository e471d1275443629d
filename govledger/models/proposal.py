"""
Core Data Models for the Governance Ledger

These models define the strict schemas for every record the ledger
stores or hands out. They are designed to:
1. Enforce type safety at runtime
2. Be immutable once handed to a caller
3. Be serializable for logging and for the presentation layer

DESIGN DECISION: Stored proposals are frozen. A vote or a closure
produces a NEW Proposal that replaces the old one in the store, so a
reader can never observe half of an update.
"""

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


# Tally percentages are integers scaled by this factor (10000 == 100.00%)
PERCENTAGE_SCALE = 10000


# =============================================================================
# CORE PROPOSAL MODEL
# =============================================================================

class Proposal(BaseModel):
    """
    A governance item subject to yes/no voting.

    CRITICAL: Once `active` is False it never becomes True again.
    """
    model_config = ConfigDict(frozen=True)

    # Identity
    id: int = Field(
        ...,
        ge=0,
        description="Sequential identifier, assigned at creation"
    )

    # Content
    title: str = Field(
        ...,
        min_length=1,
        description="Proposal title"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Proposal description"
    )

    # Tally
    yes_count: int = Field(
        default=0,
        ge=0,
        description="Number of yes votes"
    )
    no_count: int = Field(
        default=0,
        ge=0,
        description="Number of no votes"
    )

    # Lifecycle
    active: bool = Field(
        default=True,
        description="Whether the proposal still accepts votes"
    )
    created_at: int = Field(
        ...,
        ge=0,
        description="Creation time in seconds since epoch"
    )
    creator: str = Field(
        ...,
        description="Identity that created the proposal"
    )

    @property
    def total_votes(self) -> int:
        return self.yes_count + self.no_count

    def info(self) -> "ProposalInfo":
        """Summary tuple in the shape the presentation layer reads."""
        return ProposalInfo(
            title=self.title,
            description=self.description,
            yes_count=self.yes_count,
            no_count=self.no_count,
            active=self.active,
        )


class ProposalInfo(NamedTuple):
    """(title, description, yes_count, no_count, active)"""
    title: str
    description: str
    yes_count: int
    no_count: int
    active: bool


class VotePercentages(NamedTuple):
    """Yes/no shares scaled by PERCENTAGE_SCALE."""
    yes_pct: int
    no_pct: int


# =============================================================================
# TALLY MODEL
# =============================================================================

class ProposalTally(BaseModel):
    """
    Everything derived from one proposal's vote counts, read at once.

    Percentages use integer floor division and are not corrected to sum
    to PERCENTAGE_SCALE.
    """
    model_config = ConfigDict(frozen=True)

    proposal_id: int = Field(ge=0)
    yes_count: int = Field(ge=0)
    no_count: int = Field(ge=0)
    total_votes: int = Field(ge=0)
    yes_pct: int = Field(ge=0, le=PERCENTAGE_SCALE)
    no_pct: int = Field(ge=0, le=PERCENTAGE_SCALE)
    approved: bool
    active: bool
