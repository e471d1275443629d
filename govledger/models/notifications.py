"""
Notification Models

The ledger announces every accepted mutation to its listeners. There are
exactly three kinds of notification, each a frozen record of named fields.

DESIGN DECISION: Notifications describe what happened, never how to
display it. Listeners (a UI, an indexer, a test) decide what to do.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class NotificationKind(str, Enum):
    """Kinds of notification the ledger emits."""
    PROPOSAL_CREATED = "ProposalCreated"
    VOTED = "Voted"
    PROPOSAL_CLOSED = "ProposalClosed"


class LedgerNotification(BaseModel):
    """Fields shared by every notification."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(
        ...,
        ge=0,
        description="Proposal the notification is about"
    )
    timestamp: int = Field(
        ...,
        ge=0,
        description="Request time in seconds since epoch"
    )

    def to_log_dict(self) -> dict:
        return self.model_dump(mode="json")


class ProposalCreated(LedgerNotification):
    kind: Literal[NotificationKind.PROPOSAL_CREATED] = NotificationKind.PROPOSAL_CREATED
    title: str
    creator: str


class Voted(LedgerNotification):
    kind: Literal[NotificationKind.VOTED] = NotificationKind.VOTED
    voter: str
    support: bool


class ProposalClosed(LedgerNotification):
    kind: Literal[NotificationKind.PROPOSAL_CLOSED] = NotificationKind.PROPOSAL_CLOSED
    yes_count: int = Field(ge=0)
    no_count: int = Field(ge=0)


Notification = Annotated[
    Union[ProposalCreated, Voted, ProposalClosed],
    Field(discriminator="kind"),
]
