"""
Access Controller

Holds the single administrator identity. Only the administrator may
create or close proposals, and only the administrator may hand the role
to someone else.

DESIGN DECISION: The administrator belongs to a ledger instance, never
to the process. Two ledgers in one process have independent
administrators.
"""

from typing import Any

from govledger.errors import InvalidInputError, UnauthorizedError


# Conventional "no address" value used by wallet front ends
ZERO_ADDRESS = "0x" + "0" * 40


def is_null_identity(identity: Any) -> bool:
    """True for None, non-strings, blank strings and the zero address."""
    if not isinstance(identity, str):
        return True
    value = identity.strip()
    return not value or value.lower() == ZERO_ADDRESS


class AccessController:
    """Gate for administrator-only operations."""

    def __init__(self, administrator: str):
        if is_null_identity(administrator):
            raise InvalidInputError(
                "Administrator identity cannot be empty",
                administrator=administrator,
            )
        self._administrator = administrator

    @property
    def administrator(self) -> str:
        return self._administrator

    def is_administrator(self, identity: Any) -> bool:
        return identity == self._administrator

    def require_administrator(self, caller: Any, action: str) -> None:
        """Raise UnauthorizedError unless `caller` holds the role."""
        if not self.is_administrator(caller):
            raise UnauthorizedError(caller=caller, action=action)

    def transfer(self, new_admin: Any, caller: Any) -> str:
        """
        Replace the administrator.

        Checks:
        - caller is the current administrator
        - new_admin is not the null identity

        Returns:
            The previous administrator
        """
        self.require_administrator(caller, "transfer the administrator role")
        if is_null_identity(new_admin):
            raise InvalidInputError(
                "New administrator cannot be the null identity",
                new_admin=new_admin,
            )

        previous = self._administrator
        self._administrator = new_admin
        return previous
