"""Role-based authorization policy."""

import logging
from typing import Iterable

from bankapp.core.exceptions import PolicyViolationError
from bankapp.domain.models import Account, Capability, Role
from bankapp.services.session import Session

logger = logging.getLogger(__name__)


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.USER: frozenset({
        Capability.EDIT_OWN_PROFILE,
        Capability.TRANSACT_OWN,
    }),
    Role.CLERK: frozenset({
        Capability.EDIT_OWN_PROFILE,
        Capability.TRANSACT_OWN,
        Capability.VIEW_ANY,
        Capability.TRANSACT_ANY,
    }),
    Role.MANAGER: frozenset(Capability),
}

# Roles whose accounts each staff role may reach; clerks only serve regular users.
ROLE_REACH: dict[Role, frozenset[Role]] = {
    Role.USER: frozenset(),
    Role.CLERK: frozenset({Role.USER}),
    Role.MANAGER: frozenset(Role),
}


class AuthorizationPolicy:
    """
    Capability checks for an actor's session against a target account.

    ``allows`` and the ``can_*`` helpers answer yes/no; ``require`` raises
    PolicyViolationError so the facade can report the refusal as a result.
    """

    def __init__(
        self,
        capabilities: dict[Role, frozenset[Capability]] = ROLE_CAPABILITIES,
        reach: dict[Role, frozenset[Role]] = ROLE_REACH,
    ):
        self._capabilities = capabilities
        self._reach = reach

    def allows(self, role: Role, capability: Capability) -> bool:
        return capability in self._capabilities.get(role, frozenset())

    def reaches(self, role: Role, target: Account) -> bool:
        return target.role in self._reach.get(role, frozenset())

    def can_view(self, session: Session, target: Account) -> bool:
        if session.is_owner(target.account_id):
            return True
        return self.allows(session.role, Capability.VIEW_ANY) and self.reaches(session.role, target)

    def can_transact(self, session: Session, target: Account) -> bool:
        if session.is_owner(target.account_id):
            return self.allows(session.role, Capability.TRANSACT_OWN)
        return self.allows(session.role, Capability.TRANSACT_ANY) and self.reaches(session.role, target)

    def visible(self, session: Session, accounts: Iterable[Account]) -> list[Account]:
        """Filter ``accounts`` down to those the actor may view."""
        return [a for a in accounts if self.can_view(session, a)]

    def require(self, session: Session, capability: Capability, action: str) -> None:
        if not self.allows(session.role, capability):
            self._deny(session, action)

    def require_view(self, session: Session, target: Account) -> None:
        if not self.can_view(session, target):
            self._deny(session, f"view account {target.account_id}")

    def require_transact(self, session: Session, target: Account, action: str) -> None:
        if not self.can_transact(session, target):
            self._deny(session, f"{action} on account {target.account_id}")

    @staticmethod
    def _deny(session: Session, action: str) -> None:
        logger.warning("Denied %s for %s (%s)", action, session.store_key, session.role.value)
        raise PolicyViolationError(action, session.role.value)
