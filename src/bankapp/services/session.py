"""Login session state and its synchronisation with the account store."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from bankapp.core.exceptions import (
    DuplicateIdentifierError,
    ValidationError,
)
from bankapp.domain.models import Account, Role, View
from bankapp.repositories.protocols import AccountRepository
from bankapp.services.id_generator import AccountIdGenerator

logger = logging.getLogger(__name__)


def default_view(role: Role) -> View:
    """Landing view after login: dashboards for staff, account info for users."""
    return View.USER_INFO if role == Role.USER else View.ACCOUNTS


@dataclass
class ProfileDraft:
    """Uncommitted edit of the session holder's name and account ID."""

    name: str
    account_id: str


@dataclass
class Session:
    """
    The signed-in actor's detached copy of their account.

    ``store_key`` is the ID the account had in the store when the session
    started. Self-service edits change ``account.account_id`` only; the store
    is re-keyed when the session is flushed on logout.
    """

    store_key: str
    account: Account
    view: View = View.USER_INFO
    draft: Optional[ProfileDraft] = field(default=None)

    @property
    def role(self) -> Role:
        return self.account.role

    @property
    def actor_name(self) -> str:
        return self.account.name

    def resolve(self, account_id: Optional[str]) -> str:
        """
        Map a target ID to a store key.

        ``None`` and the session's own (possibly edited) ID both resolve to
        the session's store key.
        """
        if account_id is None or account_id == self.account.account_id:
            return self.store_key
        return account_id

    def is_owner(self, account_id: Optional[str]) -> bool:
        return self.resolve(account_id) == self.store_key

    def absorb_ledger(self, account: Account) -> None:
        """Refresh the cached balance and history after a store mutation."""
        self.account.balance = account.balance
        self.account.transactions = list(account.transactions)

    def absorb_admin_edit(self, account: Account) -> None:
        """Refresh name, balance and history after a manager edit."""
        self.absorb_ledger(account)
        self.account.name = account.name

    # Profile edit flow

    def begin_edit(self) -> ProfileDraft:
        self.draft = ProfileDraft(name=self.account.name, account_id=self.account.account_id)
        return self.draft

    def cancel_edit(self) -> None:
        self.draft = None


class SessionService:
    """Copies accounts out of the store at login and back at logout."""

    def __init__(self, account_repo: AccountRepository, id_generator: AccountIdGenerator):
        self._account_repo = account_repo
        self._id_generator = id_generator

    def start(self, account: Account) -> Session:
        """Open a session holding a detached copy of ``account``."""
        return Session(
            store_key=account.account_id,
            account=account.snapshot(),
            view=default_view(account.role),
        )

    def save_profile(self, session: Session, draft: Optional[ProfileDraft] = None) -> Account:
        """
        Commit a profile draft to the session.

        The store is not touched; the new name and ID reach it on logout.
        Raises ValidationError for an empty name or malformed ID and
        DuplicateIdentifierError if the ID belongs to another account.
        """
        draft = draft or session.draft
        if draft is None:
            raise ValidationError("No profile edit in progress")

        name = draft.name.strip()
        if not name:
            raise ValidationError("Name cannot be empty")
        if not self._id_generator.is_well_formed(draft.account_id):
            raise ValidationError(
                f"Account number must be {self._id_generator.width} digits"
            )
        if draft.account_id != session.store_key and self._account_repo.exists(draft.account_id):
            raise DuplicateIdentifierError(draft.account_id)

        session.account.name = name
        session.account.renumber(draft.account_id)
        session.draft = None
        return session.account

    def flush(self, session: Session) -> Optional[Account]:
        """
        Write the session's name, balance and transactions back to the store.

        A changed account ID re-keys the store record; for PIN accounts the
        sign-in account number moves with it.

        Returns the updated store record, or None if the account was deleted
        while the session was open.
        """
        stored = self._account_repo.get_by_id(session.store_key)
        if stored is None:
            logger.warning("Session account %s no longer in store; nothing to flush", session.store_key)
            return None

        new_id = session.account.account_id
        if new_id != session.store_key:
            if self._account_repo.exists(new_id):
                raise DuplicateIdentifierError(new_id)
            stored = self._account_repo.rekey(session.store_key, new_id)
            logger.info("Account %s re-keyed to %s", session.store_key, new_id)

        stored.name = session.account.name
        stored.credential = session.account.credential
        stored.balance = session.account.balance
        stored.transactions = list(session.account.transactions)
        return self._account_repo.update(stored)

