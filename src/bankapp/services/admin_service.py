"""Manager-only account administration."""

import logging
from decimal import Decimal
from typing import Optional

from bankapp.core.exceptions import DuplicateIdentifierError, NotFoundError, ValidationError
from bankapp.core.timezone import now_local
from bankapp.domain.models import (
    Account,
    Capability,
    CredentialScheme,
    Role,
    Transaction,
    TransactionKind,
)
from bankapp.repositories.protocols import AccountRepository
from bankapp.services.auth_service import assign_account_id, make_credential
from bankapp.services.id_generator import AccountIdGenerator, new_transaction_id
from bankapp.services.ledger_service import Amount, to_amount
from bankapp.services.policy import AuthorizationPolicy
from bankapp.services.session import Session

logger = logging.getLogger(__name__)


class AdminService:
    """
    Create, edit and delete accounts on behalf of a manager.

    Every method checks the actor's role before touching the store.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        id_generator: AccountIdGenerator,
        policy: AuthorizationPolicy,
        credential_scheme: CredentialScheme = CredentialScheme.PASSWORD,
    ):
        self._account_repo = account_repo
        self._id_generator = id_generator
        self._policy = policy
        self._credential_scheme = credential_scheme

    def create_account(
        self,
        session: Session,
        name: str,
        identifier: str,
        secret: str,
        initial_balance: Amount = Decimal("0"),
    ) -> Account:
        """
        Open a regular-user account with a chosen opening balance.

        The opening balance is recorded as the amount of the
        ``account_created`` entry.
        """
        self._policy.require(session, Capability.CREATE_ACCOUNT, "create accounts")

        name = name.strip()
        if not name or not identifier or not secret:
            raise ValidationError("Please fill in all fields")
        balance = to_amount(initial_balance)
        if balance < 0:
            raise ValidationError("Initial balance cannot be negative")
        if self._account_repo.get_by_login(identifier) is not None:
            raise DuplicateIdentifierError(identifier)
        account_id = assign_account_id(
            self._credential_scheme, identifier, self._account_repo, self._id_generator
        )

        now = now_local()
        account = Account(
            account_id=account_id,
            name=name,
            credential=make_credential(self._credential_scheme, identifier, secret),
            role=Role.USER,
            balance=balance,
            created_at=now,
        )
        account.record(
            Transaction(
                txn_id=new_transaction_id(),
                kind=TransactionKind.ACCOUNT_CREATED,
                amount=balance,
                timestamp=now,
                performed_by=session.actor_name,
                description=(
                    f"Account created by {session.actor_name} "
                    f"with initial balance ${balance}"
                ),
            )
        )
        self._account_repo.create(account)
        logger.info("Account %s created by %s", account.account_id, session.store_key)
        return account

    def update_account(
        self,
        session: Session,
        target_id: str,
        name: str,
        balance: Amount,
    ) -> Account:
        """
        Overwrite an account's name and balance.

        The balance is set, not adjusted. The ``edited_by_manager`` entry has
        amount 0 and keeps the signed difference in ``adjustment``.
        """
        self._policy.require(session, Capability.EDIT_ANY, "edit accounts")
        account = self._get(session, target_id)

        name = name.strip()
        if not name:
            raise ValidationError("Name cannot be empty")
        new_balance = to_amount(balance)
        if new_balance < 0:
            raise ValidationError("Balance cannot be negative")

        adjustment = new_balance - account.balance
        account.name = name
        account.balance = new_balance
        account.record(
            Transaction(
                txn_id=new_transaction_id(),
                kind=TransactionKind.EDITED_BY_MANAGER,
                amount=Decimal("0"),
                timestamp=now_local(),
                performed_by=session.actor_name,
                description=f"Account edited by {session.actor_name}",
                adjustment=adjustment,
            )
        )
        self._account_repo.update(account)
        if session.is_owner(account.account_id):
            session.absorb_admin_edit(account)
        logger.info("Account %s edited by %s (adjustment %s)", account.account_id, session.store_key, adjustment)
        return account

    def delete_account(self, session: Session, target_id: str) -> None:
        """Remove an account and its history from the store. No tombstone is kept."""
        self._policy.require(session, Capability.DELETE_ACCOUNT, "delete accounts")
        account = self._get(session, target_id)
        if session.is_owner(account.account_id):
            raise ValidationError("Cannot delete the account you are signed in with")

        self._account_repo.delete(account.account_id)
        logger.info("Account %s deleted by %s", account.account_id, session.store_key)

    def _get(self, session: Session, target_id: Optional[str]) -> Account:
        key = session.resolve(target_id)
        account = self._account_repo.get_by_id(key)
        if not account:
            raise NotFoundError("Account", key)
        self._policy.require_view(session, account)
        return account
