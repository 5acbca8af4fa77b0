"""Ledger service for balance mutation and transaction history."""

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from bankapp.core.exceptions import InsufficientFundsError, NotFoundError, ValidationError
from bankapp.core.timezone import now_local
from bankapp.domain.models import Account, Capability, Transaction, TransactionKind
from bankapp.domain.views import ActivityEntry
from bankapp.repositories.protocols import AccountRepository
from bankapp.services.id_generator import new_transaction_id
from bankapp.services.policy import AuthorizationPolicy
from bankapp.services.session import Session

logger = logging.getLogger(__name__)

Amount = Union[Decimal, int, str]


def to_amount(value: Amount) -> Decimal:
    """Coerce ``value`` to Decimal, rejecting floats and non-numbers."""
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}")
    return amount


class LedgerService:
    """
    Service for deposits, withdrawals and reading account history.

    Every mutation is applied to the store record first and then mirrored
    into the acting session when it targets the session's own account.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        policy: AuthorizationPolicy,
    ):
        self._account_repo = account_repo
        self._policy = policy

    def get_account(self, session: Session, account_id: Optional[str] = None) -> Account:
        """Get an account the actor may view."""
        key = session.resolve(account_id)
        if key != session.store_key:
            self._policy.require(session, Capability.VIEW_ANY, f"view account {key}")
        account = self._account_repo.get_by_id(key)
        if not account:
            raise NotFoundError("Account", key)
        self._policy.require_view(session, account)
        return account

    def list_accounts(self, session: Session) -> list[Account]:
        """List the accounts the actor may view (only their own for users)."""
        return self._policy.visible(session, self._account_repo.list_all())

    def deposit(
        self,
        session: Session,
        amount: Amount,
        target_account_id: Optional[str] = None,
    ) -> Transaction:
        """
        Add ``amount`` to the target account (the actor's own by default).

        Deposits made on someone else's account record the actor's name.
        """
        amount = self._validate_amount(amount)
        account = self._get_target(session, target_account_id, "deposit")
        self._policy.require_transact(session, account, "deposit")

        on_behalf = not session.is_owner(account.account_id)
        transaction = Transaction(
            txn_id=new_transaction_id(),
            kind=TransactionKind.DEPOSIT,
            amount=amount,
            timestamp=now_local(),
            performed_by=session.actor_name if on_behalf else None,
            description=f"Deposit by {session.actor_name}" if on_behalf else "Deposit",
        )
        account.balance += amount
        account.record(transaction)
        self._commit(session, account)
        logger.info("Deposited %s into %s", amount, account.account_id)
        return transaction

    def withdraw(
        self,
        session: Session,
        amount: Amount,
        target_account_id: Optional[str] = None,
    ) -> Transaction:
        """
        Remove ``amount`` from the target account.

        Raises InsufficientFundsError, leaving balance and history untouched,
        when the amount exceeds the current balance.
        """
        amount = self._validate_amount(amount)
        account = self._get_target(session, target_account_id, "withdraw")
        self._policy.require_transact(session, account, "withdraw")

        if amount > account.balance:
            logger.warning(
                "Withdrawal of %s from %s refused: balance %s",
                amount, account.account_id, account.balance,
            )
            raise InsufficientFundsError(str(amount), str(account.balance))

        on_behalf = not session.is_owner(account.account_id)
        transaction = Transaction(
            txn_id=new_transaction_id(),
            kind=TransactionKind.WITHDRAW,
            amount=amount,
            timestamp=now_local(),
            performed_by=session.actor_name if on_behalf else None,
            description=f"Withdrawal by {session.actor_name}" if on_behalf else "Withdrawal",
        )
        account.balance -= amount
        account.record(transaction)
        self._commit(session, account)
        logger.info("Withdrew %s from %s", amount, account.account_id)
        return transaction

    def get_history(
        self,
        session: Session,
        account_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        newest_first: bool = True,
    ) -> list[Transaction]:
        """
        Transactions of one account, optionally limited to a time window.

        The actor's own history is read from the session copy, which may
        hold entries not yet flushed to the store.
        """
        if session.is_owner(account_id):
            transactions = list(session.account.transactions)
        else:
            transactions = list(self.get_account(session, account_id).transactions)

        if start_date is not None:
            transactions = [t for t in transactions if t.timestamp >= start_date]
        if end_date is not None:
            transactions = [t for t in transactions if t.timestamp <= end_date]
        if newest_first:
            transactions.reverse()
        return transactions

    def get_activity(self, session: Session) -> list[ActivityEntry]:
        """
        Combined feed of every transaction the actor may view, newest first.

        Staff only; regular users read their own history instead.
        """
        self._policy.require(session, Capability.VIEW_ANY, "view all activity")
        entries = [
            ActivityEntry(account_id=a.account_id, account_name=a.name, transaction=t)
            for a in self.list_accounts(session)
            for t in a.transactions
        ]
        # Ties on timestamp keep the later-recorded entry first
        ordered = sorted(
            enumerate(entries),
            key=lambda pair: (pair[1].transaction.timestamp, pair[0]),
            reverse=True,
        )
        return [entry for _, entry in ordered]

    def _get_target(self, session: Session, target_account_id: Optional[str], action: str) -> Account:
        key = session.resolve(target_account_id)
        if key != session.store_key:
            # Refuse before lookup so users cannot probe which IDs exist
            self._policy.require(session, Capability.TRANSACT_ANY, action)
        account = self._account_repo.get_by_id(key)
        if not account:
            raise NotFoundError("Account", key)
        return account

    def _commit(self, session: Session, account: Account) -> None:
        self._account_repo.update(account)
        if session.is_owner(account.account_id):
            session.absorb_ledger(account)

    @staticmethod
    def _validate_amount(value: Amount) -> Decimal:
        amount = to_amount(value)
        if amount <= 0:
            raise ValidationError("Amount must be greater than 0")
        return amount
