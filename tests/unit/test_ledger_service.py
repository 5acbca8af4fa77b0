"""
Unit tests for LedgerService.

Tests cover:
- Deposits and withdrawals on the actor's own account
- Insufficient-funds refusal leaving no trace
- Staff acting on other accounts (performed_by, descriptions)
- Session read-your-writes after store mutations
- History ordering, date filtering and the staff activity feed
- The balance-equals-ledger invariant
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from bankapp.core.exceptions import (
    InsufficientFundsError,
    NotFoundError,
    PolicyViolationError,
    ValidationError,
)
from bankapp.domain.models import TransactionKind
from bankapp.services import LedgerService


# =============================================================================
# DEPOSIT TESTS
# =============================================================================


class TestDeposit:
    """Tests for deposits."""

    def test_deposit_increases_balance_and_records_entry(
        self,
        ledger_service: LedgerService,
        user_factory,
        account_repo,
    ):
        """
        GIVEN a freshly signed-up user
        WHEN they deposit 100
        THEN store and session both show 100 and one deposit entry
        """
        session = user_factory()

        txn = ledger_service.deposit(session, Decimal("100"))

        stored = account_repo.get_by_id(session.store_key)
        assert stored.balance == Decimal("100")
        assert session.account.balance == Decimal("100")
        assert txn.kind == TransactionKind.DEPOSIT
        assert txn.amount == Decimal("100")
        assert txn.performed_by is None
        assert txn.description == "Deposit"
        kinds = [t.kind for t in stored.transactions]
        assert kinds == [TransactionKind.ACCOUNT_CREATED, TransactionKind.DEPOSIT]
        assert [t.txn_id for t in session.account.transactions] == [t.txn_id for t in stored.transactions]

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5"), "abc"])
    def test_deposit_rejects_non_positive_or_invalid_amount(
        self,
        ledger_service: LedgerService,
        user_factory,
        amount,
    ):
        session = user_factory()

        with pytest.raises(ValidationError):
            ledger_service.deposit(session, amount)

        assert session.account.balance == Decimal("0")
        assert len(session.account.transactions) == 1

    def test_deposit_accepts_string_amount(self, ledger_service, user_factory):
        session = user_factory()

        ledger_service.deposit(session, "12.50")

        assert session.account.balance == Decimal("12.50")

    def test_clerk_deposit_records_performed_by(
        self,
        ledger_service: LedgerService,
        clerk_session,
        funded_user,
        account_repo,
    ):
        """
        GIVEN a clerk and a user holding 100
        WHEN the clerk deposits 30 into the user's account
        THEN the user's balance is 130 and the entry names the clerk
        """
        txn = ledger_service.deposit(clerk_session, Decimal("30"), funded_user.store_key)

        stored = account_repo.get_by_id(funded_user.store_key)
        assert stored.balance == Decimal("130")
        assert txn.performed_by == "Bank Clerk"
        assert txn.description == "Deposit by Bank Clerk"
        # The clerk's own session is untouched
        assert clerk_session.account.balance == Decimal("0")

    def test_deposit_to_unknown_account_raises_not_found(self, ledger_service, clerk_session):
        with pytest.raises(NotFoundError):
            ledger_service.deposit(clerk_session, Decimal("10"), "99999999999")


# =============================================================================
# WITHDRAW TESTS
# =============================================================================


class TestWithdraw:
    """Tests for withdrawals."""

    def test_withdraw_decreases_balance(self, ledger_service, funded_user, account_repo):
        txn = ledger_service.withdraw(funded_user, Decimal("40"))

        assert txn.kind == TransactionKind.WITHDRAW
        assert txn.description == "Withdrawal"
        assert funded_user.account.balance == Decimal("60")
        assert account_repo.get_by_id(funded_user.store_key).balance == Decimal("60")

    def test_withdraw_more_than_balance_fails_without_mutation(
        self,
        ledger_service: LedgerService,
        funded_user,
        account_repo,
    ):
        """
        GIVEN a user holding 100
        WHEN they try to withdraw 150
        THEN InsufficientFundsError is raised and nothing changes
        """
        stored = account_repo.get_by_id(funded_user.store_key)
        count_before = len(stored.transactions)

        with pytest.raises(InsufficientFundsError) as exc_info:
            ledger_service.withdraw(funded_user, Decimal("150"))

        assert exc_info.value.code == "INSUFFICIENT_FUNDS"
        assert stored.balance == Decimal("100")
        assert len(stored.transactions) == count_before
        assert funded_user.account.balance == Decimal("100")

    def test_withdraw_entire_balance_is_allowed(self, ledger_service, funded_user):
        ledger_service.withdraw(funded_user, Decimal("100"))

        assert funded_user.account.balance == Decimal("0")

    def test_manager_withdraw_on_behalf(self, ledger_service, manager_session, funded_user, account_repo):
        txn = ledger_service.withdraw(manager_session, Decimal("25"), funded_user.store_key)

        assert txn.performed_by == "Bank Manager"
        assert txn.description == "Withdrawal by Bank Manager"
        assert account_repo.get_by_id(funded_user.store_key).balance == Decimal("75")


# =============================================================================
# AUTHORIZATION TESTS
# =============================================================================


class TestLedgerAuthorization:
    """Role scoping of ledger operations."""

    def test_user_cannot_deposit_into_other_account(self, ledger_service, user_factory, funded_user):
        other = user_factory()

        with pytest.raises(PolicyViolationError):
            ledger_service.deposit(other, Decimal("10"), funded_user.store_key)

    def test_user_cannot_withdraw_from_other_account(self, ledger_service, user_factory, funded_user, account_repo):
        other = user_factory()

        with pytest.raises(PolicyViolationError):
            ledger_service.withdraw(other, Decimal("10"), funded_user.store_key)

        assert account_repo.get_by_id(funded_user.store_key).balance == Decimal("100")

    def test_user_probe_of_unknown_id_is_a_policy_violation(self, ledger_service, user_factory):
        session = user_factory()

        with pytest.raises(PolicyViolationError):
            ledger_service.deposit(session, Decimal("10"), "12345678901")

    def test_clerk_cannot_transact_on_manager_account(self, ledger_service, clerk_session, manager_session):
        with pytest.raises(PolicyViolationError):
            ledger_service.deposit(clerk_session, Decimal("10"), manager_session.store_key)


# =============================================================================
# SESSION CONSISTENCY TESTS
# =============================================================================


class TestSessionConsistency:
    """The acting session sees its own writes."""

    def test_deposit_after_self_edit_targets_original_store_entry(
        self,
        ledger_service,
        session_service,
        funded_user,
        account_repo,
    ):
        """
        GIVEN a user who changed their account ID in the session only
        WHEN they deposit using the new ID
        THEN the store entry under the old ID is credited
        """
        draft = funded_user.begin_edit()
        draft.account_id = "55555555555"
        session_service.save_profile(funded_user)

        ledger_service.deposit(funded_user, Decimal("5"), "55555555555")

        assert account_repo.get_by_id(funded_user.store_key).balance == Decimal("105")
        assert funded_user.account.balance == Decimal("105")
        assert account_repo.get_by_id("55555555555") is None

    def test_staff_deposit_into_own_account_refreshes_session(self, ledger_service, clerk_session):
        ledger_service.deposit(clerk_session, Decimal("20"))

        assert clerk_session.account.balance == Decimal("20")


# =============================================================================
# HISTORY TESTS
# =============================================================================


class TestHistory:
    """Tests for history and activity reads."""

    def test_history_is_newest_first(self, ledger_service, funded_user):
        ledger_service.withdraw(funded_user, Decimal("10"))

        history = ledger_service.get_history(funded_user)

        assert [t.kind for t in history] == [
            TransactionKind.WITHDRAW,
            TransactionKind.DEPOSIT,
            TransactionKind.ACCOUNT_CREATED,
        ]

    def test_history_oldest_first_on_request(self, ledger_service, funded_user):
        history = ledger_service.get_history(funded_user, newest_first=False)

        assert history[0].kind == TransactionKind.ACCOUNT_CREATED

    def test_history_date_window(self, ledger_service, funded_user):
        deposit = funded_user.account.transactions[-1]

        after = ledger_service.get_history(funded_user, start_date=deposit.timestamp + timedelta(seconds=1))
        upto = ledger_service.get_history(funded_user, end_date=deposit.timestamp)

        assert after == []
        assert deposit in upto

    def test_user_cannot_read_other_history(self, ledger_service, user_factory, funded_user):
        other = user_factory()

        with pytest.raises(PolicyViolationError):
            ledger_service.get_history(other, funded_user.store_key)

    def test_clerk_reads_user_history(self, ledger_service, clerk_session, funded_user):
        history = ledger_service.get_history(clerk_session, funded_user.store_key)

        assert len(history) == 2

    def test_activity_feed_for_clerk_covers_user_accounts_only(
        self,
        ledger_service,
        clerk_session,
        manager_session,
        funded_user,
    ):
        ledger_service.deposit(manager_session, Decimal("1"))

        feed = ledger_service.get_activity(clerk_session)

        assert {e.account_id for e in feed} == {funded_user.store_key}
        assert feed[0].transaction.kind == TransactionKind.DEPOSIT
        assert feed[0].account_name == "Alice"

    def test_activity_feed_denied_to_users(self, ledger_service, funded_user):
        with pytest.raises(PolicyViolationError):
            ledger_service.get_activity(funded_user)

    def test_list_accounts_scoped_by_role(self, ledger_service, manager_session, clerk_session, funded_user):
        assert [a.account_id for a in ledger_service.list_accounts(funded_user)] == [funded_user.store_key]
        assert {a.account_id for a in ledger_service.list_accounts(clerk_session)} == {
            clerk_session.store_key,
            funded_user.store_key,
        }
        assert len(ledger_service.list_accounts(manager_session)) == 3


# =============================================================================
# INVARIANT TESTS
# =============================================================================


class TestBalanceInvariant:
    def test_balance_matches_ledger_after_mixed_operations(
        self,
        ledger_service,
        admin_service,
        manager_session,
        clerk_session,
        funded_user,
        account_repo,
    ):
        ledger_service.withdraw(funded_user, Decimal("33.33"))
        ledger_service.deposit(clerk_session, Decimal("12.01"), funded_user.store_key)
        admin_service.update_account(manager_session, funded_user.store_key, "Alice", Decimal("500"))
        ledger_service.withdraw(manager_session, Decimal("0.99"), funded_user.store_key)
        with pytest.raises(InsufficientFundsError):
            ledger_service.withdraw(funded_user, Decimal("10000"))

        stored = account_repo.get_by_id(funded_user.store_key)
        assert stored.balance == Decimal("499.01")
        assert stored.ledger_total() == stored.balance
        assert funded_user.account.ledger_total() == funded_user.account.balance
