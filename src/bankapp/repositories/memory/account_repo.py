"""In-memory implementation of AccountRepository."""

from typing import Optional

from bankapp.core.exceptions import DuplicateIdentifierError, NotFoundError
from bankapp.domain.models import Account


class InMemoryAccountRepository:
    """
    Dict-backed account store living for the lifetime of the process.

    Not safe for concurrent writers: balance check-then-write in the ledger
    assumes a single active session.
    """

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}

    def create(self, account: Account) -> Account:
        """Store a new account."""
        if account.account_id in self._accounts:
            raise DuplicateIdentifierError(account.account_id)
        self._accounts[account.account_id] = account
        return account

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        return self._accounts.get(account_id)

    def get_by_login(self, identifier: str) -> Optional[Account]:
        """Retrieve account by username, email or account number."""
        for account in self._accounts.values():
            if identifier in account.login_identifiers:
                return account
        return None

    def exists(self, account_id: str) -> bool:
        return account_id in self._accounts

    def list_all(self) -> list[Account]:
        """List all accounts."""
        return list(self._accounts.values())

    def update(self, account: Account) -> Account:
        """Update an existing account."""
        if account.account_id not in self._accounts:
            raise NotFoundError("Account", account.account_id)
        self._accounts[account.account_id] = account
        return account

    def rekey(self, old_id: str, new_id: str) -> Account:
        """Move the account stored under ``old_id`` to ``new_id``."""
        if old_id not in self._accounts:
            raise NotFoundError("Account", old_id)
        if old_id == new_id:
            return self._accounts[old_id]
        if new_id in self._accounts:
            raise DuplicateIdentifierError(new_id)

        rebuilt: dict[str, Account] = {}
        for key, account in self._accounts.items():
            if key == old_id:
                account.account_id = new_id
                rebuilt[new_id] = account
            else:
                rebuilt[key] = account
        self._accounts = rebuilt
        return rebuilt[new_id]

    def delete(self, account_id: str) -> None:
        """Delete an account."""
        self._accounts.pop(account_id, None)

    def __len__(self) -> int:
        return len(self._accounts)
