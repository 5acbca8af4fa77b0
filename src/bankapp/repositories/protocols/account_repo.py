"""Account repository protocol."""

from typing import Protocol, Optional

from bankapp.domain.models import Account


class AccountRepository(Protocol):
    """Interface for the account store, the single source of truth."""

    def create(self, account: Account) -> Account:
        """Store a new account."""
        ...

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        ...

    def get_by_login(self, identifier: str) -> Optional[Account]:
        """Retrieve the account whose credential uses this login identifier."""
        ...

    def exists(self, account_id: str) -> bool:
        """Return True if an account with this ID is stored."""
        ...

    def list_all(self) -> list[Account]:
        """List all accounts in creation order."""
        ...

    def update(self, account: Account) -> Account:
        """Replace the stored record for ``account.account_id``."""
        ...

    def rekey(self, old_id: str, new_id: str) -> Account:
        """Move an account to a new ID, keeping its position."""
        ...

    def delete(self, account_id: str) -> None:
        """Delete an account together with its transactions (hard delete)."""
        ...
