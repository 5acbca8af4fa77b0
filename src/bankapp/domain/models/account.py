"""Account domain model."""

import copy
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Optional

from bankapp.domain.models.credentials import Credential, PinCredential
from bankapp.domain.models.enums import Role
from bankapp.domain.models.transaction import Transaction


@dataclass
class Account:
    """
    Bank account record held by the account store.

    ``balance`` only changes through the ledger (deposit, withdraw) or a
    manager's direct edit; ``transactions`` is append-only and ordered
    oldest first.
    """

    account_id: str
    name: str
    credential: Credential
    role: Role = Role.USER
    balance: Decimal = field(default_factory=lambda: Decimal("0"))
    transactions: list[Transaction] = field(default_factory=list)
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.role, str) and not isinstance(self.role, Role):
            self.role = Role(self.role)

    @property
    def login_identifiers(self) -> tuple[str, ...]:
        return self.credential.login_identifiers

    def record(self, transaction: Transaction) -> None:
        """Append a transaction to the history."""
        self.transactions.append(transaction)

    def ledger_total(self) -> Decimal:
        """Sum of the balance effects of every recorded transaction."""
        return sum((t.balance_effect for t in self.transactions), Decimal("0"))

    def renumber(self, account_id: str) -> None:
        """Change the account ID; a PIN credential's account number follows it."""
        self.account_id = account_id
        if isinstance(self.credential, PinCredential):
            self.credential = replace(self.credential, account_number=account_id)

    def snapshot(self) -> "Account":
        """Return a detached copy sharing no mutable state with this record."""
        return copy.deepcopy(self)
