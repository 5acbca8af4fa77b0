"""Transaction domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from bankapp.domain.models.enums import TransactionKind


@dataclass(frozen=True)
class Transaction:
    """
    Ledger entry appended to an account. Never edited or removed.

    - DEPOSIT/WITHDRAW carry the moved amount (always positive)
    - ACCOUNT_CREATED carries the opening balance (0 for self-service signup)
    - EDITED_BY_MANAGER carries amount 0; the balance change of the direct
      set is kept in ``adjustment`` so the ledger still sums to the balance
    """

    txn_id: str
    kind: TransactionKind
    amount: Decimal
    timestamp: datetime
    performed_by: Optional[str] = None
    description: Optional[str] = None
    adjustment: Decimal = field(default_factory=lambda: Decimal("0"))

    def __post_init__(self) -> None:
        if isinstance(self.kind, str) and not isinstance(self.kind, TransactionKind):
            object.__setattr__(self, "kind", TransactionKind(self.kind))

    @property
    def balance_effect(self) -> Decimal:
        """
        Signed change this entry made to the account balance.

        Positive = money added, Negative = money removed.
        """
        if self.kind == TransactionKind.DEPOSIT:
            return self.amount
        elif self.kind == TransactionKind.WITHDRAW:
            return -self.amount
        elif self.kind == TransactionKind.ACCOUNT_CREATED:
            return self.amount
        return self.adjustment
