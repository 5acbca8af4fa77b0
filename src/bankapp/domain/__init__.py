"""Domain layer - pure business models with no external dependencies."""

from bankapp.domain.models import (
    Account,
    Transaction,
    PinCredential,
    PasswordCredential,
    Role,
    TransactionKind,
    Capability,
)

__all__ = [
    "Account",
    "Transaction",
    "PinCredential",
    "PasswordCredential",
    "Role",
    "TransactionKind",
    "Capability",
]
