"""Domain models package."""

from bankapp.domain.models.enums import (
    Role,
    TransactionKind,
    CredentialScheme,
    ProductVariant,
    Capability,
    View,
)
from bankapp.domain.models.credentials import Credential, PinCredential, PasswordCredential
from bankapp.domain.models.transaction import Transaction
from bankapp.domain.models.account import Account

__all__ = [
    "Role",
    "TransactionKind",
    "CredentialScheme",
    "ProductVariant",
    "Capability",
    "View",
    "Credential",
    "PinCredential",
    "PasswordCredential",
    "Transaction",
    "Account",
]
