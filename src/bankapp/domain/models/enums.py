"""Enumerations for domain models."""

from enum import Enum


class Role(str, Enum):
    """Account holder role. Assigned at creation, never changed."""

    USER = "user"
    CLERK = "clerk"
    MANAGER = "manager"


class TransactionKind(str, Enum):
    """Kinds of ledger transactions."""

    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    ACCOUNT_CREATED = "account_created"
    EDITED_BY_MANAGER = "edited_by_manager"
    EDITED_BY_CLERK = "edited_by_clerk"


class CredentialScheme(str, Enum):
    """Shape of the credential used to sign in."""

    PIN = "pin"  # (account number, PIN)
    PASSWORD = "password"  # (username or email, password)


class ProductVariant(str, Enum):
    """Product configurations sharing the same ledger core."""

    ATM = "atm"
    BANK = "bank"


class Capability(str, Enum):
    """Operations gated by the authorization policy."""

    EDIT_OWN_PROFILE = "edit_own_profile"
    TRANSACT_OWN = "transact_own"
    VIEW_ANY = "view_any"
    TRANSACT_ANY = "transact_any"
    CREATE_ACCOUNT = "create_account"
    EDIT_ANY = "edit_any"
    DELETE_ACCOUNT = "delete_account"


class View(str, Enum):
    """Navigation views a session can be on."""

    USER_INFO = "user_info"
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    HISTORY = "history"
    ACCOUNTS = "accounts"
    ACTIVITY = "activity"
