"""Pydantic schemas validating UI input and rendering results."""

from bankapp.schemas.auth import (
    LoginRequest,
    PinLoginRequest,
    PinSignupRequest,
    PasswordSignupRequest,
)
from bankapp.schemas.ledger import (
    AmountRequest,
    ProfileUpdateRequest,
    CreateAccountRequest,
    UpdateAccountRequest,
    HistoryRequest,
)
from bankapp.schemas.account import (
    TransactionResponse,
    AccountResponse,
    AccountListResponse,
    ActivityEntryResponse,
)

__all__ = [
    "LoginRequest",
    "PinLoginRequest",
    "PinSignupRequest",
    "PasswordSignupRequest",
    "AmountRequest",
    "ProfileUpdateRequest",
    "CreateAccountRequest",
    "UpdateAccountRequest",
    "HistoryRequest",
    "TransactionResponse",
    "AccountResponse",
    "AccountListResponse",
    "ActivityEntryResponse",
]
