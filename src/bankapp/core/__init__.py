"""Core utilities and shared functionality."""

from bankapp.core.timezone import (
    now_local,
    to_local,
    parse_datetime_local,
    get_bank_tz,
)
from bankapp.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    AuthFailureError,
    DuplicateIdentifierError,
    InsufficientFundsError,
    PolicyViolationError,
    NotAuthenticatedError,
)

__all__ = [
    "now_local",
    "to_local",
    "parse_datetime_local",
    "get_bank_tz",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "AuthFailureError",
    "DuplicateIdentifierError",
    "InsufficientFundsError",
    "PolicyViolationError",
    "NotAuthenticatedError",
]
