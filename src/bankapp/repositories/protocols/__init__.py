"""Repository protocol definitions (interfaces)."""

from bankapp.repositories.protocols.account_repo import AccountRepository

__all__ = [
    "AccountRepository",
]
