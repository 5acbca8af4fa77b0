"""In-memory repository implementations."""

from bankapp.repositories.memory.account_repo import InMemoryAccountRepository

__all__ = [
    "InMemoryAccountRepository",
]
