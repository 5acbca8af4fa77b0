"""Repository layer - data access abstractions and implementations."""

from bankapp.repositories.protocols import AccountRepository
from bankapp.repositories.memory import InMemoryAccountRepository

__all__ = [
    "AccountRepository",
    "InMemoryAccountRepository",
]
