"""Identifier generation for accounts and transactions."""

import random
import uuid
from typing import Optional

from bankapp.repositories.protocols import AccountRepository


class AccountIdGenerator:
    """
    Random fixed-width numeric account IDs.

    Draws from [10**(width-1), 10**width) and re-draws while the candidate
    is already stored, so a returned ID never collides with a live account.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        width: int = 11,
        rng: Optional[random.Random] = None,
    ):
        if width < 1:
            raise ValueError("width must be positive")
        self._account_repo = account_repo
        self._width = width
        self._rng = rng or random.SystemRandom()
        self._low = 10 ** (width - 1)
        self._high = 10**width - 1

    @property
    def width(self) -> int:
        return self._width

    def generate(self) -> str:
        """Return an unused account ID."""
        while True:
            candidate = str(self._rng.randint(self._low, self._high))
            if not self._account_repo.exists(candidate):
                return candidate

    def is_well_formed(self, account_id: str) -> bool:
        """Return True if ``account_id`` has the external ID format."""
        return account_id.isdigit() and len(account_id) == self._width


def new_transaction_id() -> str:
    """Return a unique transaction ID."""
    return str(uuid.uuid4())
