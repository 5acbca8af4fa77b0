"""Credential variants for the two sign-in schemes."""

from dataclasses import dataclass
from typing import Optional, Union

from bankapp.domain.models.enums import CredentialScheme


@dataclass(frozen=True)
class PinCredential:
    """(account number, PIN) pair used by the ATM variant."""

    account_number: str
    pin: str

    scheme = CredentialScheme.PIN

    @property
    def login_identifiers(self) -> tuple[str, ...]:
        return (self.account_number,)

    def matches(self, identifier: str, secret: str) -> bool:
        """Exact, case-sensitive comparison of both halves."""
        return identifier == self.account_number and secret == self.pin


@dataclass(frozen=True)
class PasswordCredential:
    """
    (username or email, password) used by the bank variant.

    Regular users sign up with a username; seeded staff accounts only carry
    an email. Either one is accepted as the login identifier.
    """

    password: str
    username: Optional[str] = None
    email: Optional[str] = None

    scheme = CredentialScheme.PASSWORD

    def __post_init__(self) -> None:
        if not self.username and not self.email:
            raise ValueError("PasswordCredential needs a username or an email")

    @property
    def login_identifiers(self) -> tuple[str, ...]:
        return tuple(i for i in (self.username, self.email) if i)

    def matches(self, identifier: str, secret: str) -> bool:
        return identifier in self.login_identifiers and secret == self.password


Credential = Union[PinCredential, PasswordCredential]
