"""Authentication service: login, signup and logout."""

import logging
from decimal import Decimal
from typing import Optional

from bankapp.core.exceptions import AuthFailureError, DuplicateIdentifierError, ValidationError
from bankapp.core.timezone import now_local
from bankapp.domain.models import (
    Account,
    Credential,
    CredentialScheme,
    PasswordCredential,
    PinCredential,
    Role,
    Transaction,
    TransactionKind,
)
from bankapp.repositories.protocols import AccountRepository
from bankapp.services.id_generator import AccountIdGenerator, new_transaction_id
from bankapp.services.session import Session, SessionService

logger = logging.getLogger(__name__)


def make_credential(scheme: CredentialScheme, identifier: str, secret: str) -> Credential:
    """Build the credential variant for ``scheme`` from sign-up material."""
    if scheme == CredentialScheme.PIN:
        return PinCredential(account_number=identifier, pin=secret)
    return PasswordCredential(username=identifier, password=secret)


def assign_account_id(
    scheme: CredentialScheme,
    identifier: str,
    account_repo: AccountRepository,
    id_generator: AccountIdGenerator,
) -> str:
    """
    Pick the ID for a new account.

    PIN accounts are keyed by the account number the holder signs in with;
    password accounts get a generated number.
    """
    if scheme != CredentialScheme.PIN:
        return id_generator.generate()
    if not id_generator.is_well_formed(identifier):
        raise ValidationError(f"Account number must be {id_generator.width} digits")
    if account_repo.exists(identifier):
        raise DuplicateIdentifierError(identifier)
    return identifier


class AuthService:
    """
    Validates credentials against the account store and manages sessions.

    Login failures never say whether the identifier or the secret was wrong.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        id_generator: AccountIdGenerator,
        session_service: SessionService,
        credential_scheme: CredentialScheme = CredentialScheme.PASSWORD,
    ):
        self._account_repo = account_repo
        self._id_generator = id_generator
        self._session_service = session_service
        self._credential_scheme = credential_scheme

    @property
    def credential_scheme(self) -> CredentialScheme:
        return self._credential_scheme

    def authenticate(self, identifier: str, secret: str) -> Account:
        """Return the store account matching the credentials exactly."""
        for account in self._account_repo.list_all():
            if account.credential.matches(identifier, secret):
                return account
        raise AuthFailureError()

    def login(self, identifier: str, secret: str) -> Session:
        """Authenticate and open a session on a copy of the account."""
        try:
            account = self.authenticate(identifier, secret)
        except AuthFailureError:
            logger.warning("Failed login attempt")
            raise
        logger.info("Account %s logged in", account.account_id)
        return self._session_service.start(account)

    def signup(self, name: str, identifier: str, secret: str) -> Session:
        """
        Self-service registration of a regular user.

        The new account starts at a zero balance with a single
        ``account_created`` entry and is signed in immediately.
        """
        name = name.strip()
        if not name or not identifier or not secret:
            raise ValidationError("Please fill in all fields")
        if self._account_repo.get_by_login(identifier) is not None:
            logger.warning("Signup rejected: identifier already taken")
            raise DuplicateIdentifierError(identifier)
        account_id = assign_account_id(
            self._credential_scheme, identifier, self._account_repo, self._id_generator
        )

        now = now_local()
        account = Account(
            account_id=account_id,
            name=name,
            credential=make_credential(self._credential_scheme, identifier, secret),
            role=Role.USER,
            balance=Decimal("0"),
            created_at=now,
        )
        account.record(
            Transaction(
                txn_id=new_transaction_id(),
                kind=TransactionKind.ACCOUNT_CREATED,
                amount=Decimal("0"),
                timestamp=now,
                description="Account created successfully",
            )
        )
        self._account_repo.create(account)
        logger.info("Account %s created by signup", account.account_id)
        return self._session_service.start(account)

    def logout(self, session: Session) -> Optional[Account]:
        """Flush the session back to the store and end it."""
        stored = self._session_service.flush(session)
        logger.info("Account %s logged out", session.account.account_id)
        return stored

    def seed_staff(
        self,
        manager: tuple[str, str],
        clerk: tuple[str, str],
    ) -> list[Account]:
        """
        Create the bank's manager and clerk accounts if they are missing.

        Each tuple is (email, password). Staff sign in by email.
        """
        seeds = [
            ("10000000001", "Bank Manager", Role.MANAGER, manager),
            ("10000000002", "Bank Clerk", Role.CLERK, clerk),
        ]
        created = []
        for account_id, name, role, (email, password) in seeds:
            if self._account_repo.exists(account_id) or self._account_repo.get_by_login(email):
                continue
            account = Account(
                account_id=account_id,
                name=name,
                credential=PasswordCredential(email=email, password=password),
                role=role,
                created_at=now_local(),
            )
            created.append(self._account_repo.create(account))
        return created
