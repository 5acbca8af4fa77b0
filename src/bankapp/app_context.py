"""Application context for in-process service management.

This is the operation boundary a front-end calls into. Every operation
returns an OperationResult; domain failures never escape as exceptions.
"""

import functools
import logging
import random
from decimal import Decimal
from typing import Callable, Optional, Union

from pydantic import ValidationError as SchemaValidationError

from bankapp.config.logging_config import setup_logging
from bankapp.config.settings import Settings, get_settings, set_settings
from bankapp.config.variants import VariantProfile, get_profile
from bankapp.core.exceptions import AppError, NotAuthenticatedError, ValidationError
from bankapp.domain.models import Capability, CredentialScheme, View
from bankapp.domain.views import OperationResult
from bankapp.repositories.memory import InMemoryAccountRepository
from bankapp.repositories.protocols import AccountRepository
from bankapp.schemas import (
    AccountListResponse,
    AccountResponse,
    ActivityEntryResponse,
    AmountRequest,
    CreateAccountRequest,
    HistoryRequest,
    LoginRequest,
    PasswordSignupRequest,
    PinLoginRequest,
    PinSignupRequest,
    ProfileUpdateRequest,
    TransactionResponse,
    UpdateAccountRequest,
)
from bankapp.services import (
    AccountIdGenerator,
    AdminService,
    AuthorizationPolicy,
    AuthService,
    LedgerService,
    ProfileDraft,
    Session,
    SessionService,
)

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]


def _schema_message(exc: SchemaValidationError) -> str:
    """First human-readable message from a pydantic error."""
    error = exc.errors()[0]
    if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
        return str(error["ctx"]["error"])
    return error["msg"]


def operation(method: Callable[..., OperationResult]) -> Callable[..., OperationResult]:
    """Turn AppError and schema failures raised by ``method`` into failed results."""

    @functools.wraps(method)
    def wrapper(self: "AppContext", *args, **kwargs) -> OperationResult:
        try:
            return method(self, *args, **kwargs)
        except AppError as exc:
            return OperationResult.failure(exc.code, exc.message)
        except SchemaValidationError as exc:
            return OperationResult.failure("VALIDATION_ERROR", _schema_message(exc))

    return wrapper


class AppContext:
    """
    Application context providing in-process access to all services.

    Owns the account store and at most one active session. The store can be
    injected so several contexts (or tests) can share one.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        account_repo: Optional[AccountRepository] = None,
        rng: Optional[random.Random] = None,
    ):
        self._settings = settings
        self._account_repo = account_repo
        self._rng = rng
        self._session: Optional[Session] = None
        self._initialized = False

        # Service instances (lazy initialized)
        self._id_generator: Optional[AccountIdGenerator] = None
        self._policy: Optional[AuthorizationPolicy] = None
        self._session_service: Optional[SessionService] = None
        self._auth_service: Optional[AuthService] = None
        self._ledger_service: Optional[LedgerService] = None
        self._admin_service: Optional[AdminService] = None

    def initialize(self, settings: Optional[Settings] = None) -> None:
        """
        Initialize or reinitialize the application.

        Reinitializing discards any open session without flushing it.
        """
        if settings:
            self._settings = settings
        if self._settings is None:
            self._settings = get_settings()
        set_settings(self._settings)

        if self._account_repo is None:
            self._account_repo = InMemoryAccountRepository()

        # Reset service instances to force recreation
        self._session = None
        self._id_generator = None
        self._policy = None
        self._session_service = None
        self._auth_service = None
        self._ledger_service = None
        self._admin_service = None

        if self.profile.has_staff and self._settings.seed_staff_accounts:
            self.auth.seed_staff(
                manager=(self._settings.manager_email, self._settings.manager_password),
                clerk=(self._settings.clerk_email, self._settings.clerk_password),
            )

        self._initialized = True
        logger.info("%s initialized (%s variant)", self._settings.app_name, self.profile.variant.value)

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    @property
    def profile(self) -> VariantProfile:
        return get_profile(self.settings.variant)

    @property
    def account_repo(self) -> AccountRepository:
        if self._account_repo is None:
            self._account_repo = InMemoryAccountRepository()
        return self._account_repo

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    # Service accessors

    @property
    def id_generator(self) -> AccountIdGenerator:
        if self._id_generator is None:
            self._id_generator = AccountIdGenerator(
                self.account_repo,
                width=self.settings.account_id_length,
                rng=self._rng,
            )
        return self._id_generator

    @property
    def policy(self) -> AuthorizationPolicy:
        if self._policy is None:
            self._policy = AuthorizationPolicy()
        return self._policy

    @property
    def sessions(self) -> SessionService:
        if self._session_service is None:
            self._session_service = SessionService(self.account_repo, self.id_generator)
        return self._session_service

    @property
    def auth(self) -> AuthService:
        """Get the AuthService instance."""
        if self._auth_service is None:
            self._auth_service = AuthService(
                account_repo=self.account_repo,
                id_generator=self.id_generator,
                session_service=self.sessions,
                credential_scheme=self.profile.credential_scheme,
            )
        return self._auth_service

    @property
    def ledger(self) -> LedgerService:
        """Get the LedgerService instance."""
        if self._ledger_service is None:
            self._ledger_service = LedgerService(
                account_repo=self.account_repo,
                policy=self.policy,
            )
        return self._ledger_service

    @property
    def admin(self) -> AdminService:
        """Get the AdminService instance."""
        if self._admin_service is None:
            self._admin_service = AdminService(
                account_repo=self.account_repo,
                id_generator=self.id_generator,
                policy=self.policy,
                credential_scheme=self.profile.credential_scheme,
            )
        return self._admin_service

    # Authentication

    @operation
    def login(self, identifier: str, secret: str) -> OperationResult:
        self._require_signed_out()
        request_cls = PinLoginRequest if self._uses_pins else LoginRequest
        request = request_cls(identifier=identifier, secret=secret)
        self._session = self.auth.login(request.identifier, request.secret)
        return OperationResult.success(self._render(self._session))

    @operation
    def signup(
        self,
        name: str,
        identifier: str,
        secret: str,
        confirm_secret: Optional[str] = None,
    ) -> OperationResult:
        self._require_signed_out()
        if self._uses_pins:
            pin_request = PinSignupRequest(
                name=name, account_number=identifier, pin=secret, confirm_pin=confirm_secret
            )
            name, identifier, secret = pin_request.name, pin_request.account_number, pin_request.pin
        else:
            password_request = PasswordSignupRequest(
                name=name, username=identifier, password=secret, confirm_password=confirm_secret
            )
            name, identifier, secret = (
                password_request.name,
                password_request.username,
                password_request.password,
            )
        self._session = self.auth.signup(name, identifier, secret)
        return OperationResult.success(self._render(self._session))

    @operation
    def logout(self) -> OperationResult:
        stored = self.auth.logout(self._require_session())
        self._session = None
        return OperationResult.success(AccountResponse.model_validate(stored) if stored else None)

    # Ledger

    @operation
    def deposit(self, amount: Number, target_account_id: Optional[str] = None) -> OperationResult:
        request = AmountRequest(amount=amount, target_account_id=target_account_id)
        transaction = self.ledger.deposit(self._require_session(), request.amount, request.target_account_id)
        return OperationResult.success(TransactionResponse.model_validate(transaction))

    @operation
    def withdraw(self, amount: Number, target_account_id: Optional[str] = None) -> OperationResult:
        request = AmountRequest(amount=amount, target_account_id=target_account_id)
        transaction = self.ledger.withdraw(self._require_session(), request.amount, request.target_account_id)
        return OperationResult.success(TransactionResponse.model_validate(transaction))

    @operation
    def current_account(self) -> OperationResult:
        return OperationResult.success(self._render(self._require_session()))

    @operation
    def list_accounts(self) -> OperationResult:
        accounts = [AccountResponse.model_validate(a) for a in self.ledger.list_accounts(self._require_session())]
        return OperationResult.success(AccountListResponse(accounts=accounts, count=len(accounts)))

    @operation
    def history(
        self,
        account_id: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> OperationResult:
        """Transactions newest first; ``start``/``end`` are inclusive date strings in bank time."""
        session = self._require_session()
        request = HistoryRequest(account_id=account_id, start=start, end=end)
        transactions = self.ledger.get_history(
            session,
            account_id=request.account_id,
            start_date=request.start,
            end_date=request.end,
        )
        return OperationResult.success([TransactionResponse.model_validate(t) for t in transactions])

    @operation
    def activity(self) -> OperationResult:
        entries = self.ledger.get_activity(self._require_session())
        return OperationResult.success([ActivityEntryResponse.model_validate(e) for e in entries])

    # Self-service profile edit

    @operation
    def begin_profile_edit(self) -> OperationResult:
        session = self._require_session()
        self.policy.require(session, Capability.EDIT_OWN_PROFILE, "edit own profile")
        return OperationResult.success(session.begin_edit())

    @operation
    def cancel_profile_edit(self) -> OperationResult:
        self._require_session().cancel_edit()
        return OperationResult.success()

    @operation
    def update_own_profile(self, name: str, new_id: str) -> OperationResult:
        """Save a name/account-number edit to the session (the store follows on logout)."""
        session = self._require_session()
        self.policy.require(session, Capability.EDIT_OWN_PROFILE, "edit own profile")
        request = ProfileUpdateRequest(name=name, account_id=new_id)
        self.sessions.save_profile(session, ProfileDraft(name=request.name, account_id=request.account_id))
        return OperationResult.success(self._render(session))

    # Manager administration

    @operation
    def create_account(
        self,
        name: str,
        identifier: str,
        secret: str,
        initial_balance: Number = Decimal("0"),
    ) -> OperationResult:
        request = CreateAccountRequest(
            name=name, identifier=identifier, secret=secret, initial_balance=initial_balance
        )
        account = self.admin.create_account(
            self._require_session(),
            request.name,
            request.identifier,
            request.secret,
            request.initial_balance,
        )
        return OperationResult.success(AccountResponse.model_validate(account))

    @operation
    def update_account(self, target_id: str, name: str, balance: Number) -> OperationResult:
        request = UpdateAccountRequest(target_id=target_id, name=name, balance=balance)
        account = self.admin.update_account(
            self._require_session(), request.target_id, request.name, request.balance
        )
        return OperationResult.success(AccountResponse.model_validate(account))

    @operation
    def delete_account(self, target_id: str) -> OperationResult:
        self.admin.delete_account(self._require_session(), target_id)
        return OperationResult.success()

    # Navigation

    @operation
    def navigate(self, view: Union[View, str]) -> OperationResult:
        session = self._require_session()
        try:
            session.view = View(view)
        except ValueError:
            raise ValidationError(f"Unknown view: {view}")
        return OperationResult.success(session.view)

    @property
    def _uses_pins(self) -> bool:
        return self.profile.credential_scheme == CredentialScheme.PIN

    def _require_signed_out(self) -> None:
        if self._session is not None:
            raise ValidationError("Already signed in; log out first")

    def _require_session(self) -> Session:
        if self._session is None:
            raise NotAuthenticatedError()
        return self._session

    @staticmethod
    def _render(session: Session) -> AccountResponse:
        return AccountResponse.model_validate(session.account)


# Global application context (singleton for a single front-end process)
_app_context: Optional[AppContext] = None


def create_app_context(settings: Optional[Settings] = None) -> AppContext:
    """Configure logging and return a ready-to-use context."""
    if settings:
        set_settings(settings)
    setup_logging()
    context = AppContext(settings=settings)
    context.initialize()
    return context


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = create_app_context()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set the global application context."""
    global _app_context
    _app_context = context
