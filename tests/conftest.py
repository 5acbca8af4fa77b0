"""
Pytest configuration and fixtures for the bank ledger tests.

This module provides:
- Isolated settings per test (no .env, default bank variant)
- In-memory account store and seeded id generator
- Service fixtures wired the way AppContext wires them
- Session fixtures for the seeded manager/clerk and signed-up users
- AppContext fixtures for both product variants
"""

import random
import uuid
from decimal import Decimal
from typing import Callable, Optional

import pytest

from bankapp.app_context import AppContext
from bankapp.config.settings import Settings, reset_settings, set_settings
from bankapp.domain.models import CredentialScheme, ProductVariant
from bankapp.repositories.memory import InMemoryAccountRepository
from bankapp.services import (
    AccountIdGenerator,
    AdminService,
    AuthorizationPolicy,
    AuthService,
    LedgerService,
    Session,
    SessionService,
)

MANAGER_EMAIL = "manager@manager.com"
CLERK_EMAIL = "clerk@clerk.com"


# =============================================================================
# SETTINGS FIXTURES
# =============================================================================


def make_settings(**overrides) -> Settings:
    """Settings that ignore any .env file in the working directory."""
    return Settings(_env_file=None, **overrides)


@pytest.fixture(autouse=True)
def settings() -> Settings:
    """Install default settings for every test and clear them afterwards."""
    current = make_settings()
    set_settings(current)
    yield current
    reset_settings()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def account_repo() -> InMemoryAccountRepository:
    """Provide an empty account store."""
    return InMemoryAccountRepository()


@pytest.fixture
def id_generator(account_repo) -> AccountIdGenerator:
    """Provide an id generator with a fixed seed."""
    return AccountIdGenerator(account_repo, width=11, rng=random.Random(42))


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def policy() -> AuthorizationPolicy:
    return AuthorizationPolicy()


@pytest.fixture
def session_service(account_repo, id_generator) -> SessionService:
    return SessionService(account_repo, id_generator)


@pytest.fixture
def auth_service(account_repo, id_generator, session_service) -> AuthService:
    """Provide an AuthService using the password scheme."""
    return AuthService(
        account_repo=account_repo,
        id_generator=id_generator,
        session_service=session_service,
        credential_scheme=CredentialScheme.PASSWORD,
    )


@pytest.fixture
def ledger_service(account_repo, policy) -> LedgerService:
    return LedgerService(account_repo=account_repo, policy=policy)


@pytest.fixture
def admin_service(account_repo, id_generator, policy) -> AdminService:
    return AdminService(
        account_repo=account_repo,
        id_generator=id_generator,
        policy=policy,
        credential_scheme=CredentialScheme.PASSWORD,
    )


# =============================================================================
# SESSION FIXTURES
# =============================================================================


@pytest.fixture
def seeded_staff(auth_service):
    """Create the manager and clerk accounts."""
    return auth_service.seed_staff(
        manager=(MANAGER_EMAIL, MANAGER_EMAIL),
        clerk=(CLERK_EMAIL, CLERK_EMAIL),
    )


@pytest.fixture
def manager_session(auth_service, seeded_staff) -> Session:
    return auth_service.login(MANAGER_EMAIL, MANAGER_EMAIL)


@pytest.fixture
def clerk_session(auth_service, seeded_staff) -> Session:
    return auth_service.login(CLERK_EMAIL, CLERK_EMAIL)


@pytest.fixture
def user_factory(auth_service) -> Callable[..., Session]:
    """Factory signing up regular users; returns their session."""

    def _signup(
        name: Optional[str] = None,
        username: Optional[str] = None,
        password: str = "pass1",
    ) -> Session:
        suffix = uuid.uuid4().hex[:8]
        return auth_service.signup(
            name=name or f"User {suffix}",
            identifier=username or f"user_{suffix}",
            secret=password,
        )

    return _signup


@pytest.fixture
def funded_user(user_factory, ledger_service) -> Session:
    """A regular user holding 100.00."""
    session = user_factory(name="Alice", username="alice")
    ledger_service.deposit(session, Decimal("100"))
    return session


# =============================================================================
# APP CONTEXT FIXTURES
# =============================================================================


@pytest.fixture
def bank_context() -> AppContext:
    """Bank variant context with seeded staff."""
    context = AppContext(settings=make_settings(variant=ProductVariant.BANK), rng=random.Random(7))
    context.initialize()
    return context


@pytest.fixture
def atm_context() -> AppContext:
    """ATM variant context (PIN credentials, no staff)."""
    context = AppContext(settings=make_settings(variant=ProductVariant.ATM), rng=random.Random(7))
    context.initialize()
    return context
