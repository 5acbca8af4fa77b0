"""Service layer - business logic orchestration."""

from bankapp.services.id_generator import AccountIdGenerator, new_transaction_id
from bankapp.services.session import Session, SessionService, ProfileDraft
from bankapp.services.policy import AuthorizationPolicy, ROLE_CAPABILITIES
from bankapp.services.auth_service import AuthService, make_credential
from bankapp.services.ledger_service import LedgerService
from bankapp.services.admin_service import AdminService

__all__ = [
    "AccountIdGenerator",
    "new_transaction_id",
    "Session",
    "SessionService",
    "ProfileDraft",
    "AuthorizationPolicy",
    "ROLE_CAPABILITIES",
    "AuthService",
    "make_credential",
    "LedgerService",
    "AdminService",
]
