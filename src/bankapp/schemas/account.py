"""Pydantic schemas for rendering accounts and transactions."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from bankapp.domain.models.enums import Role, TransactionKind


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    model_config = {"from_attributes": True}

    txn_id: str
    kind: TransactionKind
    amount: Decimal
    timestamp: datetime
    performed_by: Optional[str] = None
    description: Optional[str] = None
    adjustment: Decimal = Decimal("0")


class AccountResponse(BaseModel):
    """Response schema for a single account. Credentials are never exposed."""

    model_config = {"from_attributes": True}

    account_id: str
    name: str
    role: Role
    balance: Decimal
    transactions: list[TransactionResponse] = []
    created_at: Optional[datetime] = None


class AccountListResponse(BaseModel):
    """Response schema for listing accounts."""

    accounts: list[AccountResponse]
    count: int


class ActivityEntryResponse(BaseModel):
    """Response schema for one line of the staff activity feed."""

    model_config = {"from_attributes": True}

    account_id: str
    account_name: str
    transaction: TransactionResponse
