"""Pydantic schemas for ledger and administration input."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from bankapp.schemas._validators import (
    parse_bound,
    require_account_number,
    require_currency_places,
    require_name,
)


class AmountRequest(BaseModel):
    """Request schema for a deposit or withdrawal."""

    amount: Decimal = Field(..., gt=0, description="Amount to move, positive")
    target_account_id: Optional[str] = Field(
        default=None,
        description="Account to act on; defaults to the signed-in account",
    )

    @field_validator("amount")
    @classmethod
    def check_places(cls, v: Decimal) -> Decimal:
        return require_currency_places(v)


class ProfileUpdateRequest(BaseModel):
    """Request schema for the self-service profile edit."""

    name: str
    account_id: str

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return require_name(v)

    @field_validator("account_id")
    @classmethod
    def check_account_id(cls, v: str) -> str:
        return require_account_number(v)


class CreateAccountRequest(BaseModel):
    """Request schema for a manager opening an account."""

    name: str
    identifier: str = Field(..., min_length=1, max_length=255)
    secret: str = Field(..., min_length=1)
    initial_balance: Decimal = Field(default=Decimal("0"), ge=0)

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return require_name(v)

    @field_validator("initial_balance")
    @classmethod
    def check_places(cls, v: Decimal) -> Decimal:
        return require_currency_places(v)


class UpdateAccountRequest(BaseModel):
    """Request schema for a manager overwriting name and balance."""

    target_id: str = Field(..., min_length=1)
    name: str
    balance: Decimal = Field(..., ge=0)

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return require_name(v)

    @field_validator("balance")
    @classmethod
    def check_places(cls, v: Decimal) -> Decimal:
        return require_currency_places(v)


class HistoryRequest(BaseModel):
    """
    Request schema for reading an account's history.

    ``start``/``end`` accept any date string dateutil understands, taken in
    the bank timezone when no offset is given. A date-only ``end`` covers
    that whole day.
    """

    account_id: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @field_validator("start", mode="before")
    @classmethod
    def parse_start(cls, v):
        return parse_bound(v, end_of_day=False)

    @field_validator("end", mode="before")
    @classmethod
    def parse_end(cls, v):
        return parse_bound(v, end_of_day=True)
