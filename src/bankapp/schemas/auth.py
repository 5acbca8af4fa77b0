"""Pydantic schemas for login and signup input."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from bankapp.schemas._validators import require_account_number, require_name, require_pin


class LoginRequest(BaseModel):
    """Request schema for signing in (either scheme)."""

    identifier: str = Field(..., min_length=1, description="Username, email or account number")
    secret: str = Field(..., min_length=1, description="Password or PIN")


class PinLoginRequest(LoginRequest):
    """ATM sign-in: the PIN must have the configured length."""

    @field_validator("secret")
    @classmethod
    def check_pin(cls, v: str) -> str:
        return require_pin(v)


class PinSignupRequest(BaseModel):
    """Request schema for ATM self-service signup."""

    name: str
    account_number: str
    pin: str
    confirm_pin: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return require_name(v)

    @field_validator("account_number")
    @classmethod
    def check_account_number(cls, v: str) -> str:
        return require_account_number(v)

    @field_validator("pin")
    @classmethod
    def check_pin(cls, v: str) -> str:
        return require_pin(v)

    @model_validator(mode="after")
    def pins_match(self) -> "PinSignupRequest":
        if self.confirm_pin is not None and self.confirm_pin != self.pin:
            raise ValueError("PINs do not match")
        return self


class PasswordSignupRequest(BaseModel):
    """Request schema for bank self-service signup."""

    name: str
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    confirm_password: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return require_name(v)

    @model_validator(mode="after")
    def passwords_match(self) -> "PasswordSignupRequest":
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("Passwords do not match")
        return self
