"""Shared field checks for request schemas."""

from datetime import datetime
from decimal import Decimal

from bankapp.config.settings import get_settings
from bankapp.core.timezone import parse_datetime_local


def require_digits(value: str, length: int, label: str) -> str:
    if not value.isdigit() or len(value) != length:
        raise ValueError(f"{label} must be {length} digits")
    return value


def require_account_number(value: str) -> str:
    return require_digits(value, get_settings().account_id_length, "Account number")


def require_pin(value: str) -> str:
    return require_digits(value, get_settings().pin_length, "PIN")


def require_currency_places(value: Decimal) -> Decimal:
    places = get_settings().currency_places
    exponent = value.as_tuple().exponent
    if isinstance(exponent, int) and -exponent > places:
        raise ValueError(f"Amount cannot have more than {places} decimal places")
    return value


def require_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Name cannot be empty")
    return value


def parse_bound(value, end_of_day: bool):
    """Parse a history window bound; datetimes and None pass through."""
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid date: {value}")
    if not value.strip():
        return None
    try:
        return parse_datetime_local(value, end_of_day=end_of_day)
    except (ValueError, OverflowError):
        raise ValueError(f"Invalid date: {value}")
