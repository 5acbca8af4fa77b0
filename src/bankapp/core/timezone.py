"""Clock utilities for the configured bank timezone."""

from datetime import datetime, time
from typing import Optional

import pytz
from dateutil import parser as date_parser

from bankapp.config.settings import get_settings


def get_bank_tz() -> pytz.BaseTzInfo:
    """Return the timezone configured for transaction timestamps."""
    return pytz.timezone(get_settings().timezone)


def now_local() -> datetime:
    """Return current time in the bank timezone."""
    return datetime.now(get_bank_tz())


def to_local(dt: datetime) -> datetime:
    """Convert a datetime to the bank timezone."""
    tz = get_bank_tz()
    if dt.tzinfo is None:
        # Assume naive datetime is already local
        return tz.localize(dt)
    return dt.astimezone(tz)


def parse_datetime_local(
    value: str,
    default_tz: Optional[pytz.BaseTzInfo] = None,
    end_of_day: bool = False,
) -> datetime:
    """
    Parse a datetime string and return it in the bank timezone.

    If no timezone is provided in the string, assumes the bank timezone.
    With ``end_of_day``, a string without a time part means the last
    instant of that day instead of midnight.
    """
    default = datetime.combine(now_local().date(), time.max if end_of_day else time.min)
    dt = date_parser.parse(value, default=default)
    if dt.tzinfo is None:
        tz = default_tz or get_bank_tz()
        dt = tz.localize(dt)
    return to_local(dt)
