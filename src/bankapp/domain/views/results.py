"""View models for operation outputs."""

from dataclasses import dataclass
from typing import Any, Optional

from bankapp.domain.models import Transaction


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of one facade operation.

    Failures carry the error code of the exception that caused them
    (e.g. ``INSUFFICIENT_FUNDS``) and a message for inline display.
    """

    ok: bool
    value: Any = None
    error: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, value: Any = None) -> "OperationResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str, message: str) -> "OperationResult":
        return cls(ok=False, error=error, message=message)

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class ActivityEntry:
    """A transaction annotated with the account it belongs to."""

    account_id: str
    account_name: str
    transaction: Transaction
