"""View models for service outputs."""

from bankapp.domain.views.results import OperationResult, ActivityEntry

__all__ = [
    "OperationResult",
    "ActivityEntry",
]
