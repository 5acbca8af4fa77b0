"""In-memory bank ledger with role-based account administration."""

__version__ = "0.1.0"
