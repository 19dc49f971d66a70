"""Core business logic package for the expense ledger."""

from .models import UNSET, Expense, apply_update
from .filters import filter_by_month, month_name, total
from .services import LedgerService, Summary
from .storage import CSVStorage
from .exceptions import PersistenceError, RecordNotFoundError, RowParseError, ValidationError

__all__ = [
    "UNSET",
    "Expense",
    "apply_update",
    "filter_by_month",
    "month_name",
    "total",
    "LedgerService",
    "Summary",
    "CSVStorage",
    "PersistenceError",
    "RecordNotFoundError",
    "RowParseError",
    "ValidationError",
]
