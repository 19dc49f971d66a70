"""Framework-agnostic business services for the expense ledger."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date as Date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from .exceptions import PersistenceError, RecordNotFoundError, ValidationError
from .filters import filter_by_month, month_name, total
from .models import Expense, apply_update
from .storage import CSVStorage

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"description", "amount", "date"})


@dataclass(frozen=True)
class Summary:
    total: Decimal
    month: Optional[int] = None
    month_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": f"{self.total:.2f}",
            "month": self.month,
            "month_name": self.month_name,
        }


class LedgerService:
    """Runs one command against a ledger loaded from storage.

    The ledger is read once on construction; every mutating call rewrites the
    whole file. Failed lookups raise before anything is written.
    """

    def __init__(
        self, storage: CSVStorage, clock: Callable[[], Date] = Date.today
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._expenses: List[Expense] = []
        self.load()  # Hydrate in-memory ledger from persistence on construction.

    # Public API -----------------------------------------------------------
    def add(
        self,
        description: str,
        amount: object = Decimal("0"),
        date: Optional[Date] = None,
    ) -> Expense:
        expense = Expense.create(
            self.next_id(), description, amount, date, today=self._clock()
        )
        self._expenses.append(expense)
        self._persist()
        logger.info("Added expense %d", expense.id)
        return expense

    def update(self, expense_id: int, **changes: Any) -> Expense:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
        index = self._index_or_raise(expense_id)
        updated = apply_update(self._expenses[index], **changes)
        self._expenses[index] = updated
        self._persist()
        logger.info("Updated expense %d", expense_id)
        return updated

    def delete(self, expense_id: int) -> Expense:
        index = self._index_or_raise(expense_id)
        removed = self._expenses.pop(index)
        self._persist()
        logger.info("Deleted expense %d", expense_id)
        return removed

    def get(self, expense_id: int) -> Expense:
        """Return an expense or raise if it does not exist."""
        return self._expenses[self._index_or_raise(expense_id)]

    def list(self, month: Optional[int] = None) -> List[Expense]:
        return filter_by_month(self._expenses, month, today=self._clock())

    def summarize(self, month: Optional[int] = None) -> Summary:
        expenses = self.list(month)
        if month is None:
            return Summary(total=total(expenses))
        return Summary(total=total(expenses), month=month, month_name=month_name(month))

    def next_id(self) -> int:
        return max((expense.id for expense in self._expenses), default=0) + 1

    def load(self) -> None:
        """Load existing expenses, creating an empty ledger on first use."""
        self._storage.initialize()
        self._expenses = self._storage.load()

    # Internal helpers -----------------------------------------------------
    def _persist(self) -> None:
        try:
            self._storage.save(self._expenses)
        except PersistenceError:
            raise
        except Exception as exc:  # pragma: no cover
            raise PersistenceError("Unexpected error while saving expenses") from exc

    def _index_or_raise(self, expense_id: int) -> int:
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return index
        raise RecordNotFoundError(f"No entry found with ID = {expense_id}")
