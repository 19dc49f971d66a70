"""Data models for the expense ledger domain."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date as Date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence

__all__ = ["Expense", "UNSET", "apply_update", "parse_iso_date", "FIELDS", "DATE_FORMAT"]

# Column order of the persisted ledger.
FIELDS = ("id", "date", "description", "amount")
DATE_FORMAT = "%Y-%m-%d"


class _Unset:
    """Marker for a field that was not supplied to an update."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def parse_iso_date(value: str) -> Date:
    """Parse a strict YYYY-MM-DD date; raises ValueError otherwise."""
    return datetime.strptime(value, DATE_FORMAT).date()


@dataclass(frozen=True)
class Expense:
    id: int
    amount: Decimal
    description: str
    date: Date

    @classmethod
    def create(
        cls,
        id: int,
        description: str,
        amount: object = Decimal("0"),
        date: Optional[Date] = None,
        *,
        today: Optional[Date] = None,
    ) -> "Expense":
        """Build a new expense, defaulting the date to the current local day."""
        if date is None:
            date = today or Date.today()
        return cls(id=id, amount=Decimal(str(amount)), description=description, date=date)

    def to_row(self) -> List[str]:
        return [str(self.id), self.date.isoformat(), self.description, str(self.amount)]

    @classmethod
    def from_row(cls, row: Sequence[str]) -> "Expense":
        """Hydrate an Expense from the four persisted fields.

        Raises ValueError when the row has the wrong arity or a field does not
        parse.
        """
        if len(row) != len(FIELDS):
            raise ValueError(f"expected {len(FIELDS)} fields, got {len(row)}")
        raw_id, raw_date, description, raw_amount = row
        expense_id = int(raw_id)
        if expense_id < 0:
            raise ValueError(f"id must not be negative: {expense_id}")
        try:
            amount = Decimal(raw_amount.strip())
        except InvalidOperation as exc:
            raise ValueError(f"invalid amount: {raw_amount!r}") from exc
        if not amount.is_finite():
            raise ValueError(f"amount must be finite: {raw_amount!r}")
        return cls(
            id=expense_id,
            amount=amount,
            description=description,
            date=parse_iso_date(raw_date.strip()),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to JSON-friendly natives."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": f"{self.amount:.2f}",
        }


def apply_update(
    record: Expense,
    *,
    description: Any = UNSET,
    amount: Any = UNSET,
    date: Any = UNSET,
) -> Expense:
    """Return a copy of ``record`` with every supplied field replaced.

    Fields left as ``UNSET`` keep their current value. ``None`` is not a
    stand-in for "unchanged".
    """
    changes: Dict[str, Any] = {}
    if description is not UNSET:
        changes["description"] = description
    if amount is not UNSET:
        changes["amount"] = Decimal(str(amount))
    if date is not UNSET:
        changes["date"] = date
    return replace(record, **changes)
