"""Month filtering and aggregation over expense records."""

from __future__ import annotations

import calendar
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from .exceptions import ValidationError
from .models import Expense

__all__ = ["filter_by_month", "total", "month_name", "validate_month"]


def validate_month(month: object) -> int:
    if isinstance(month, bool) or not isinstance(month, int):
        raise ValidationError("Invalid month (must be a number between 1 and 12)")
    if not 1 <= month <= 12:
        raise ValidationError("Invalid month (must be a number between 1 and 12)")
    return month


def filter_by_month(
    records: Iterable[Expense],
    month: Optional[int] = None,
    *,
    today: Optional[date] = None,
) -> List[Expense]:
    """Keep the records of ``month`` in the current calendar year.

    Without a month every record is returned. Matching months in other years
    are never included.
    """
    if month is None:
        return list(records)
    month = validate_month(month)
    current_year = (today or date.today()).year
    return [
        expense
        for expense in records
        if expense.date.month == month and expense.date.year == current_year
    ]


def total(records: Iterable[Expense]) -> Decimal:
    return sum((expense.amount for expense in records), start=Decimal("0"))


def month_name(month: int) -> str:
    return calendar.month_name[validate_month(month)]
