"""Tests for month filtering and totals."""

from datetime import date
from decimal import Decimal

import pytest

from ledger.exceptions import ValidationError
from ledger.filters import filter_by_month, month_name, total
from ledger.models import Expense

TODAY = date(2024, 3, 15)


@pytest.fixture
def records():
    return [
        Expense(id=1, amount=Decimal("10"), description="jan", date=date(2024, 1, 10)),
        Expense(id=2, amount=Decimal("20"), description="feb", date=date(2024, 2, 3)),
        Expense(id=3, amount=Decimal("99"), description="old jan", date=date(2023, 1, 10)),
        Expense(id=4, amount=Decimal("5.25"), description="jan again", date=date(2024, 1, 31)),
    ]


def test_no_month_returns_everything(records):
    assert filter_by_month(records, today=TODAY) == records


def test_month_keeps_only_current_year(records):
    result = filter_by_month(records, 1, today=TODAY)
    assert [expense.id for expense in result] == [1, 4]


def test_month_never_reaches_into_other_years(records):
    result = filter_by_month(records, 1, today=date(2023, 6, 1))
    assert [expense.id for expense in result] == [3]


def test_month_with_no_matches_is_empty(records):
    assert filter_by_month(records, 12, today=TODAY) == []


def test_defaults_to_current_year():
    this_year = Expense(
        id=1, amount=Decimal("1"), description="now", date=date(date.today().year, 1, 1)
    )
    last_year = Expense(
        id=2, amount=Decimal("1"), description="then", date=date(date.today().year - 1, 1, 1)
    )
    assert filter_by_month([this_year, last_year], 1) == [this_year]


@pytest.mark.parametrize("month", [0, 13, -1])
def test_out_of_range_month_raises(records, month):
    with pytest.raises(ValidationError):
        filter_by_month(records, month, today=TODAY)


def test_total_sums_amounts(records):
    assert total(records) == Decimal("134.25")


def test_total_of_empty_is_zero():
    assert total([]) == Decimal("0")


def test_total_handles_negative_amounts():
    refund = Expense(id=1, amount=Decimal("-4.50"), description="refund", date=TODAY)
    assert total([refund]) == Decimal("-4.50")


def test_month_name():
    assert month_name(1) == "January"
    assert month_name(12) == "December"
    with pytest.raises(ValidationError):
        month_name(13)
