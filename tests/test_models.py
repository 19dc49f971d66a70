"""Tests for the Expense record and its update rule."""

from datetime import date
from decimal import Decimal

import pytest

from ledger.models import UNSET, Expense, apply_update


@pytest.fixture
def coffee() -> Expense:
    return Expense(id=1, amount=Decimal("3.50"), description="coffee", date=date(2024, 1, 5))


def test_create_defaults_date_to_today():
    expense = Expense.create(7, "lunch", "9.90", today=date(2024, 6, 1))
    assert expense.date == date(2024, 6, 1)
    assert expense.amount == Decimal("9.90")


def test_create_uses_local_date_when_no_clock_given():
    expense = Expense.create(1, "lunch")
    assert expense.date == date.today()
    assert expense.amount == Decimal("0")


def test_create_accepts_negative_amount():
    expense = Expense.create(1, "refund", Decimal("-5"), date(2024, 1, 1))
    assert expense.amount == Decimal("-5")


def test_update_amount_only(coffee):
    updated = apply_update(coffee, amount=Decimal("4.00"))
    assert updated.amount == Decimal("4.00")
    assert updated.description == coffee.description
    assert updated.date == coffee.date
    assert updated.id == coffee.id


def test_update_description_only(coffee):
    updated = apply_update(coffee, description="espresso")
    assert updated.description == "espresso"
    assert updated.amount == coffee.amount
    assert updated.date == coffee.date


def test_update_date_only(coffee):
    updated = apply_update(coffee, date=date(2024, 2, 2))
    assert updated.date == date(2024, 2, 2)
    assert updated.amount == coffee.amount
    assert updated.description == coffee.description


def test_update_with_nothing_supplied_is_identity(coffee):
    assert apply_update(coffee) == coffee


def test_explicit_empty_description_differs_from_unset(coffee):
    assert apply_update(coffee, description=UNSET).description == "coffee"
    assert apply_update(coffee, description="").description == ""


def test_explicit_zero_amount_replaces(coffee):
    assert apply_update(coffee, amount=0).amount == Decimal("0")


def test_unset_is_a_singleton_and_falsy():
    assert UNSET is type(UNSET)()
    assert not UNSET
    assert UNSET is not None


def test_from_row_parses_fields():
    expense = Expense.from_row(["3", "2024-01-05", "coffee; large", "3.50"])
    assert expense == Expense(
        id=3, amount=Decimal("3.50"), description="coffee; large", date=date(2024, 1, 5)
    )


@pytest.mark.parametrize(
    "row",
    [
        ["1", "2024-01-05", "coffee"],
        ["1", "2024-01-05", "coffee", "3.50", "extra"],
        ["x", "2024-01-05", "coffee", "3.50"],
        ["-1", "2024-01-05", "coffee", "3.50"],
        ["1", "05/01/2024", "coffee", "3.50"],
        ["1", "2024-01-05", "coffee", "3,50"],
        ["1", "2024-01-05", "coffee", "sNaN"],
        ["1", "2024-01-05", "coffee", "NaN"],
        ["1", "2024-01-05", "coffee", "-Infinity"],
        ["1", "20240105", "coffee", "3.50"],
        ["1", "2024-W01-1", "coffee", "3.50"],
    ],
)
def test_from_row_rejects_malformed(row):
    with pytest.raises(ValueError):
        Expense.from_row(row)


def test_to_dict_formats_amount(coffee):
    assert coffee.to_dict() == {
        "id": 1,
        "date": "2024-01-05",
        "description": "coffee",
        "amount": "3.50",
    }
