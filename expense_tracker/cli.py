"""Console interface for the expense ledger."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Iterable, List, Optional

from ledger.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from ledger.models import Expense
from ledger.services import LedgerService
from ledger.storage import CSVStorage
from ledger.validators import parse_amount, parse_date

DEFAULT_LEDGER_FILE = "expenses.csv"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _parse_date(value: str) -> date:
    try:
        return parse_date(value)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _parse_amount(value: str) -> Decimal:
    try:
        return parse_amount(value)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError("Amount must be a numeric value") from exc


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


def _format_expense(expense: Expense) -> str:
    return f"{expense.id:<3} | {expense.date.isoformat():<10} | {expense.amount:<10.2f} | {expense.description}"


def print_expenses(expenses: Iterable[Expense]) -> None:
    expenses = list(expenses)
    if not expenses:
        print("Nothing to list.")
        return
    print(f"{'ID':<3} | {'Date':<10} | {'Amount':<10} | Description")
    for expense in expenses:
        print(_format_expense(expense))


def handle_command(args: argparse.Namespace, service: LedgerService) -> None:
    if args.command == "add":
        expense = service.add(args.description, args.amount, args.date)
        print(f"Successfully added new expense with ID {expense.id}")
    elif args.command == "update":
        changes = {
            "description": args.description,
            "amount": args.amount,
            "date": args.date,
        }
        cleaned = {k: v for k, v in changes.items() if v is not None}
        service.update(args.id, **cleaned)
        print(f"Successfully updated expense with ID {args.id}")
    elif args.command == "delete":
        service.delete(args.id)
        print(f"Successfully deleted expense with ID {args.id}")
    elif args.command == "list":
        print_expenses(service.list(args.month))
    elif args.command == "summary":
        summary = service.summarize(args.month)
        if summary.month_name:
            print(f"Total expenses for {summary.month_name}: {summary.total:.2f}")
        else:
            print(f"Total expenses: {summary.total:.2f}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Expense Ledger CLI")
    parser.add_argument(
        "--file",
        default=os.getenv("EXPENSE_LEDGER_FILE", DEFAULT_LEDGER_FILE),
        type=Path,
        help=f"Ledger file to use (default: $EXPENSE_LEDGER_FILE or ./{DEFAULT_LEDGER_FILE})",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=_env_flag("EXPENSE_LEDGER_STRICT"),
        help="Fail on malformed ledger rows instead of skipping them",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Add a new expense")
    add.add_argument("-k", "--description", required=True)
    add.add_argument("-v", "--amount", type=_parse_amount, default=Decimal("0"))
    add.add_argument("-d", "--date", type=_parse_date, help="YYYY-MM-DD (default: today)")

    update = subparsers.add_parser("update", help="Update an existing expense")
    update.add_argument("-i", "--id", type=int, required=True)
    update.add_argument("-k", "--description")
    update.add_argument("-v", "--amount", type=_parse_amount)
    update.add_argument("-d", "--date", type=_parse_date)

    delete = subparsers.add_parser("delete", help="Delete an expense")
    delete.add_argument("-i", "--id", type=int, required=True)

    list_parser = subparsers.add_parser("list", help="List expenses")
    list_parser.add_argument("-m", "--month", type=int, help="Month of the current year (1-12)")

    summary = subparsers.add_parser("summary", help="Show the total of expenses")
    summary.add_argument("-m", "--month", type=int, help="Month of the current year (1-12)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    try:
        service = LedgerService(CSVStorage(args.file, strict=args.strict))
        handle_command(args, service)
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except RecordNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except PersistenceError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
