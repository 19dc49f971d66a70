"""Persistence utilities for the expense ledger core services."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, List, Set

from .exceptions import PersistenceError, RowParseError
from .models import FIELDS, Expense

logger = logging.getLogger(__name__)

# Semicolons keep amounts written with a decimal comma unambiguous.
DELIMITER = ";"


class LedgerDialect(csv.excel):
    # The CRLF terminator makes the writer quote any field holding \r or \n.
    delimiter = DELIMITER


class CSVStorage:
    """Flat delimited-file storage holding one ledger.

    The whole file is read on load and rewritten on save. With ``strict``
    enabled a malformed row raises instead of being dropped.
    """

    def __init__(self, path: Path, *, strict: bool = False) -> None:
        self._path = Path(path)
        self._strict = strict

    def initialize(self) -> None:
        """Create an empty ledger with the header row if none exists yet."""
        if self._path.exists():
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8", newline="") as handle:
                csv.writer(handle, dialect=LedgerDialect).writerow(FIELDS)
        except OSError as exc:
            raise PersistenceError(f"Unable to create ledger at {self._path}: {exc}") from exc
        logger.debug("Created empty ledger at %s", self._path)

    def load(self) -> List[Expense]:
        try:
            with self._path.open("r", encoding="utf-8", newline="") as handle:
                rows = list(csv.reader(handle, dialect=LedgerDialect))
        except (OSError, csv.Error) as exc:
            raise PersistenceError(f"Unable to read from {self._path}: {exc}") from exc

        if not rows:
            return []
        header, body = rows[0], rows[1:]
        if tuple(field.strip() for field in header) != FIELDS:
            self._reject(f"unexpected header {DELIMITER.join(header)!r}", 1)

        expenses: List[Expense] = []
        seen: Set[int] = set()
        for line_number, row in enumerate(body, start=2):
            if not row:
                continue
            try:
                expense = Expense.from_row(row)
            except ValueError as exc:
                self._reject(str(exc), line_number)
                continue
            if expense.id in seen:
                self._reject(f"duplicate id {expense.id}", line_number)
                continue
            seen.add(expense.id)
            expenses.append(expense)

        logger.debug("Loaded %d expenses from %s", len(expenses), self._path)
        return expenses

    def save(self, records: Iterable[Expense]) -> None:
        temp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            with temp_path.open("w", encoding="utf-8", newline="") as handle:
                writer = csv.writer(handle, dialect=LedgerDialect)
                writer.writerow(FIELDS)
                writer.writerows(record.to_row() for record in records)
                handle.flush()
            # Use replace for atomic move on POSIX; readers see old or new content.
            temp_path.replace(self._path)
        except OSError as exc:
            if temp_path.exists():
                temp_path.unlink()
            raise PersistenceError(f"Unable to write to {self._path}: {exc}") from exc
        logger.debug("Saved ledger to %s", self._path)

    def _reject(self, reason: str, line_number: int) -> None:
        if self._strict:
            raise RowParseError(reason, line_number)
        logger.warning("Skipping line %d of %s: %s", line_number, self._path, reason)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def strict(self) -> bool:
        return self._strict
