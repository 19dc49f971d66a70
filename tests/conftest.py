from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from ledger.services import LedgerService
from ledger.storage import CSVStorage

PINNED_TODAY = date(2024, 3, 15)


@pytest.fixture
def ledger_path(tmp_path: Path) -> Path:
    return tmp_path / "expenses.csv"


@pytest.fixture
def storage(ledger_path: Path) -> CSVStorage:
    return CSVStorage(ledger_path)


@pytest.fixture
def service(storage: CSVStorage) -> LedgerService:
    return LedgerService(storage, clock=lambda: PINNED_TODAY)


def write_ledger(path: Path, *lines: str) -> None:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
