"""Validation helpers shared by the CLI and HTTP surfaces."""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from .exceptions import ValidationError
from .filters import validate_month
from .models import parse_iso_date


def parse_amount(raw: object, field: str = "amount") -> Decimal:
    """Convert raw input to a finite Decimal. Any sign or magnitude is accepted."""
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a numeric value")
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, TypeError) as exc:
        raise ValidationError(f"{field} must be a numeric value") from exc
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    return amount


def parse_date(raw: object, field: str = "date") -> date:
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise ValidationError(f"{field} must be a YYYY-MM-DD string")
    try:
        return parse_iso_date(raw.strip())
    except ValueError as exc:
        raise ValidationError(f"Invalid {field} '{raw}'. Expected format YYYY-MM-DD.") from exc


def validate_description(value: object, field: str = "description") -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value


def parse_month(raw: Optional[object]) -> Optional[int]:
    """Coerce a query-string month into a validated int, or None when absent."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, int) and not isinstance(raw, bool):
        return validate_month(raw)
    try:
        month = int(str(raw).strip())
    except ValueError as exc:
        raise ValidationError("month must be an integer") from exc
    return validate_month(month)
