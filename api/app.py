"""Flask REST API exposing the expense ledger services."""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from flask import Flask, jsonify, request
from flask_cors import CORS

from ledger.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from ledger.services import LedgerService
from ledger.storage import CSVStorage
from ledger.validators import parse_amount, parse_date, parse_month, validate_description

# Status and label reported for each domain error.
ERROR_RESPONSES = {
    ValidationError: (400, "Validation error"),
    RecordNotFoundError: (404, "Record not found"),
    PersistenceError: (500, "Persistence error"),
}


def _allowed_origins() -> Union[str, List[str], None]:
    """Resolve CORS origins: everything in dev, else the configured list if any."""
    if os.getenv("EXPENSE_TRACKER_ENV", "prod").lower() in {"dev", "development"}:
        return "*"
    configured = os.getenv("EXPENSE_TRACKER_ALLOWED_ORIGINS", "")
    return [origin.strip() for origin in configured.split(",") if origin.strip()] or None


def create_app(
    ledger_path: Optional[Path] = None,
    strict: bool = False,
    clock: Callable[[], date] = date.today,
) -> Flask:
    app = Flask(__name__)

    origins = _allowed_origins()
    if origins is None:
        CORS(app)
    else:
        CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)

    path = Path(ledger_path or os.getenv("EXPENSE_LEDGER_FILE", "expenses.csv"))

    def _service() -> LedgerService:
        # One load per request, mirroring a single CLI invocation.
        return LedgerService(CSVStorage(path, strict=strict), clock=clock)

    def _success(payload: Any, status: int = 200):
        if status == 204:
            return ("", status)
        return jsonify(payload), status

    def _handle_error(exc: Exception):
        status, label = next(
            response for kind, response in ERROR_RESPONSES.items() if isinstance(exc, kind)
        )
        app.logger.error("%s: %s", label, exc)
        return jsonify({"error": label, "details": str(exc)}), status

    for kind in ERROR_RESPONSES:
        app.register_error_handler(kind, _handle_error)

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    def _changes(payload: Dict[str, Any]) -> Dict[str, Any]:
        # Keys missing from the body stay unchanged.
        parsers = {
            "description": validate_description,
            "amount": parse_amount,
            "date": parse_date,
        }
        unknown = set(payload) - set(parsers)
        if unknown:
            raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")
        return {key: parsers[key](value, key) for key, value in payload.items()}

    @app.get("/expenses")
    def list_expenses():
        expenses = _service().list(parse_month(request.args.get("month")))
        return _success({"items": [expense.to_dict() for expense in expenses]})

    @app.post("/expenses")
    def create_expense():
        payload = _json_body()
        if "description" not in payload:
            raise ValidationError("description is required")
        changes = _changes(payload)
        expense = _service().add(
            changes["description"], changes.get("amount", 0), changes.get("date")
        )
        return _success(expense.to_dict(), 201)

    @app.get("/expenses/<int:expense_id>")
    def get_expense(expense_id: int):
        return _success(_service().get(expense_id).to_dict())

    @app.patch("/expenses/<int:expense_id>")
    def update_expense(expense_id: int):
        changes = _changes(_json_body())
        expense = _service().update(expense_id, **changes)
        return _success(expense.to_dict())

    @app.delete("/expenses/<int:expense_id>")
    def delete_expense(expense_id: int):
        _service().delete(expense_id)
        return _success({}, 204)

    @app.get("/summary")
    def summary():
        result = _service().summarize(parse_month(request.args.get("month")))
        return _success(result.to_dict())

    return app
