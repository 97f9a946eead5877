from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import BadRequest, HTTPException

from .logging_setup import get_logger
from .models import (
    FintrackError,
    InvalidDate,
    InvalidIdentifier,
    TransactionNotFound,
    is_valid_amount,
    parse_date,
    parse_identifier,
)

log = get_logger(__name__)

bp = Blueprint("api", __name__, url_prefix="/api")

STORE_EXTENSION = "fintrack.store"
TEXT_FIELDS = ("category", "description")
CREATE_FIELDS = ("date", "category", "description", "amount")


class MalformedBody(FintrackError):
    message = "Invalid request body."


def get_store():
    return current_app.extensions[STORE_EXTENSION]


# --- Error responses ---

_STRICT_STATUS = {
    InvalidDate: 400,
    InvalidIdentifier: 400,
    TransactionNotFound: 404,
}


def _error_status(exc):
    if isinstance(exc, MalformedBody):
        return 400
    if current_app.config["STRICT_STATUS_CODES"]:
        return _STRICT_STATUS.get(type(exc), 400)
    return 200


@bp.errorhandler(FintrackError)
def handle_fintrack_error(exc):
    log.debug("Rejected %s %s: %s", request.method, request.path, exc.message)
    return jsonify(error=exc.message), _error_status(exc)


@bp.app_errorhandler(HTTPException)
def handle_http_error(exc):
    """Answer JSON for unknown routes and methods under /api; leave the rest alone."""
    if (exc.code or 0) < 400 or not request.path.startswith(bp.url_prefix + "/"):
        return exc
    return jsonify(error=exc.description), exc.code


# --- Input validation ---

def _json_body():
    """Return the request body as a dict or raise MalformedBody."""
    try:
        body = request.get_json(force=True)
    except BadRequest:
        raise MalformedBody("Invalid JSON body.") from None
    if not isinstance(body, dict):
        raise MalformedBody("Request body must be a JSON object.")
    return body


def _check_fields(body, required=()):
    """
    Validate every transaction field present in ``body`` and return the
    cleaned subset. Fields set to null count as absent.
    """
    for key in required:
        if body.get(key) is None:
            raise MalformedBody(f"Missing field: {key}.")

    cleaned = {}
    for key in TEXT_FIELDS:
        value = body.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise MalformedBody(f"Field '{key}' must be a string.")
        cleaned[key] = value

    amount = body.get("amount")
    if amount is not None:
        if not is_valid_amount(amount):
            raise MalformedBody("Field 'amount' must be a finite number.")
        cleaned["amount"] = float(amount)

    if body.get("date") is not None:
        cleaned["date"] = parse_date(body["date"])
    return cleaned


# --- Routes ---

@bp.get("/transactions")
def list_transactions():
    """GET /api/transactions?start_date=2025-05-01&end_date=2025-05-31&category=Food"""
    transactions = get_store().list(
        category=request.args.get("category"),
        start_date=request.args.get("start_date"),
        end_date=request.args.get("end_date"),
    )
    return jsonify([tx.to_dict() for tx in transactions])


@bp.get("/transactions/<tx_id>")
def get_transaction(tx_id):
    tx = get_store().get(parse_identifier(tx_id))
    return jsonify(tx.to_dict())


@bp.post("/transactions")
def create_transaction():
    fields = _check_fields(_json_body(), required=CREATE_FIELDS)
    tx = get_store().create(**fields)
    status = 201 if current_app.config["STRICT_STATUS_CODES"] else 200
    return jsonify(status="success", transaction=tx.to_dict()), status


@bp.put("/transactions/<tx_id>")
def update_transaction(tx_id):
    tx_id = parse_identifier(tx_id)
    fields = _check_fields(_json_body())
    tx = get_store().update(tx_id, fields)
    return jsonify(status="success", transaction=tx.to_dict())


@bp.delete("/transactions/<tx_id>")
def delete_transaction(tx_id):
    get_store().delete(parse_identifier(tx_id))
    return jsonify(status="success")


@bp.get("/summary")
def summary():
    """GET /api/summary?year=2025&month=5"""
    result = get_store().summarize(
        year=request.args.get("year"),
        month=request.args.get("month"),
    )
    return jsonify(result.to_dict())
