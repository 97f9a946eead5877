import math
import re
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime

DATE_FORMAT = "%Y-%m-%d"
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_INT_RE = re.compile(r"[+-]?[0-9]+")

# --- Errors ---

class FintrackError(Exception):
    """Base class for errors surfaced to API clients."""
    message = "Request failed."

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidDate(FintrackError):
    message = "Invalid date format. Use YYYY-MM-DD."


class InvalidIdentifier(FintrackError):
    message = "Invalid identifier."


class TransactionNotFound(FintrackError):
    message = "Transaction not found."


# --- Parsing helpers ---

def parse_date(value):
    """
    Parse an exact ``YYYY-MM-DD`` string into a ``date``.
    Raises InvalidDate for anything else, including real-looking but
    impossible dates such as 2025-02-30.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        raise InvalidDate()
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise InvalidDate() from None


def parse_date_or_none(value):
    """Lenient variant used by filters: unparsable input counts as absent."""
    if value is None:
        return None
    try:
        return parse_date(value)
    except InvalidDate:
        return None


def parse_int_or_none(value):
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _INT_RE.fullmatch(value):
        return int(value)
    return None


def parse_identifier(value):
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdentifier() from None


def is_valid_amount(value):
    # bool is an int subclass; JSON true/false is not an amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond float range
        return False


# --- Records ---

@dataclass(frozen=True)
class Transaction:
    id: uuid.UUID
    date: date
    category: str
    description: str
    amount: float

    @classmethod
    def new(cls, date, category, description, amount):
        return cls(uuid.uuid4(), date, category, description, float(amount))

    def with_changes(self, **changes):
        return replace(self, **changes)

    def to_dict(self):
        return {
            "id": str(self.id),
            "date": self.date.strftime(DATE_FORMAT),
            "category": self.category,
            "description": self.description,
            "amount": self.amount,
        }

    @classmethod
    def from_dict(cls, item):
        """
        Build a record from its JSON shape.
        Raises ValueError (or a FintrackError subclass) when a key is missing
        or has the wrong type.
        """
        if not isinstance(item, dict):
            raise ValueError("transaction record must be an object")
        for key in ("category", "description"):
            if not isinstance(item.get(key), str):
                raise ValueError(f"transaction field {key!r} must be a string")
        if not is_valid_amount(item.get("amount")):
            raise ValueError("transaction field 'amount' must be a finite number")
        return cls(
            id=parse_identifier(item.get("id")),
            date=parse_date(item.get("date")),
            category=item["category"],
            description=item["description"],
            amount=float(item["amount"]),
        )


@dataclass(frozen=True)
class Summary:
    total: float = 0.0
    income: float = 0.0
    expense: float = 0.0
    count: int = 0

    def to_dict(self):
        return {
            "total": self.total,
            "income": self.income,
            "expense": self.expense,
            "transactions_count": self.count,
        }
