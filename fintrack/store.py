import threading

from .logging_setup import get_logger
from .models import (
    Summary,
    Transaction,
    TransactionNotFound,
    parse_date,
    parse_date_or_none,
    parse_identifier,
    parse_int_or_none,
)

log = get_logger(__name__)

UPDATABLE_FIELDS = ("date", "category", "description", "amount")


class TransactionStore:
    """In-memory transaction ledger backed by a whole-document persistence.

    One lock serializes every operation, reads included, and is held across
    the file write that follows a mutation so two writes never interleave.
    Records are immutable; callers receive them, never the list itself.
    """

    def __init__(self, persistence):
        self.persistence = persistence
        self._lock = threading.Lock()
        self._transactions = list(persistence.load())

    def __len__(self):
        with self._lock:
            return len(self._transactions)

    def _index_of(self, tx_id):
        for i, tx in enumerate(self._transactions):
            if tx.id == tx_id:
                return i
        raise TransactionNotFound()

    def _persist(self):
        self.persistence.save(self._transactions)

    def create(self, date, category, description, amount):
        tx = Transaction.new(parse_date(date), category, description, amount)
        with self._lock:
            self._transactions.append(tx)
            self._persist()
        log.info("Created transaction %s", tx.id)
        return tx

    def list(self, category=None, start_date=None, end_date=None):
        """
        Return transactions matching every given filter, in insertion order.
        Unparsable date bounds are ignored rather than rejected.
        """
        wanted = category.lower() if category else None
        start = parse_date_or_none(start_date)
        end = parse_date_or_none(end_date)

        with self._lock:
            snapshot = list(self._transactions)

        return [
            tx for tx in snapshot
            if (wanted is None or tx.category.lower() == wanted)
            and (start is None or tx.date >= start)
            and (end is None or tx.date <= end)
        ]

    def get(self, tx_id):
        tx_id = parse_identifier(tx_id)
        with self._lock:
            return self._transactions[self._index_of(tx_id)]

    def update(self, tx_id, changes):
        """
        Replace the fields present in ``changes``; ``None`` values and unknown
        keys are ignored. The date is validated before anything is modified.
        """
        tx_id = parse_identifier(tx_id)
        fields = {
            key: changes[key]
            for key in UPDATABLE_FIELDS
            if changes.get(key) is not None
        }
        if "date" in fields:
            fields["date"] = parse_date(fields["date"])
        if "amount" in fields:
            fields["amount"] = float(fields["amount"])

        with self._lock:
            idx = self._index_of(tx_id)
            updated = self._transactions[idx].with_changes(**fields)
            self._transactions[idx] = updated
            self._persist()
        log.info("Updated transaction %s (%s)", tx_id, ", ".join(sorted(fields)) or "no fields")
        return updated

    def delete(self, tx_id):
        tx_id = parse_identifier(tx_id)
        with self._lock:
            self._transactions.pop(self._index_of(tx_id))
            self._persist()
        log.info("Deleted transaction %s", tx_id)

    def summarize(self, year=None, month=None):
        """Aggregate amounts for the given year and/or month; a month outside 1-12 matches nothing."""
        year = parse_int_or_none(year)
        month = parse_int_or_none(month)

        with self._lock:
            selected = [
                tx for tx in self._transactions
                if (year is None or tx.date.year == year)
                and (month is None or tx.date.month == month)
            ]

        amounts = [tx.amount for tx in selected]
        return Summary(
            total=sum(amounts, 0.0),
            income=sum((a for a in amounts if a > 0), 0.0),
            expense=sum((a for a in amounts if a < 0), 0.0),
            count=len(selected),
        )
