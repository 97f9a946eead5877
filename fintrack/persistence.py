import contextlib
import json
import os
from pathlib import Path

from .logging_setup import get_logger
from .models import FintrackError, Transaction

log = get_logger(__name__)


class JsonFilePersistence:
    """
    Whole-document JSON storage for the transaction collection.
    The file is read once at startup and fully rewritten after each mutation.
    Failures are logged and never raised to the caller.
    """

    def __init__(self, path):
        self.path = Path(path)

    def load(self):
        """
        Robust loader:
        - Missing file: create an empty one and start with no transactions
        - Unreadable, corrupted or malformed file: log and start empty
        - Empty file: start empty
        """
        try:
            if not self.path.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.touch()
                log.info("Created empty data file at %s", self.path)
                return []
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            log.error("Could not read data file %s: %s", self.path, exc)
            return []

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            log.error("Error parsing %s (%s). Starting with an empty list.", self.path, exc)
            return []

        if not isinstance(data, list):
            log.error("Unexpected document in %s: expected a list. Starting with an empty list.", self.path)
            return []

        transactions = []
        seen = set()
        try:
            for item in data:
                tx = Transaction.from_dict(item)
                if tx.id in seen:
                    raise ValueError(f"duplicate transaction id {tx.id}")
                seen.add(tx.id)
                transactions.append(tx)
        except (ValueError, FintrackError) as exc:
            log.error("Invalid record in %s (%s). Starting with an empty list.", self.path, exc)
            return []

        log.info("Loaded %d transactions from %s", len(transactions), self.path)
        return transactions

    def save(self, transactions):
        """
        Atomic write to avoid partial/corrupt files: the document goes to a
        temporary sibling that then replaces the target.
        """
        try:
            payload = json.dumps(
                [tx.to_dict() for tx in transactions],
                indent=4,
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError) as exc:
            log.error("Could not convert transactions to JSON: %s", exc)
            return False

        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)  # atomic on POSIX & modern Windows
        except OSError as exc:
            log.error("Could not write data file %s: %s", self.path, exc)
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            return False

        log.debug("Saved %d transactions to %s", len(transactions), self.path)
        return True
