"""Shared fixtures: every app and store writes to its own temporary data file."""

import pytest

from fintrack import create_app
from fintrack.persistence import JsonFilePersistence
from fintrack.store import TransactionStore


class RecordingPersistence:
    """In-memory stand-in that remembers every saved collection."""

    def __init__(self, initial=()):
        self.initial = list(initial)
        self.saves = []

    def load(self):
        return list(self.initial)

    def save(self, transactions):
        self.saves.append(list(transactions))
        return True


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "transactions.json"


@pytest.fixture
def persistence():
    return RecordingPersistence()


@pytest.fixture
def store(persistence):
    return TransactionStore(persistence)


@pytest.fixture
def file_store(data_file):
    return TransactionStore(JsonFilePersistence(data_file))


@pytest.fixture
def app(tmp_path, data_file):
    return create_app({
        "TESTING": True,
        "DATA_FILE": str(data_file),
        "STATIC_DIR": str(tmp_path / "static"),
        "STRICT_STATUS_CODES": False,
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def strict_client(tmp_path, data_file):
    app = create_app({
        "TESTING": True,
        "DATA_FILE": str(data_file),
        "STATIC_DIR": str(tmp_path / "static"),
        "STRICT_STATUS_CODES": True,
    })
    return app.test_client()
