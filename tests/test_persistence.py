import json
import os
import uuid
from datetime import date

from fintrack.models import Transaction
from fintrack.persistence import JsonFilePersistence


def _sample():
    return [
        Transaction.new(date(2025, 5, 10), "Food", "Lunch", -12.5),
        Transaction.new(date(2025, 5, 20), "Salary", "Pay", 2000),
        Transaction.new(date(2024, 12, 31), "Gifts", "Café déjà vu", 0),
    ]


def test_save_then_load_round_trip(data_file):
    p = JsonFilePersistence(data_file)
    txs = _sample()
    assert p.save(txs) is True
    assert JsonFilePersistence(data_file).load() == txs


def test_round_trip_empty_collection(data_file):
    p = JsonFilePersistence(data_file)
    p.save([])
    assert json.loads(data_file.read_text()) == []
    assert p.load() == []


def test_saved_document_is_indented_record_list(data_file):
    tx = _sample()[0]
    JsonFilePersistence(data_file).save([tx])
    text = data_file.read_text(encoding="utf-8")
    assert "\n    " in text
    assert json.loads(text) == [{
        "id": str(tx.id),
        "date": "2025-05-10",
        "category": "Food",
        "description": "Lunch",
        "amount": -12.5,
    }]


def test_missing_file_is_created_empty(tmp_path):
    path = tmp_path / "nested" / "data.json"
    assert JsonFilePersistence(path).load() == []
    assert path.exists()
    assert path.read_text() == ""


def test_blank_file_loads_empty(data_file):
    data_file.write_text("  \n")
    assert JsonFilePersistence(data_file).load() == []


def test_corrupted_file_loads_empty(data_file):
    data_file.write_text("[{")
    assert JsonFilePersistence(data_file).load() == []


def test_non_list_document_loads_empty(data_file):
    data_file.write_text('{"id": 1}')
    assert JsonFilePersistence(data_file).load() == []


def test_invalid_record_loads_empty(data_file):
    good = _sample()[0].to_dict()
    bad = dict(good, id=str(uuid.uuid4()), date="2025/05/10")
    data_file.write_text(json.dumps([good, bad]))
    assert JsonFilePersistence(data_file).load() == []


def test_duplicate_ids_load_empty(data_file):
    record = _sample()[0].to_dict()
    data_file.write_text(json.dumps([record, record]))
    assert JsonFilePersistence(data_file).load() == []


def test_unreadable_path_loads_empty(tmp_path):
    directory = tmp_path / "data.json"
    directory.mkdir()
    assert JsonFilePersistence(directory).load() == []


def test_failed_write_keeps_previous_file(data_file, monkeypatch):
    p = JsonFilePersistence(data_file)
    first = _sample()[:1]
    p.save(first)
    before = data_file.read_text()

    def boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", boom)
    assert p.save(_sample()) is False
    assert data_file.read_text() == before
    assert not data_file.with_suffix(".json.tmp").exists()


def test_unwritable_location_does_not_raise(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    p = JsonFilePersistence(blocker / "data.json")
    assert p.save(_sample()) is False


def test_undecodable_file_loads_empty(data_file):
    data_file.write_bytes(b"[\xff\xfe]")
    assert JsonFilePersistence(data_file).load() == []


def test_out_of_range_amount_loads_empty(data_file):
    record = _sample()[0].to_dict()
    data_file.write_text(json.dumps([dict(record, amount=10 ** 400)]))
    assert JsonFilePersistence(data_file).load() == []
