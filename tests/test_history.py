"""Tests for calculation history."""

import json

import pytest

from calcpad.history import HistoryManager
from calcpad.models import Operator
from calcpad.storage import JsonStorage


@pytest.fixture
def storage(tmp_path):
    return JsonStorage(tmp_path)


def test_add_entry_formats_strings():
    history = HistoryManager()
    entry = history.add_entry([2.0, Operator.ADD, 3.0, Operator.MULTIPLY, 4.0], 14.0)
    assert entry.expression_string == "2 + 3 × 4"
    assert entry.result_string == "14"
    assert history.count() == 1
    assert not history.is_empty()


def test_entries_newest_first():
    history = HistoryManager()
    first = history.add_entry([1.0], 1.0)
    second = history.add_entry([2.0], 2.0)
    assert [e.id for e in history.entries()] == [second.id, first.id]


def test_ids_are_unique():
    history = HistoryManager()
    ids = {history.add_entry([float(i)], float(i)).id for i in range(20)}
    assert len(ids) == 20


def test_limit_drops_oldest():
    history = HistoryManager(max_entries=2)
    for i in range(4):
        history.add_entry([float(i)], float(i))
    assert [e.result for e in history.entries()] == [3.0, 2.0]


def test_get_and_remove_entry():
    history = HistoryManager()
    entry = history.add_entry([5.0], 5.0)
    assert history.get_entry(entry.id) is entry
    history.remove_entry(entry.id)
    assert history.get_entry(entry.id) is None
    assert history.is_empty()


def test_clear_notifies():
    history = HistoryManager()
    seen = []
    history.subscribe(seen.append)
    history.add_entry([5.0], 5.0)
    history.clear()
    assert [len(s) for s in seen] == [1, 0]


def test_persisted_between_instances(storage):
    HistoryManager(storage).add_entry([6.0, Operator.DIVIDE, 4.0], 1.5)
    reloaded = HistoryManager(storage)
    assert reloaded.count() == 1
    entry = reloaded.entries()[0]
    assert entry.expression == [6.0, Operator.DIVIDE, 4.0]
    assert entry.result == 1.5


def test_malformed_stored_entries_skipped(storage):
    storage.save_history([{"id": 1, "result": 2.0}, {"nope": True}, "junk"])
    history = HistoryManager(storage)
    assert history.count() == 1


def test_export_import_round_trip():
    source = HistoryManager()
    source.add_entry([1.0, Operator.ADD, 1.0], 2.0)
    target = HistoryManager()
    assert target.import_json(source.export_json())
    assert target.entries()[0].expression_string == "1 + 1"


@pytest.mark.parametrize("text", ["{not json", json.dumps({"a": 1})])
def test_import_rejects_bad_input(text):
    history = HistoryManager()
    history.add_entry([1.0], 1.0)
    assert not history.import_json(text)
    assert history.count() == 1
