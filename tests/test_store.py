import json
from datetime import date

import pytest

from db import MemoryKeyValueStore
from store import RecordOutOfRange, RecordStore
from helpers import make_record


def test_load_missing_key_gives_empty(store):
    assert len(store) == 0


def test_load_malformed_json_gives_empty():
    s = RecordStore(MemoryKeyValueStore({"sub_customers": "{not json"}))
    s.load()
    assert s.records == ()


def test_load_non_list_gives_empty():
    s = RecordStore(MemoryKeyValueStore({"sub_customers": json.dumps({"name": "x"})}))
    s.load()
    assert len(s) == 0


def test_load_browser_format_assigns_ids():
    saved = [
        {"name": "Alice", "phone": "555-0100", "plan": "VPN", "price": "10",
         "start": "2024-01-01", "end": "2024-02-01"},
        {"name": "Bob", "phone": "555-0101", "plan": "Zoom", "price": "abc",
         "start": "2024-01-05", "end": "2024-02-05"},
    ]
    s = RecordStore(MemoryKeyValueStore({"sub_customers": json.dumps(saved)}))
    s.load()
    assert [r.name for r in s] == ["Alice", "Bob"]
    assert s[0].price == 10.0
    assert s[1].price == 0.0
    assert s[0].start == date(2024, 1, 1)
    assert s[0].id and s[1].id and s[0].id != s[1].id


def test_load_skips_bad_entries():
    saved = [
        "junk",
        {"name": "NoDates", "phone": "1", "plan": "VPN", "price": "1"},
        {"name": "Ok", "phone": "1", "plan": "VPN", "price": "1", "start": "2024-01-01", "end": "2024-01-02"},
    ]
    s = RecordStore(MemoryKeyValueStore({"sub_customers": json.dumps(saved)}))
    s.load()
    assert [r.name for r in s] == ["Ok"]


def test_every_mutation_persists(store, backend):
    a, b = make_record(name="A"), make_record(name="B")
    store.add(a)
    assert [d["name"] for d in json.loads(backend.get("sub_customers"))] == ["A"]
    store.add(b)
    store.update(0, make_record(name="A2", id=a.id))
    assert [d["name"] for d in json.loads(backend.get("sub_customers"))] == ["A2", "B"]
    store.delete(0)
    assert [d["name"] for d in json.loads(backend.get("sub_customers"))] == ["B"]


def test_persist_then_load_restores_records(store, backend):
    store.add(make_record(name="A"))
    store.add(make_record(name="B", price=9.5))
    reloaded = RecordStore(backend)
    reloaded.load()
    assert reloaded.records == store.records


def test_delete_shifts_following_records(store):
    for n in ["A", "B", "C"]:
        store.add(make_record(name=n))
    removed = store.delete(1)
    assert removed.name == "B"
    assert [r.name for r in store] == ["A", "C"]


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_out_of_range_index(store, index):
    for n in ["A", "B", "C"]:
        store.add(make_record(name=n))
    with pytest.raises(RecordOutOfRange):
        store.update(index, make_record())
    with pytest.raises(RecordOutOfRange):
        store.delete(index)
    assert len(store) == 3


def test_index_of(store):
    a, b = make_record(name="A"), make_record(name="B")
    store.add(a)
    store.add(b)
    assert store.index_of(b.id) == 1
    assert store.index_of("missing") is None


def test_load_trims_text_fields():
    saved = [{"name": "Alice ", "phone": " 555-0100", "plan": "VPN ", "price": "10",
              "start": "2024-01-01", "end": "2024-02-01"}]
    s = RecordStore(MemoryKeyValueStore({"sub_customers": json.dumps(saved)}))
    s.load()
    assert (s[0].name, s[0].phone, s[0].plan) == ("Alice", "555-0100", "VPN")
