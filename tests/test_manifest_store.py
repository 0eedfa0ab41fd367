import threading

import pytest

from models.manifest import ManifestRecord, ManifestStore, make_allow_list


def _record(name, path):
    return ManifestRecord(name, "1.0.0", "", "", "MIT", path)


def test_arrival_order_and_names():
    store = ManifestStore()
    for record in [_record("a", "/1"), _record("b", "/2"), _record("a", "/3")]:
        store.add(record)

    assert len(store) == 3
    assert [r.absolute_path for r in store.get_all()] == ["/1", "/2", "/3"]
    assert store.names() == frozenset({"a", "b"})


def test_duplicate_path_is_rejected():
    store = ManifestStore()
    store.add(_record("a", "/1"))

    with pytest.raises(ValueError, match="/1"):
        store.add(_record("b", "/1"))


def test_concurrent_adds():
    store = ManifestStore()

    def add_range(offset):
        for i in range(250):
            store.add(_record(f"p{offset}", f"/{offset}/{i}"))

    threads = [threading.Thread(target=add_range, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 2000
    assert sum(1 for r in store.get_all() if r.name == "p3") == 250


def test_records_are_immutable():
    record = _record("a", "/1")

    with pytest.raises(AttributeError):
        record.name = "b"


def test_make_allow_list():
    assert make_allow_list() == frozenset()
    assert make_allow_list(["a", "a", "b"]) == frozenset({"a", "b"})
