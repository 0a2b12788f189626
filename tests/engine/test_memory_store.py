from __future__ import annotations

import threading
from dataclasses import dataclass, replace

import pytest

from src.records_system.records_system.engine.filters import Op, Predicate
from src.records_system.records_system.engine.memory_store import InMemoryEntityStore


@dataclass(frozen=True)
class Item:
    item_id: int
    label: str


def test_ids_are_monotonic_and_never_reused():
    store = InMemoryEntityStore("item_id")
    first = store.next_id()
    store.insert(Item(first, "a"))
    store.delete_by_id(first)
    assert store.next_id() == first + 1


def test_start_id_is_configurable():
    assert InMemoryEntityStore("item_id", start_id=100).next_id() == 100


def test_now_comes_from_injected_clock(clock):
    store = InMemoryEntityStore("item_id", clock=clock)
    assert store.now() == clock.now()
    clock.advance(seconds=5)
    assert store.now() == clock.now()


def test_replace_keeps_insertion_position():
    store = InMemoryEntityStore("item_id")
    for i, label in enumerate(["a", "b", "c"], start=1):
        store.insert(Item(i, label))
    store.replace(Item(1, "A"))
    assert [x.label for x in store.list_all()] == ["A", "b", "c"]


def test_insert_duplicate_id_and_replace_missing_fail():
    store = InMemoryEntityStore("item_id")
    store.insert(Item(1, "a"))
    with pytest.raises(ValueError):
        store.insert(Item(1, "again"))
    with pytest.raises(KeyError):
        store.replace(Item(2, "b"))


def test_find_one_and_select():
    store = InMemoryEntityStore("item_id")
    store.insert(Item(1, "apple"))
    store.insert(Item(2, "banana"))
    assert store.find_one("label", "banana") == Item(2, "banana")
    assert store.find_one("label", "cherry") is None
    assert store.select([Predicate("label", Op.CONTAINS, "AN")]) == [Item(2, "banana")]


def test_delete_reports_whether_a_row_was_removed():
    store = InMemoryEntityStore("item_id")
    store.insert(Item(1, "a"))
    assert store.delete_by_id(1) is True
    assert store.delete_by_id(1) is False
    assert store.get_by_id(1) is None


def test_transaction_is_reentrant_and_serializes_writers():
    store = InMemoryEntityStore("item_id")
    store.insert(Item(1, "x"))
    errors: list[Exception] = []

    def bump():
        try:
            for _ in range(200):
                with store.transaction():
                    with store.transaction():
                        current = store.get_by_id(1)
                        store.replace(replace(current, label=current.label + "x"))
        except Exception as exc:  # pragma: no cover - surfaced by the assert below
            errors.append(exc)

    threads = [threading.Thread(target=bump) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(store.get_by_id(1).label) == 1 + 4 * 200
