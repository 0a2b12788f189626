from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.records_system.records_system.common.validators import require_non_empty
from src.records_system.records_system.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.records_system.records_system.engine.kind import EntityKind, UniqueKey
from src.records_system.records_system.engine.lifecycle import LifecycleManager
from src.records_system.records_system.engine.memory_store import InMemoryEntityStore


@dataclass(frozen=True)
class Tag:
    tag_id: int
    code: str
    alias: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class NewTag:
    code: str
    alias: Optional[str] = None


def validate_tag(draft: NewTag, today: date) -> None:
    require_non_empty(draft.code, "code")


def materialize_tag(draft: NewTag, *, entity_id, created_at, updated_at) -> Tag:
    return Tag(entity_id, draft.code, draft.alias, created_at, updated_at)


TAG_KIND = EntityKind(
    name="tag",
    id_field="tag_id",
    materialize=materialize_tag,
    validate=validate_tag,
    unique_keys=(UniqueKey("code", "code"), UniqueKey("alias", "alias", skip_blank=True)),
)


@pytest.fixture
def manager(clock):
    return LifecycleManager(TAG_KIND, InMemoryEntityStore("tag_id", clock=clock))


def test_create_assigns_id_and_timestamps(manager, clock):
    tag = manager.create(NewTag("alpha"))
    assert tag.tag_id == 1
    assert tag.created_at == tag.updated_at == clock.now()


def test_create_validates_before_writing(manager):
    with pytest.raises(ValidationError):
        manager.create(NewTag("  "))
    assert manager.create(NewTag("ok")).tag_id == 1


def test_duplicate_unique_key_is_conflict(manager):
    manager.create(NewTag("alpha"))
    with pytest.raises(ConflictError, match="code already exists: alpha"):
        manager.create(NewTag("alpha"))


def test_blank_optional_key_is_not_checked(manager):
    manager.create(NewTag("a", alias=""))
    manager.create(NewTag("b", alias=""))
    manager.create(NewTag("c", alias="x"))
    with pytest.raises(ConflictError):
        manager.create(NewTag("d", alias="x"))


def test_update_keeps_created_at_and_moves_updated_at(manager, clock):
    created = manager.create(NewTag("alpha"))
    clock.advance(minutes=1)
    updated = manager.update(created.tag_id, NewTag("beta", alias="b"))
    assert updated.code == "beta"
    assert updated.alias == "b"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at


def test_updated_at_strictly_increases_on_a_frozen_clock(manager):
    created = manager.create(NewTag("alpha"))
    first = manager.update(created.tag_id, NewTag("alpha"))
    second = manager.update(created.tag_id, NewTag("alpha"))
    assert created.updated_at < first.updated_at < second.updated_at


def test_update_to_own_value_is_allowed_but_not_to_anothers(manager):
    a = manager.create(NewTag("alpha"))
    manager.create(NewTag("beta"))
    manager.update(a.tag_id, NewTag("alpha"))
    with pytest.raises(ConflictError):
        manager.update(a.tag_id, NewTag("beta"))


def test_update_and_delete_missing_raise_not_found(manager):
    with pytest.raises(NotFoundError):
        manager.update(42, NewTag("x"))
    with pytest.raises(NotFoundError):
        manager.delete(42)


def test_delete_then_require_is_not_found(manager):
    tag = manager.create(NewTag("alpha"))
    manager.delete(tag.tag_id)
    with pytest.raises(NotFoundError):
        manager.require(tag.tag_id)


def test_transition_refreshes_updated_at(manager, clock):
    tag = manager.create(NewTag("alpha"))
    clock.advance(seconds=1)
    moved = manager.transition(tag.tag_id, lambda t: replace(t, alias="renamed"))
    assert moved.alias == "renamed"
    assert moved.updated_at == clock.now()
    assert manager.require(tag.tag_id) == moved


def test_concurrent_creates_of_one_key_leave_a_single_row(clock):
    store = InMemoryEntityStore("tag_id", clock=clock)
    manager = LifecycleManager(TAG_KIND, store)
    start = threading.Barrier(8)
    created: list[Tag] = []
    conflicts: list[ConflictError] = []

    def create():
        start.wait()
        try:
            created.append(manager.create(NewTag("alpha")))
        except ConflictError as exc:
            conflicts.append(exc)

    threads = [threading.Thread(target=create) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(created) == 1
    assert len(conflicts) == 7
    assert store.list_all() == created
