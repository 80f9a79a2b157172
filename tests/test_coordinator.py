# tests/test_coordinator.py

from __future__ import annotations

import threading

import pytest

from tasklist.core.coordinator import TaskCoordinator
from tasklist.tasks.task_models import Task
from tasklist.tasks.task_store import StoreError

from .fakes import FakeTaskRepo


def _seeded(*descriptions: str) -> tuple[TaskCoordinator, FakeTaskRepo]:
    repo = FakeTaskRepo([Task(description=d) for d in descriptions])
    coord = TaskCoordinator(repo)
    coord.initialize()
    return coord, repo


def test_snapshot_starts_empty_until_initialize() -> None:
    repo = FakeTaskRepo([Task(description="a"), Task(description="b")])
    coord = TaskCoordinator(repo)
    assert coord.tasks == ()

    coord.initialize()
    assert [t.description for t in coord.tasks] == ["a", "b"]


def test_add_then_list(coordinator: TaskCoordinator) -> None:
    before = len(coordinator.tasks)
    coordinator.add("buy milk")

    assert len(coordinator.tasks) == before + 1
    added = coordinator.tasks[-1]
    assert added.description == "buy milk"
    assert added.is_completed is False
    assert added.id is not None


def test_toggle_twice_restores_state_and_keeps_id(coordinator: TaskCoordinator) -> None:
    coordinator.add("walk dog")
    (original,) = coordinator.tasks

    coordinator.toggle_completion(original)
    (once,) = coordinator.tasks
    assert once.is_completed is True
    assert once.id == original.id

    coordinator.toggle_completion(once)
    (twice,) = coordinator.tasks
    assert twice.is_completed is False
    assert twice.id == original.id


def test_edit_preserves_identity(coordinator: TaskCoordinator) -> None:
    coordinator.add("old text")
    coordinator.toggle_completion(coordinator.tasks[0])
    target = coordinator.tasks[0]

    coordinator.edit(target, "new text")
    (edited,) = coordinator.tasks
    assert edited.id == target.id
    assert edited.is_completed is True
    assert edited.description == "new text"


def test_delete_removes_exactly_one(coordinator: TaskCoordinator) -> None:
    for d in ("a", "b", "c"):
        coordinator.add(d)
    target = coordinator.tasks[1]

    coordinator.delete(target)
    assert len(coordinator.tasks) == 2
    assert all(t.id != target.id for t in coordinator.tasks)


def test_delete_all_empties_without_refresh() -> None:
    coord, repo = _seeded("a", "b")
    repo.calls.clear()

    assert coord.delete_all() == ()
    assert coord.tasks == ()
    assert repo.calls == ["delete_all"]


def test_search_substring_semantics(coordinator: TaskCoordinator) -> None:
    for d in ("buy milk", "buy eggs", "walk dog"):
        coordinator.add(d)

    coordinator.search("buy")
    assert sorted(t.description for t in coordinator.tasks) == ["buy eggs", "buy milk"]

    coordinator.search("")
    assert len(coordinator.tasks) == 3


def test_filter_operates_on_current_snapshot_not_store() -> None:
    coord, repo = _seeded("buy milk", "buy eggs", "walk dog")
    milk, _, dog = coord.tasks
    coord.toggle_completion(milk)
    coord.toggle_completion(dog)

    coord.search("buy")
    repo.calls.clear()
    coord.filter_completed()

    assert [t.description for t in coord.tasks] == ["buy milk"]
    assert repo.calls == []


def test_filter_pending_and_show_all() -> None:
    coord, _ = _seeded("a", "b", "c")
    coord.toggle_completion(coord.tasks[0])

    coord.filter_pending()
    assert [t.description for t in coord.tasks] == ["b", "c"]

    coord.filter_completed()
    assert coord.tasks == ()

    coord.show_all()
    assert [t.description for t in coord.tasks] == ["a", "b", "c"]


def test_every_publish_is_a_complete_snapshot() -> None:
    coord, _ = _seeded("a")
    seen: list[tuple[Task, ...]] = []
    unsubscribe = coord.snapshot.subscribe(seen.append)

    coord.add("b")
    coord.filter_pending()
    coord.delete_all()
    unsubscribe()
    coord.add("c")

    assert [[t.description for t in s] for s in seen] == [["a", "b"], ["a", "b"], []]


def test_store_failure_propagates_and_keeps_snapshot() -> None:
    coord, repo = _seeded("a", "b")
    before = coord.tasks
    seen: list[tuple[Task, ...]] = []
    coord.snapshot.subscribe(seen.append)

    repo.fail_on = {"insert"}
    with pytest.raises(StoreError):
        coord.add("c")

    repo.fail_on = {"fetch_all"}
    with pytest.raises(StoreError):
        coord.toggle_completion(before[0])

    repo.fail_on = {"delete_all"}
    with pytest.raises(StoreError):
        coord.delete_all()

    assert coord.tasks == before
    assert seen == []


def test_blank_description_never_reaches_store() -> None:
    coord, repo = _seeded("a")
    repo.calls.clear()

    with pytest.raises(ValueError):
        coord.add("   ")
    with pytest.raises(ValueError):
        coord.edit(coord.tasks[0], "")

    assert repo.calls == []
    assert [t.description for t in coord.tasks] == ["a"]


def test_failing_listener_does_not_break_operation() -> None:
    coord, _ = _seeded()
    seen: list[int] = []

    def broken(_snapshot) -> None:
        raise RuntimeError("boom")

    coord.snapshot.subscribe(broken)
    coord.snapshot.subscribe(lambda s: seen.append(len(s)))

    coord.add("still works")
    assert seen == [1]
    assert len(coord.tasks) == 1


def test_concurrent_adds_are_serialized() -> None:
    coord, _ = _seeded()

    threads = [threading.Thread(target=coord.add, args=(f"task {i}",)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    # The last publish always reflects every completed insert.
    assert len(coord.tasks) == 20
