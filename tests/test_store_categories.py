# tests/test_store_categories.py

from __future__ import annotations

from taskdeck.core.events import EventKind
from taskdeck.core.models import ViewType


def test_delete_category_strips_membership_but_keeps_tasks(store, sink) -> None:
    home = store.add_category("Home")
    work = store.add_category("Work")
    a = store.add_task("a", category_ids=[home.id, work.id])
    b = store.add_task("b", category_ids=[home.id])
    store.add_task("c")

    assert store.delete_category(home.id)

    assert len(store.state.tasks) == 3
    assert store.state.find_task(a.id).category_ids == (work.id,)
    assert store.state.find_task(b.id).category_ids == ()
    assert store.state.find_category(home.id) is None
    assert sink.last.kind == EventKind.WARNING
    assert sink.last.title == "Category deleted"
    assert sink.last.description == "Removed from 2 tasks"


def test_delete_unused_category_is_informational(store, sink) -> None:
    cat = store.add_category("Spare")
    store.delete_category(cat.id)
    assert sink.last.kind == EventKind.INFO


def test_delete_current_category_falls_back_to_all_view(store) -> None:
    cat = store.add_category("Home")
    store.set_view(ViewType.CATEGORY, category_id=cat.id)

    store.delete_category(cat.id)

    assert store.state.current_view == ViewType.ALL
    assert store.state.current_category_id is None


def test_duplicate_category_names_are_rejected(store, sink) -> None:
    store.add_category("Home")
    assert store.add_category("home") is None
    assert len(store.state.categories) == 1
    assert sink.last.title == "Duplicate category"


def test_assign_and_remove_category(store, blobs) -> None:
    cat = store.add_category("Errands")
    task = store.add_task("Post office")

    assert store.assign_task_to_category(task.id, cat.id)
    writes = blobs.writes
    assert store.assign_task_to_category(task.id, cat.id) is False
    assert blobs.writes == writes
    assert store.state.find_task(task.id).category_ids == (cat.id,)

    assert store.remove_task_from_category(task.id, cat.id)
    assert store.state.find_task(task.id).category_ids == ()


def test_assign_unknown_category_is_an_error(store, sink) -> None:
    task = store.add_task("x")
    assert store.assign_task_to_category(task.id, "ghost") is False
    assert sink.last.title == "Category not found"


def test_assign_task_to_categories_replaces_the_set(store) -> None:
    a = store.add_category("A")
    b = store.add_category("B")
    c = store.add_category("C")
    task = store.add_task("x", category_ids=[a.id])

    store.assign_task_to_categories(task.id, [c.id, b.id, c.id])

    assert store.state.find_task(task.id).category_ids == (c.id, b.id)


def test_categories_for_task_skips_dangling_ids(store) -> None:
    real = store.add_category("Real")
    task = store.add_task("x")
    store.update_task(task.id, {"category_ids": ["ghost", real.id]})

    assert [c.name for c in store.get_categories_for_task(task.id)] == ["Real"]
    assert store.get_categories_for_task("no-task") == []


def test_category_counts_and_view(store) -> None:
    cat = store.add_category("Home")
    a = store.add_task("a", category_ids=[cat.id])
    store.add_task("b", category_ids=[cat.id])
    store.add_task("c")
    store.toggle_task(a.id)

    assert store.get_task_count_for_category(cat.id) == 1

    store.set_view(ViewType.CATEGORY, category_id=cat.id)
    assert [t.title for t in store.get_tasks_for_current_view()] == ["b"]


def test_update_category(store, clock) -> None:
    cat = store.add_category("Home")
    clock.advance(hours=1)

    store.update_category(cat.id, {"name": "House", "emoji": "🏠"})

    updated = store.state.find_category(cat.id)
    assert updated.name == "House"
    assert updated.emoji == "🏠"
    assert updated.updated_at == clock.now
