# tests/test_store_tasks.py

from __future__ import annotations

from datetime import datetime

from taskdeck.core.events import EventKind
from taskdeck.core.models import RepeatKind

from .conftest import NOW


def test_add_task_appends_with_next_order_and_announces_it(store, sink, blobs) -> None:
    a = store.add_task("Buy milk")
    b = store.add_task("Walk dog")

    assert a is not None and b is not None
    assert [t.title for t in store.state.tasks] == ["Buy milk", "Walk dog"]
    assert (a.order, b.order) == (0, 1)
    assert a.list_id == "all"
    assert a.created_at == a.updated_at == NOW
    assert not a.completed and not a.important and a.repeat == RepeatKind.NONE

    assert sink.last.kind == EventKind.SUCCESS
    assert sink.last.title == "Task created"
    assert sink.last.description == '"Walk dog" has been added'
    # one write per command
    assert blobs.writes == 2


def test_add_task_order_is_per_list(store) -> None:
    work = store.add_list("Work")
    assert work is not None

    store.add_task("inbox 1")
    w1 = store.add_task("work 1", work.id)
    w2 = store.add_task("work 2", work.id)

    assert (w1.order, w2.order) == (0, 1)


def test_add_task_rejects_blank_title_without_touching_state(store, sink, blobs) -> None:
    assert store.add_task("   ") is None

    assert store.state.tasks == ()
    assert blobs.writes == 0
    assert sink.last.kind == EventKind.ERROR
    assert sink.last.title == "Invalid input"
    assert sink.last.description == "Task title cannot be empty"


def test_add_task_title_length_limit(store, sink) -> None:
    assert store.add_task("x" * 201) is None
    assert sink.last.title == "Title too long"
    assert sink.last.description == "Task title must be 200 characters or less"

    assert store.add_task("x" * 200) is not None
    assert len(store.state.tasks) == 1


def test_add_task_trims_title(store) -> None:
    task = store.add_task("  Call mom  ")
    assert task.title == "Call mom"


def test_add_task_into_unknown_list_is_rejected(store, sink) -> None:
    assert store.add_task("Lost", "no-such-list") is None
    assert store.state.tasks == ()
    assert sink.last.title == "List not found"


def test_add_task_with_steps_and_categories(store) -> None:
    cat = store.add_category("Home")
    task = store.add_task(
        "Clean",
        steps=["Kitchen", "  ", "Bath"],
        category_ids=[cat.id, cat.id],
        repeat="weekly",
        repeat_days=[9, 1, 3, 1],
    )

    assert [s.title for s in task.steps] == ["Kitchen", "Bath"]
    assert all(not s.completed for s in task.steps)
    assert task.category_ids == (cat.id,)
    assert task.repeat == RepeatKind.WEEKLY
    assert task.repeat_days == (1, 3)


def test_toggle_task_announces_completion_only(store, sink, clock) -> None:
    task = store.add_task("Read")
    clock.advance(hours=2)

    store.toggle_task(task.id)
    done = store.state.find_task(task.id)
    assert done.completed
    assert done.updated_at == clock.now
    assert sink.last.title == "Task completed"

    n = len(sink.events)
    store.toggle_task(task.id)
    assert not store.state.find_task(task.id).completed
    assert len(sink.events) == n


def test_toggle_flags_emit_their_notifications(store, sink) -> None:
    task = store.add_task("Plan trip")

    store.toggle_important(task.id)
    assert sink.last.title == "Marked as important"
    store.toggle_my_day(task.id)
    assert sink.last.title == "Added to My Day"

    t = store.state.find_task(task.id)
    assert t.important and t.my_day


def test_pin_and_global_pin_are_independent(store) -> None:
    task = store.add_task("Pinned")

    store.toggle_pin(task.id)
    t = store.state.find_task(task.id)
    assert t.pinned and not t.pinned_globally

    store.toggle_global_pin(task.id)
    store.toggle_pin(task.id)
    t = store.state.find_task(task.id)
    assert t.pinned_globally and not t.pinned


def test_toggle_unknown_task_is_an_error_event(store, sink, blobs) -> None:
    assert store.toggle_task("ghost") is False
    assert sink.last.kind == EventKind.ERROR
    assert sink.last.title == "Task not found"
    assert blobs.writes == 0


def test_update_task_due_date_notifications(store, sink, clock) -> None:
    task = store.add_task("Dentist")
    due = datetime(2026, 10, 20, 9, 0)

    store.update_task(task.id, {"due_date": due})
    assert sink.last.kind == EventKind.INFO
    assert sink.last.title == "Due date updated"
    assert sink.last.description == "Oct 20, 2026"

    store.update_task(task.id, {"due_date": datetime(2026, 10, 20, 9, 0)})
    assert sink.last.title == "Due date unchanged"

    store.update_task(task.id, {"due_date": None})
    assert sink.last.title == "Due date removed"
    assert store.state.find_task(task.id).due_date is None


def test_update_task_without_due_date_is_silent(store, sink, clock) -> None:
    task = store.add_task("Essay")
    n = len(sink.events)
    clock.advance(minutes=5)

    assert store.update_task(task.id, {"notes": "two pages", "title": " Essay v2 "})

    t = store.state.find_task(task.id)
    assert t.notes == "two pages"
    assert t.title == "Essay v2"
    assert t.updated_at == clock.now
    assert len(sink.events) == n


def test_update_task_rejects_unknown_fields_and_bad_titles(store, sink) -> None:
    task = store.add_task("Keep")

    assert store.update_task(task.id, {"colour": "red"}) is False
    assert sink.last.title == "Invalid update"

    assert store.update_task(task.id, {"title": ""}) is False
    assert sink.last.title == "Invalid input"
    assert store.state.find_task(task.id).title == "Keep"


def test_delete_task(store, sink) -> None:
    keep = store.add_task("keep")
    drop = store.add_task("drop")

    assert store.delete_task(drop.id)
    assert [t.id for t in store.state.tasks] == [keep.id]
    assert sink.last.title == "Task deleted"

    assert store.delete_task(drop.id) is False
    assert sink.last.title == "Task not found"


def test_sub_task_lifecycle(store) -> None:
    task = store.add_task("Move house")

    store.add_sub_task(task.id, "Pack books")
    store.add_sub_task(task.id, "Book van")
    steps = store.state.find_task(task.id).steps
    assert [s.title for s in steps] == ["Pack books", "Book van"]

    store.toggle_sub_task(task.id, steps[0].id)
    assert store.state.find_task(task.id).steps[0].completed

    store.delete_sub_task(task.id, steps[1].id)
    assert [s.title for s in store.state.find_task(task.id).steps] == ["Pack books"]


def test_sub_task_commands_ignore_unknown_ids(store, sink, blobs) -> None:
    task = store.add_task("Host")
    writes, n = blobs.writes, len(sink.events)

    assert store.add_sub_task("ghost", "x") is False
    assert store.toggle_sub_task(task.id, "ghost-step") is False
    assert store.delete_sub_task("ghost", "ghost-step") is False

    assert blobs.writes == writes
    assert len(sink.events) == n


def test_reorder_tasks_assigns_positions_without_touching_updated_at(store, clock) -> None:
    a = store.add_task("a")
    b = store.add_task("b")
    c = store.add_task("c")
    clock.advance(days=1)

    store.reorder_tasks([c.id, a.id, b.id], "all")

    by_id = {t.id: t for t in store.state.tasks}
    assert (by_id[c.id].order, by_id[a.id].order, by_id[b.id].order) == (0, 1, 2)
    assert all(t.updated_at == NOW for t in store.state.tasks)
    assert [t.title for t in store.get_filtered_tasks()] == ["c", "a", "b"]


def test_reorder_tasks_only_touches_the_given_list(store) -> None:
    work = store.add_list("Work")
    inbox = store.add_task("inbox")
    w = store.add_task("work", work.id)

    store.reorder_tasks([w.id, inbox.id], work.id)

    assert store.state.find_task(w.id).order == 0
    assert store.state.find_task(inbox.id).order == 0


def test_search_query_is_not_persisted(store, blobs) -> None:
    store.add_task("Buy milk")
    writes = blobs.writes

    store.set_search_query("milk")

    assert store.state.search_query == "milk"
    assert blobs.writes == writes


def test_presentation_toggles_persist(store, blobs) -> None:
    store.toggle_dark_mode()
    store.toggle_sidebar()

    assert store.state.dark_mode
    assert store.state.sidebar_collapsed
    assert blobs.writes == 2


def test_moving_a_task_takes_the_next_slot_in_the_target_list(store) -> None:
    a = store.add_list("A")
    b = store.add_list("B")
    one = store.add_task("one", a.id)
    store.add_task("two", b.id)

    assert store.update_task(one.id, {"list_id": b.id})

    moved = store.state.find_task(one.id)
    assert moved.list_id == b.id
    orders = [t.order for t in store.state.tasks if t.list_id == b.id]
    assert sorted(orders) == [0, 1]
    assert moved.order == 1


def test_moving_a_task_keeps_an_explicit_order(store) -> None:
    b = store.add_list("B")
    one = store.add_task("one")

    store.update_task(one.id, {"list_id": b.id, "order": 5})

    assert store.state.find_task(one.id).order == 5


def test_update_task_steps_accepts_titles_and_keeps_existing_steps(store, blobs) -> None:
    task = store.add_task("Trip", steps=["Pack"])
    pack = store.state.find_task(task.id).steps[0]
    writes = blobs.writes

    assert store.update_task(task.id, {"steps": [pack, " Tickets ", "", "Passport"]})

    steps = store.state.find_task(task.id).steps
    assert [s.title for s in steps] == ["Pack", "Tickets", "Passport"]
    assert steps[0].id == pack.id
    assert len({s.id for s in steps}) == 3
    assert blobs.writes == writes + 1


def test_update_task_rejects_malformed_steps(store, sink) -> None:
    task = store.add_task("Trip")

    assert store.update_task(task.id, {"steps": [42]}) is False
    assert sink.last.title == "Invalid steps"
    assert store.state.find_task(task.id).steps == ()


def test_non_numeric_repeat_days_are_rejected(store, sink) -> None:
    assert store.add_task("Gym", repeat="daily", repeat_days=["mon"]) is None
    assert sink.last.kind == EventKind.ERROR
    assert sink.last.title == "Invalid repeat days"

    task = store.add_task("Gym", repeat="daily", repeat_days=[1, "3", 9])
    assert store.state.find_task(task.id).repeat_days == (1, 3)

    assert store.update_task(task.id, {"repeat_days": [None]}) is False
    assert sink.last.title == "Invalid repeat days"
