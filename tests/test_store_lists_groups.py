# tests/test_store_lists_groups.py

from __future__ import annotations

from taskdeck.core.events import EventKind
from taskdeck.core.models import ViewType
from taskdeck.core.relations import RELATIONS, DeletePolicy
from taskdeck.tasks import queries


def test_relationship_table_policies() -> None:
    assert RELATIONS["list"].policy == DeletePolicy.CASCADE
    assert RELATIONS["group"].policy == DeletePolicy.REASSIGN
    assert RELATIONS["category"].policy == DeletePolicy.STRIP


def test_system_lists_are_seeded(store) -> None:
    system = [lst for lst in store.state.lists if lst.is_system]
    assert [lst.id for lst in system] == ["my-day", "important", "planned", "all"]
    assert [lst.name for lst in system] == ["My Day", "Important", "Planned", "Tasks"]


def test_delete_list_cascades_to_its_tasks(store, sink) -> None:
    work = store.add_list("Work")
    store.add_task("inbox")
    store.add_task("w1", work.id)
    store.add_task("w2", work.id)

    assert store.delete_list(work.id)

    assert store.state.find_list(work.id) is None
    assert [t.title for t in store.state.tasks] == ["inbox"]
    assert sink.last.kind == EventKind.WARNING
    assert sink.last.title == "List deleted"
    assert sink.last.description == "2 tasks removed"


def test_delete_empty_list_is_informational(store, sink) -> None:
    empty = store.add_list("Empty")
    store.delete_list(empty.id)
    assert sink.last.kind == EventKind.INFO
    assert sink.last.title == "List deleted"


def test_delete_current_list_falls_back_to_all_view(store) -> None:
    work = store.add_list("Work")
    store.set_view(ViewType.LIST, list_id=work.id)

    store.delete_list(work.id)

    assert store.state.current_view == ViewType.ALL
    assert store.state.current_list_id is None


def test_system_lists_cannot_be_deleted(store, sink) -> None:
    before = store.state.lists
    assert store.delete_list("important") is False
    assert store.state.lists == before
    assert sink.last.kind == EventKind.ERROR
    assert sink.last.title == "Cannot delete list"


def test_add_task_refuses_system_lists_other_than_all(store, sink) -> None:
    assert store.add_task("nope", "important") is None
    assert sink.last.title == "List not found"


def test_list_order_is_scoped_per_group(store) -> None:
    g = store.add_group("Projects")
    a = store.add_list("A")
    x = store.add_list("X", group_id=g.id)
    b = store.add_list("B")
    y = store.add_list("Y", group_id=g.id)

    assert (a.order, b.order) == (0, 1)
    assert (x.order, y.order) == (0, 1)
    assert [lst.name for lst in store.get_lists_in_group(None)] == ["A", "B"]
    assert [lst.name for lst in store.get_lists_in_group(g.id)] == ["X", "Y"]
    assert store.get_group_for_list(x.id) == store.state.find_group(g.id)
    assert store.get_group_for_list(a.id) is None


def test_add_list_into_unknown_group_is_rejected(store, sink) -> None:
    assert store.add_list("Orphan", group_id="ghost") is None
    assert sink.last.title == "Group not found"


def test_delete_group_moves_lists_to_ungrouped_and_keeps_them(store, sink) -> None:
    loose = store.add_list("Loose")
    g = store.add_group("Projects")
    x = store.add_list("X", group_id=g.id)
    y = store.add_list("Y", group_id=g.id)
    store.add_task("in x", x.id)

    assert store.delete_group(g.id)

    assert store.state.find_group(g.id) is None
    moved = {lst.id: lst for lst in store.get_lists_in_group(None)}
    assert set(moved) == {loose.id, x.id, y.id}
    # appended after the existing ungrouped lists, relative order kept
    assert (moved[loose.id].order, moved[x.id].order, moved[y.id].order) == (0, 1, 2)
    assert len(store.state.tasks) == 1

    assert sink.last.kind == EventKind.WARNING
    assert sink.last.title == "Group deleted"
    assert sink.last.description == "2 lists moved"


def test_delete_group_into_another_group(store) -> None:
    src = store.add_group("Old")
    dst = store.add_group("New")
    store.add_list("Kept", group_id=dst.id)
    moved = store.add_list("Moved", group_id=src.id)

    store.delete_group(src.id, dst.id)

    lst = store.state.find_list(moved.id)
    assert lst.group_id == dst.id
    assert lst.order == 1


def test_delete_group_into_itself_is_rejected(store, sink) -> None:
    g = store.add_group("Self")
    assert store.delete_group(g.id, g.id) is False
    assert store.state.find_group(g.id) is not None
    assert sink.last.title == "Invalid target"


def test_move_list_to_group_appends_to_target_scope(store) -> None:
    g = store.add_group("Projects")
    store.add_list("X", group_id=g.id)
    a = store.add_list("A")

    assert store.move_list_to_group(a.id, g.id)
    lst = store.state.find_list(a.id)
    assert lst.group_id == g.id
    assert lst.order == 1

    # already there
    assert store.move_list_to_group(a.id, g.id) is False


def test_reorder_lists_within_a_group(store) -> None:
    g = store.add_group("G")
    a = store.add_list("A", group_id=g.id)
    b = store.add_list("B", group_id=g.id)
    loose = store.add_list("Loose")

    store.reorder_lists([b.id, a.id, loose.id], g.id)

    assert [lst.name for lst in store.get_lists_in_group(g.id)] == ["B", "A"]
    assert store.state.find_list(loose.id).order == 0


def test_groups_reorder_and_collapse(store) -> None:
    g1 = store.add_group("One")
    g2 = store.add_group("Two")

    store.reorder_groups([g2.id, g1.id])
    assert [g.name for g, _ in store.get_grouped_lists()] == ["Two", "One"]

    store.toggle_group_collapsed(g1.id)
    assert store.state.find_group(g1.id).collapsed


def test_group_icon_override(store) -> None:
    g = store.add_group("Trips", emoji="✈")
    lst = store.add_list("Rome", emoji="🍕", group_id=g.id)

    assert queries.list_icon(store.state, lst.id) == "🍕"
    store.update_group(g.id, {"override_list_icons": True})
    assert queries.list_icon(store.state, lst.id) == "✈"


def test_update_list_validates_name(store, sink) -> None:
    lst = store.add_list("Work")
    assert store.update_list(lst.id, {"name": "Job", "color": "#f00"})
    assert store.state.find_list(lst.id).name == "Job"

    assert store.update_list(lst.id, {"name": "  "}) is False
    assert sink.last.title == "Invalid input"
