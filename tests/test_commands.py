# tests/test_commands.py

from __future__ import annotations

from taskdeck.cli.commands import CommandRegistry, registry
from taskdeck.connectors.console_connector import format_event
from taskdeck.core.events import DomainEvent
from taskdeck.core.models import ViewType


def test_command_registry_routes_with_aliases(store) -> None:
    reg = CommandRegistry()
    seen: list[list[str]] = []

    def h(store, args):
        seen.append(args)
        return "ok"

    reg.register("a", h, "a", aliases=["alpha"])

    assert reg.handle(store, "/a x y") == "ok"
    assert reg.handle(store, "/ALPHA") == "ok"
    assert seen == [["x", "y"], []]


def test_command_registry_unknown_and_non_command(store) -> None:
    reg = CommandRegistry()
    assert reg.handle(store, "hello") is None
    assert "Unknown command" in (reg.handle(store, "/nope") or "")
    assert "Empty command" in (reg.handle(store, "/") or "")


def test_help_lists_every_command(store) -> None:
    text = registry.handle(store, "/help") or ""
    for name in ("tasks", "add", "done", "star", "myday", "pin", "del", "view", "lists", "newlist", "search", "stats"):
        assert f"/{name} " in text


def test_add_goes_into_the_current_view(store, sink) -> None:
    # default view is My Day
    registry.handle(store, "/add Buy milk")
    (task,) = store.state.tasks
    assert task.title == "Buy milk"
    assert task.my_day
    assert sink.last.title == "Task created"

    registry.handle(store, "/add Urgent thing !")
    assert store.state.tasks[-1].title == "Urgent thing"
    assert store.state.tasks[-1].important


def test_done_and_star_by_position(store, sink) -> None:
    store.set_view("all")
    store.add_task("first")
    store.add_task("second")

    listing = registry.handle(store, "/tasks") or ""
    assert "1. [ ]" in listing and "second" in listing

    registry.handle(store, "/star 2")
    assert store.state.tasks[1].important
    registry.handle(store, "/done 1")
    assert store.state.tasks[0].completed
    assert sink.last.title == "Task completed"

    assert "No task matches" in (registry.handle(store, "/done 9") or "")
    assert (registry.handle(store, "/done") or "").startswith("Usage:")


def test_task_can_be_addressed_by_id(store) -> None:
    task = store.add_task("by id")
    registry.handle(store, f"/del {task.id}")
    assert store.state.tasks == ()


def test_newlist_and_view_list(store) -> None:
    registry.handle(store, "/newlist Groceries")
    out = registry.handle(store, "/view list groceries") or ""

    lst = store.state.lists[-1]
    assert store.state.current_view == ViewType.LIST
    assert store.state.current_list_id == lst.id
    assert out.startswith("Groceries (0)")

    registry.handle(store, "/add Eggs")
    assert store.state.tasks[-1].list_id == lst.id
    assert "Groceries" in (registry.handle(store, "/lists") or "")


def test_view_switching(store) -> None:
    assert (registry.handle(store, "/view important") or "").startswith("important")
    assert store.state.current_view == ViewType.IMPORTANT
    assert "Unknown view" in (registry.handle(store, "/view someday") or "")
    assert "No list named" in (registry.handle(store, "/view list Nope") or "")


def test_search_and_stats(store) -> None:
    store.set_view("all")
    store.add_task("Call bank")
    store.add_task("Email boss")

    out = registry.handle(store, "/search bank") or ""
    assert "Call bank" in out and "Email boss" not in out

    registry.handle(store, "/search")
    assert store.state.search_query == ""

    stats = registry.handle(store, "/stats") or ""
    assert stats.startswith("Statistics for all")
    assert "Total: 2" in stats


def test_format_event() -> None:
    assert format_event(DomainEvent.success("Task created", '"x" has been added')) == (
        '[ok] Task created: "x" has been added'
    )
    assert format_event(DomainEvent.warning("List deleted")) == "[!] List deleted"
