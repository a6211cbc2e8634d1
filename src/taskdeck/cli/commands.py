# src/taskdeck/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.models import ALL_LIST_ID, Task, ViewType
from ..tasks.statistics import Trend
from ..tasks.store import TaskStore

CommandHandler = Callable[[TaskStore, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, store: TaskStore, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s args=%s", name, args)
        return handler(store, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def _format_task(index: int, task: Task) -> str:
    mark = "x" if task.completed else " "
    flags = ""
    if task.pinned_globally or task.pinned:
        flags += "^"
    if task.important:
        flags += "*"
    if task.my_day:
        flags += "@"
    due = f"  (due {task.due_date:%Y-%m-%d})" if task.due_date else ""
    steps = ""
    if task.steps:
        done = sum(1 for s in task.steps if s.completed)
        steps = f"  [{done}/{len(task.steps)}]"
    return f"{index:>3}. [{mark}] {flags:<3} {task.title}{due}{steps}"


def _view_title(store: TaskStore) -> str:
    s = store.state
    if s.current_view == ViewType.LIST and s.current_list_id:
        lst = s.find_list(s.current_list_id)
        return lst.name if lst else s.current_list_id
    if s.current_view == ViewType.CATEGORY and s.current_category_id:
        cat = s.find_category(s.current_category_id)
        return f"#{cat.name}" if cat else s.current_category_id
    return str(s.current_view)


def _format_trend(trend: Trend | None) -> str:
    if trend is None:
        return ""
    arrow = {"up": "+", "down": "-"}.get(str(trend.direction), "=")
    return f" ({arrow}{trend.label})"


# ---- lookups ----


def _resolve_task(store: TaskStore, token: str) -> Task | None:
    """A 1-based position in the current view, or a task id (prefix)."""
    if token.isdigit():
        shown = store.get_tasks_for_current_view()
        i = int(token) - 1
        return shown[i] if 0 <= i < len(shown) else None
    exact = store.state.find_task(token)
    if exact is not None:
        return exact
    matches = [t for t in store.state.tasks if t.id.startswith(token)]
    return matches[0] if len(matches) == 1 else None


def _find_list_by_name(store: TaskStore, name: str):
    wanted = name.strip().lower()
    for lst in store.state.lists:
        if lst.id == name or lst.name.lower() == wanted:
            return lst
    return None


def _find_category_by_name(store: TaskStore, name: str):
    wanted = name.strip().lower().lstrip("#")
    for cat in store.state.categories:
        if cat.id == name or cat.name.lower() == wanted:
            return cat
    return None


def _task_command(action: Callable[[TaskStore, str], bool], usage: str) -> CommandHandler:
    def handler(store: TaskStore, args: list[str]) -> str:
        if not args:
            return f"Usage: {usage}"
        task = _resolve_task(store, args[0])
        if task is None:
            return f"No task matches {args[0]!r}. Use /tasks to see numbers."
        action(store, task.id)
        return ""

    return handler


# ---- handlers ----


def cmd_help(store: TaskStore, args: list[str]) -> str:
    return registry.build_help()


def cmd_tasks(store: TaskStore, args: list[str]) -> str:
    shown = store.get_tasks_for_current_view()
    header = f"{_view_title(store)} ({len(shown)})"
    if store.state.search_query:
        header += f"  search: {store.state.search_query!r}"
    if not shown:
        return f"{header}\n  (nothing here)"
    return "\n".join([header] + [_format_task(i, t) for i, t in enumerate(shown, start=1)])


def cmd_add(store: TaskStore, args: list[str]) -> str:
    """
    /add <title>      -> add to the current list (or Tasks)
    /add <title> !    -> also mark important
    """
    if not args:
        return "Usage: /add <title>"
    important = args[-1] == "!"
    words = args[:-1] if important else args
    s = store.state
    list_id = s.current_list_id if s.current_view == ViewType.LIST and s.current_list_id else ALL_LIST_ID
    store.add_task(
        " ".join(words),
        list_id,
        important=important or s.current_view == ViewType.IMPORTANT,
        my_day=s.current_view == ViewType.MY_DAY,
        category_ids=[s.current_category_id] if s.current_view == ViewType.CATEGORY else None,
    )
    return ""


def cmd_view(store: TaskStore, args: list[str]) -> str:
    """
    /view my-day | important | planned | all | completed
    /view list <name>
    /view category <name>
    """
    if not args:
        return "Usage: /view my-day|important|planned|all|completed|list <name>|category <name>"
    kind = args[0].lower()
    rest = " ".join(args[1:])

    if kind == "list":
        lst = _find_list_by_name(store, rest)
        if lst is None:
            return f"No list named {rest!r}."
        if lst.is_system:
            store.set_view(lst.id)
        else:
            store.set_view(ViewType.LIST, list_id=lst.id)
        return cmd_tasks(store, [])

    if kind == "category":
        cat = _find_category_by_name(store, rest)
        if cat is None:
            return f"No category named {rest!r}."
        store.set_view(ViewType.CATEGORY, category_id=cat.id)
        return cmd_tasks(store, [])

    if kind not in {v.value for v in ViewType}:
        return f"Unknown view: {kind}."
    store.set_view(kind)
    return cmd_tasks(store, [])


def cmd_lists(store: TaskStore, args: list[str]) -> str:
    s = store.state
    lines = ["Lists:"]
    for lst in s.lists:
        if lst.is_system:
            lines.append(f"  {lst.name:<20} {store.get_task_count_for_list(lst.id):>4}")
    for lst in store.get_lists_in_group(None):
        lines.append(f"  {lst.name:<20} {store.get_task_count_for_list(lst.id):>4}")
    for group, lists in store.get_grouped_lists():
        marker = "+" if group.collapsed else "-"
        lines.append(f"  {marker} {group.name}")
        if group.collapsed:
            continue
        for lst in lists:
            lines.append(f"      {lst.name:<16} {store.get_task_count_for_list(lst.id):>4}")
    if s.categories:
        lines.append("Categories:")
        for cat in s.categories:
            lines.append(f"  #{cat.name:<19} {store.get_task_count_for_category(cat.id):>4}")
    return "\n".join(lines)


def cmd_newlist(store: TaskStore, args: list[str]) -> str:
    if not args:
        return "Usage: /newlist <name>"
    store.add_list(" ".join(args))
    return ""


def cmd_search(store: TaskStore, args: list[str]) -> str:
    """/search <text> filters the current view; /search alone clears it."""
    store.set_search_query(" ".join(args))
    return cmd_tasks(store, [])


def cmd_stats(store: TaskStore, args: list[str]) -> str:
    st = store.get_statistics_for_current_view()
    tr = st.trends
    return (
        f"Statistics for {_view_title(store)}:\n"
        f"  Total: {st.total_tasks}  Completed: {st.completed_tasks}{_format_trend(tr.completed)}"
        f"  Open: {st.incomplete_tasks}\n"
        f"  Completion rate: {st.completion_rate}%{_format_trend(tr.completion_rate)}\n"
        f"  Important: {st.important_tasks}{_format_trend(tr.important)}"
        f"  Planned: {st.planned_tasks}{_format_trend(tr.planned)}\n"
        f"  Due today: {st.due_today}{_format_trend(tr.due_today)}"
        f"  Overdue: {st.overdue}{_format_trend(tr.overdue)}\n"
        f"  Done today: {st.completed_today}  This week: {st.completed_this_week}\n"
        f"  Avg completion: {st.average_completion_time:g}h"
        f"  Created/day: {st.task_creation_rate:g}"
        f"  Done/day: {st.daily_completion_average:g}"
        f"  Streak: {st.productivity_streak}d"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("tasks", cmd_tasks, help_text="Show tasks in the current view.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> [!]")
registry.register(
    "done",
    _task_command(TaskStore.toggle_task, "/done <n|id>"),
    help_text="Toggle completion: /done <n|id>",
)
registry.register(
    "star",
    _task_command(TaskStore.toggle_important, "/star <n|id>"),
    help_text="Toggle important: /star <n|id>",
)
registry.register(
    "myday",
    _task_command(TaskStore.toggle_my_day, "/myday <n|id>"),
    help_text="Toggle My Day: /myday <n|id>",
)
registry.register(
    "pin",
    _task_command(TaskStore.toggle_pin, "/pin <n|id>"),
    help_text="Pin within its list: /pin <n|id>",
)
registry.register(
    "del",
    _task_command(TaskStore.delete_task, "/del <n|id>"),
    help_text="Delete a task: /del <n|id>",
    aliases=["rm"],
)
registry.register(
    "view",
    cmd_view,
    help_text="Switch view: my-day | important | planned | all | completed | list <name> | category <name>",
)
registry.register("lists", cmd_lists, help_text="Show lists, groups and categories with counts.")
registry.register("newlist", cmd_newlist, help_text="Create a list: /newlist <name>")
registry.register("search", cmd_search, help_text="Filter the current view: /search <text> (empty clears).")
registry.register("stats", cmd_stats, help_text="Statistics for the current view.")
