# src/taskdeck/tasks/commands.py

"""
Pure command layer.

Every command takes the current AppState and returns a CommandResult with a
new state plus the events describing the outcome. Commands never mutate their
input; rejected commands raise ValidationError, which `run()` turns into an
error event with the state left as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any

from ..core.dates import same_moment
from ..core.errors import NotFoundError, ValidationError
from ..core.events import CommandResult, DomainEvent
from ..core.models import (
    ALL_LIST_ID,
    BUILT_IN_PRESET_IDS,
    TITLE_MAX_LENGTH,
    AppState,
    Category,
    ListGroup,
    RepeatKind,
    SubTask,
    Task,
    TaskList,
    TimePreset,
    ViewType,
    generate_id,
)
from ..core.ports import IdFactory
from ..core.relations import apply_delete_policy
from .recurrence import process_repeating_tasks as _roll_tasks

logger = logging.getLogger(__name__)

Command = Callable[..., CommandResult]


def run(command: Command, state: AppState, *args: Any, **kwargs: Any) -> CommandResult:
    """Execute `command`, converting validation failures into an error event."""
    try:
        return command(state, *args, **kwargs)
    except ValidationError as e:
        logger.debug("Command %s rejected: %s", getattr(command, "__name__", command), e)
        return CommandResult.unchanged(state, DomainEvent.error(e.title, e.description))


# ---- helpers ----


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def _format_due(value: datetime | None) -> str:
    if value is None:
        return "No due date"
    return f"{value:%b} {value.day}, {value.year}"


def _validate_title(title: str | None) -> str:
    clean = (title or "").strip()
    if not clean:
        raise ValidationError("Invalid input", "Task title cannot be empty")
    if len(clean) > TITLE_MAX_LENGTH:
        raise ValidationError(
            "Title too long", f"Task title must be {TITLE_MAX_LENGTH} characters or less"
        )
    return clean


def _validate_name(name: str | None, what: str) -> str:
    clean = (name or "").strip()
    if not clean:
        raise ValidationError("Invalid input", f"{what} name cannot be empty")
    return clean


def _validate_task_list(state: AppState, list_id: str) -> None:
    if list_id == ALL_LIST_ID:
        return
    lst = state.find_list(list_id)
    if lst is None or lst.is_system:
        raise NotFoundError("List not found", f"No list with id {list_id}")


def _require_task(state: AppState, task_id: str) -> Task:
    task = state.find_task(task_id)
    if task is None:
        raise NotFoundError("Task not found", f"No task with id {task_id}")
    return task


def _require_list(state: AppState, list_id: str) -> TaskList:
    lst = state.find_list(list_id)
    if lst is None:
        raise NotFoundError("List not found", f"No list with id {list_id}")
    return lst


def _require_group(state: AppState, group_id: str) -> ListGroup:
    group = state.find_group(group_id)
    if group is None:
        raise NotFoundError("Group not found", f"No group with id {group_id}")
    return group


def _require_category(state: AppState, category_id: str) -> Category:
    cat = state.find_category(category_id)
    if cat is None:
        raise NotFoundError("Category not found", f"No category with id {category_id}")
    return cat


def _next_order(orders: Iterable[int]) -> int:
    return max(orders, default=-1) + 1


def _with_task(state: AppState, task: Task) -> AppState:
    return replace(state, tasks=tuple(task if t.id == task.id else t for t in state.tasks))


def _with_list(state: AppState, lst: TaskList) -> AppState:
    return replace(state, lists=tuple(lst if x.id == lst.id else x for x in state.lists))


def _with_group(state: AppState, group: ListGroup) -> AppState:
    return replace(
        state, list_groups=tuple(group if g.id == group.id else g for g in state.list_groups)
    )


def _with_category(state: AppState, cat: Category) -> AppState:
    return replace(
        state, categories=tuple(cat if c.id == cat.id else c for c in state.categories)
    )


def _list_scope_orders(state: AppState, group_id: str | None) -> list[int]:
    return [lst.order for lst in state.lists if not lst.is_system and lst.group_id == group_id]


def _clean_repeat_days(days: Iterable[int] | None) -> tuple[int, ...]:
    if not days:
        return ()
    try:
        picked = {int(d) for d in days}
    except (TypeError, ValueError) as e:
        raise ValidationError("Invalid repeat days", "Repeat days must be numbers 0-6") from e
    return tuple(sorted(d for d in picked if 0 <= d <= 6))


def _materialize_steps(
    steps: Iterable[str | SubTask] | None, *, now: datetime, new_id: IdFactory
) -> tuple[SubTask, ...]:
    out: list[SubTask] = []
    for step in steps or ():
        if isinstance(step, SubTask):
            title, completed = step.title, step.completed
        else:
            title, completed = str(step), False
        title = title.strip()
        if title:
            out.append(SubTask(id=new_id(), title=title, created_at=now, completed=completed))
    return tuple(out)


def _replace_steps(
    steps: Iterable[str | SubTask] | None, *, now: datetime, new_id: IdFactory
) -> tuple[SubTask, ...]:
    """Existing sub-steps keep their identity; plain titles become new ones."""
    out: list[SubTask] = []
    for step in steps or ():
        if isinstance(step, SubTask):
            out.append(step)
        elif isinstance(step, str):
            out.extend(_materialize_steps((step,), now=now, new_id=new_id))
        else:
            raise ValidationError("Invalid steps", "Steps must be titles or sub-tasks")
    return tuple(out)


# ---- tasks ----


def add_task(
    state: AppState,
    title: str,
    list_id: str = ALL_LIST_ID,
    *,
    now: datetime,
    new_id: IdFactory = generate_id,
    important: bool = False,
    my_day: bool = False,
    due_date: datetime | None = None,
    reminder: datetime | None = None,
    notes: str | None = None,
    repeat: RepeatKind | str = RepeatKind.NONE,
    repeat_days: Iterable[int] | None = None,
    category_ids: Iterable[str] | None = None,
    steps: Iterable[str | SubTask] | None = None,
) -> CommandResult:
    clean = _validate_title(title)
    _validate_task_list(state, list_id)

    task = Task(
        id=new_id(),
        title=clean,
        list_id=list_id,
        created_at=now,
        updated_at=now,
        important=important,
        my_day=my_day,
        due_date=due_date,
        reminder=reminder,
        notes=notes,
        repeat=RepeatKind.from_raw(repeat),
        repeat_days=_clean_repeat_days(repeat_days),
        order=_next_order(t.order for t in state.tasks if t.list_id == list_id),
        category_ids=tuple(dict.fromkeys(category_ids or ())),
        steps=_materialize_steps(steps, now=now, new_id=new_id),
    )
    logger.debug("Task added id=%s list=%s order=%s", task.id, list_id, task.order)
    return CommandResult(
        state=replace(state, tasks=state.tasks + (task,)),
        events=(DomainEvent.success("Task created", f'"{clean}" has been added'),),
    )


_TASK_FIELDS = frozenset(
    {
        "title",
        "notes",
        "completed",
        "important",
        "my_day",
        "pinned",
        "pinned_globally",
        "due_date",
        "reminder",
        "repeat",
        "repeat_days",
        "order",
        "list_id",
        "category_ids",
        "steps",
    }
)


def _coerce_task_changes(state: AppState, changes: Mapping[str, Any]) -> dict[str, Any]:
    unknown = set(changes) - _TASK_FIELDS
    if unknown:
        raise ValidationError("Invalid update", f"Unknown task fields: {', '.join(sorted(unknown))}")

    out = dict(changes)
    if "title" in out:
        out["title"] = _validate_title(out["title"])
    if "list_id" in out:
        _validate_task_list(state, out["list_id"])
    if "repeat" in out:
        out["repeat"] = RepeatKind.from_raw(out["repeat"])
    if "repeat_days" in out:
        out["repeat_days"] = _clean_repeat_days(out["repeat_days"])
    if "category_ids" in out:
        out["category_ids"] = tuple(dict.fromkeys(out["category_ids"] or ()))
    return out


def update_task(
    state: AppState,
    task_id: str,
    changes: Mapping[str, Any],
    *,
    now: datetime,
    new_id: IdFactory = generate_id,
) -> CommandResult:
    task = _require_task(state, task_id)
    fields = _coerce_task_changes(state, changes)
    if "steps" in fields:
        fields["steps"] = _replace_steps(fields["steps"], now=now, new_id=new_id)
    if fields.get("list_id", task.list_id) != task.list_id and "order" not in fields:
        target = fields["list_id"]
        fields["order"] = _next_order(t.order for t in state.tasks if t.list_id == target)
    updated = replace(task, **fields, updated_at=now)

    events: list[DomainEvent] = []
    if "due_date" in fields:
        if same_moment(task.due_date, updated.due_date):
            events.append(DomainEvent.info("Due date unchanged", _format_due(updated.due_date)))
        elif updated.due_date is None:
            events.append(DomainEvent.info("Due date removed", f'"{updated.title}"'))
        else:
            events.append(DomainEvent.info("Due date updated", _format_due(updated.due_date)))

    return CommandResult(state=_with_task(state, updated), events=tuple(events))


def delete_task(state: AppState, task_id: str) -> CommandResult:
    task = _require_task(state, task_id)
    return CommandResult(
        state=replace(state, tasks=tuple(t for t in state.tasks if t.id != task_id)),
        events=(DomainEvent.info("Task deleted", f'"{task.title}"'),),
    )


def _toggle(
    state: AppState,
    task_id: str,
    field: str,
    now: datetime,
    on_event: DomainEvent | None,
) -> CommandResult:
    task = _require_task(state, task_id)
    value = not getattr(task, field)
    updated = replace(task, **{field: value}, updated_at=now)
    events = (on_event,) if value and on_event is not None else ()
    return CommandResult(state=_with_task(state, updated), events=events)


def toggle_task(state: AppState, task_id: str, *, now: datetime) -> CommandResult:
    task = _require_task(state, task_id)
    return _toggle(
        state, task_id, "completed", now, DomainEvent.success("Task completed", f'"{task.title}"')
    )


def toggle_important(state: AppState, task_id: str, *, now: datetime) -> CommandResult:
    task = _require_task(state, task_id)
    return _toggle(
        state, task_id, "important", now, DomainEvent.info("Marked as important", f'"{task.title}"')
    )


def toggle_my_day(state: AppState, task_id: str, *, now: datetime) -> CommandResult:
    task = _require_task(state, task_id)
    return _toggle(
        state, task_id, "my_day", now, DomainEvent.info("Added to My Day", f'"{task.title}"')
    )


def toggle_pin(state: AppState, task_id: str, *, now: datetime) -> CommandResult:
    task = _require_task(state, task_id)
    return _toggle(state, task_id, "pinned", now, DomainEvent.info("Task pinned", f'"{task.title}"'))


def toggle_global_pin(state: AppState, task_id: str, *, now: datetime) -> CommandResult:
    task = _require_task(state, task_id)
    return _toggle(
        state,
        task_id,
        "pinned_globally",
        now,
        DomainEvent.info("Task pinned to all views", f'"{task.title}"'),
    )


# ---- steps ----


def add_sub_task(
    state: AppState,
    task_id: str,
    title: str,
    *,
    now: datetime,
    new_id: IdFactory = generate_id,
) -> CommandResult:
    task = state.find_task(task_id)
    if task is None:
        return CommandResult.unchanged(state)
    clean = (title or "").strip()
    if not clean:
        raise ValidationError("Invalid input", "Step title cannot be empty")
    step = SubTask(id=new_id(), title=clean, created_at=now)
    updated = replace(task, steps=task.steps + (step,), updated_at=now)
    return CommandResult(state=_with_task(state, updated))


def toggle_sub_task(state: AppState, task_id: str, step_id: str, *, now: datetime) -> CommandResult:
    task = state.find_task(task_id)
    if task is None or not any(s.id == step_id for s in task.steps):
        return CommandResult.unchanged(state)
    steps = tuple(replace(s, completed=not s.completed) if s.id == step_id else s for s in task.steps)
    return CommandResult(state=_with_task(state, replace(task, steps=steps, updated_at=now)))


def delete_sub_task(state: AppState, task_id: str, step_id: str, *, now: datetime) -> CommandResult:
    task = state.find_task(task_id)
    if task is None or not any(s.id == step_id for s in task.steps):
        return CommandResult.unchanged(state)
    steps = tuple(s for s in task.steps if s.id != step_id)
    return CommandResult(state=_with_task(state, replace(task, steps=steps, updated_at=now)))


def reorder_tasks(state: AppState, task_ids: Iterable[str], list_id: str) -> CommandResult:
    """
    Set `order` to the position in `task_ids` for tasks of `list_id`.

    Tasks missing from `task_ids` keep their order. `updated_at` is not touched:
    completion statistics read it.
    """
    index = {tid: i for i, tid in enumerate(task_ids)}
    tasks = tuple(
        replace(t, order=index[t.id]) if t.list_id == list_id and t.id in index else t
        for t in state.tasks
    )
    return CommandResult(state=replace(state, tasks=tasks))


def process_repeating_tasks(state: AppState, *, now: datetime) -> CommandResult:
    tasks, rolled = _roll_tasks(state.tasks, now=now)
    if not rolled:
        return CommandResult.unchanged(state)
    return CommandResult(state=replace(state, tasks=tasks))


# ---- lists ----


def add_list(
    state: AppState,
    name: str,
    *,
    now: datetime,
    new_id: IdFactory = generate_id,
    color: str | None = None,
    emoji: str | None = None,
    group_id: str | None = None,
) -> CommandResult:
    clean = _validate_name(name, "List")
    if group_id is not None:
        _require_group(state, group_id)
    lst = TaskList(
        id=new_id(),
        name=clean,
        emoji=emoji,
        color=color,
        group_id=group_id,
        order=_next_order(_list_scope_orders(state, group_id)),
        created_at=now,
    )
    return CommandResult(
        state=replace(state, lists=state.lists + (lst,)),
        events=(DomainEvent.success("List created", f'"{clean}" is ready'),),
    )


_LIST_FIELDS = frozenset({"name", "emoji", "color", "order"})


def update_list(state: AppState, list_id: str, changes: Mapping[str, Any]) -> CommandResult:
    lst = _require_list(state, list_id)
    unknown = set(changes) - _LIST_FIELDS
    if unknown:
        raise ValidationError("Invalid update", f"Unknown list fields: {', '.join(sorted(unknown))}")
    fields = dict(changes)
    if "name" in fields:
        fields["name"] = _validate_name(fields["name"], "List")
    return CommandResult(state=_with_list(state, replace(lst, **fields)))


def delete_list(state: AppState, list_id: str) -> CommandResult:
    lst = _require_list(state, list_id)
    if lst.is_system:
        raise ValidationError("Cannot delete list", f'"{lst.name}" is a system list')

    new_state, removed = apply_delete_policy(state, "list", list_id)
    new_state = replace(new_state, lists=tuple(x for x in new_state.lists if x.id != list_id))
    if state.current_view == ViewType.LIST and state.current_list_id == list_id:
        new_state = replace(new_state, current_view=ViewType.ALL, current_list_id=None)

    if removed:
        event = DomainEvent.warning("List deleted", f"{_plural(removed, 'task')} removed")
    else:
        event = DomainEvent.info("List deleted", f'"{lst.name}"')
    logger.debug("List %s deleted, cascaded tasks=%d", list_id, removed)
    return CommandResult(state=new_state, events=(event,))


def reorder_lists(state: AppState, list_ids: Iterable[str], group_id: str | None = None) -> CommandResult:
    """Same contract as reorder_tasks, scoped to the lists of one group (None = ungrouped)."""
    index = {lid: i for i, lid in enumerate(list_ids)}
    lists = tuple(
        replace(x, order=index[x.id])
        if not x.is_system and x.group_id == group_id and x.id in index
        else x
        for x in state.lists
    )
    return CommandResult(state=replace(state, lists=lists))


def move_list_to_group(state: AppState, list_id: str, group_id: str | None) -> CommandResult:
    lst = _require_list(state, list_id)
    if lst.is_system:
        raise ValidationError("Cannot move list", f'"{lst.name}" is a system list')
    if group_id is not None:
        _require_group(state, group_id)
    if lst.group_id == group_id:
        return CommandResult.unchanged(state)
    moved = replace(lst, group_id=group_id, order=_next_order(_list_scope_orders(state, group_id)))
    return CommandResult(state=_with_list(state, moved))


# ---- groups ----


def add_group(
    state: AppState,
    name: str,
    *,
    now: datetime,
    new_id: IdFactory = generate_id,
    emoji: str | None = None,
    color: str | None = None,
) -> CommandResult:
    clean = _validate_name(name, "Group")
    group = ListGroup(
        id=new_id(),
        name=clean,
        emoji=emoji,
        color=color,
        order=_next_order(g.order for g in state.list_groups),
        created_at=now,
    )
    return CommandResult(
        state=replace(state, list_groups=state.list_groups + (group,)),
        events=(DomainEvent.success("Group created", f'"{clean}" is ready'),),
    )


_GROUP_FIELDS = frozenset({"name", "emoji", "color", "collapsed", "order", "override_list_icons"})


def update_group(state: AppState, group_id: str, changes: Mapping[str, Any]) -> CommandResult:
    group = _require_group(state, group_id)
    unknown = set(changes) - _GROUP_FIELDS
    if unknown:
        raise ValidationError("Invalid update", f"Unknown group fields: {', '.join(sorted(unknown))}")
    fields = dict(changes)
    if "name" in fields:
        fields["name"] = _validate_name(fields["name"], "Group")
    return CommandResult(state=_with_group(state, replace(group, **fields)))


def delete_group(state: AppState, group_id: str, target_group_id: str | None = None) -> CommandResult:
    """Delete a group; its lists move to `target_group_id` (None = ungrouped), never deleted."""
    group = _require_group(state, group_id)
    if target_group_id == group_id:
        raise ValidationError("Invalid target", "Lists cannot be moved into the group being deleted")
    if target_group_id is not None:
        _require_group(state, target_group_id)

    members = [x.id for x in sorted(state.lists, key=lambda x: x.order) if x.group_id == group_id]
    base = _next_order(_list_scope_orders(state, target_group_id))
    new_state, moved = apply_delete_policy(state, "group", group_id, target_id=target_group_id)

    # Appended after the target scope's lists, keeping their relative order.
    offsets = {lid: base + i for i, lid in enumerate(members)}
    new_state = replace(
        new_state,
        lists=tuple(replace(x, order=offsets[x.id]) if x.id in offsets else x for x in new_state.lists),
        list_groups=tuple(g for g in new_state.list_groups if g.id != group_id),
    )

    if moved:
        event = DomainEvent.warning("Group deleted", f"{_plural(moved, 'list')} moved")
    else:
        event = DomainEvent.info("Group deleted", f'"{group.name}"')
    return CommandResult(state=new_state, events=(event,))


def reorder_groups(state: AppState, group_ids: Iterable[str]) -> CommandResult:
    index = {gid: i for i, gid in enumerate(group_ids)}
    groups = tuple(replace(g, order=index[g.id]) if g.id in index else g for g in state.list_groups)
    return CommandResult(state=replace(state, list_groups=groups))


def toggle_group_collapsed(state: AppState, group_id: str) -> CommandResult:
    group = _require_group(state, group_id)
    return CommandResult(state=_with_group(state, replace(group, collapsed=not group.collapsed)))


# ---- categories ----


def add_category(
    state: AppState,
    name: str,
    *,
    now: datetime,
    new_id: IdFactory = generate_id,
    color: str | None = None,
    emoji: str | None = None,
    description: str | None = None,
) -> CommandResult:
    clean = _validate_name(name, "Category")
    if any(c.name.lower() == clean.lower() for c in state.categories):
        raise ValidationError("Duplicate category", f'"{clean}" already exists')
    cat = Category(
        id=new_id(),
        name=clean,
        created_at=now,
        updated_at=now,
        color=color,
        emoji=emoji,
        description=description,
    )
    return CommandResult(
        state=replace(state, categories=state.categories + (cat,)),
        events=(DomainEvent.success("Category created", f'"{clean}" is ready'),),
    )


_CATEGORY_FIELDS = frozenset({"name", "color", "emoji", "description"})


def update_category(
    state: AppState, category_id: str, changes: Mapping[str, Any], *, now: datetime
) -> CommandResult:
    cat = _require_category(state, category_id)
    unknown = set(changes) - _CATEGORY_FIELDS
    if unknown:
        raise ValidationError(
            "Invalid update", f"Unknown category fields: {', '.join(sorted(unknown))}"
        )
    fields = dict(changes)
    if "name" in fields:
        fields["name"] = _validate_name(fields["name"], "Category")
    return CommandResult(state=_with_category(state, replace(cat, **fields, updated_at=now)))


def delete_category(state: AppState, category_id: str) -> CommandResult:
    """Delete a category and strip it from tasks. Tasks are never deleted."""
    cat = _require_category(state, category_id)
    new_state, stripped = apply_delete_policy(state, "category", category_id)
    new_state = replace(
        new_state, categories=tuple(c for c in new_state.categories if c.id != category_id)
    )
    if state.current_view == ViewType.CATEGORY and state.current_category_id == category_id:
        new_state = replace(new_state, current_view=ViewType.ALL, current_category_id=None)

    if stripped:
        event = DomainEvent.warning("Category deleted", f"Removed from {_plural(stripped, 'task')}")
    else:
        event = DomainEvent.info("Category deleted", f'"{cat.name}"')
    return CommandResult(state=new_state, events=(event,))


def assign_task_to_category(
    state: AppState, task_id: str, category_id: str, *, now: datetime
) -> CommandResult:
    task = _require_task(state, task_id)
    _require_category(state, category_id)
    if category_id in task.category_ids:
        return CommandResult.unchanged(state)
    updated = replace(task, category_ids=task.category_ids + (category_id,), updated_at=now)
    return CommandResult(state=_with_task(state, updated))


def remove_task_from_category(
    state: AppState, task_id: str, category_id: str, *, now: datetime
) -> CommandResult:
    task = _require_task(state, task_id)
    if category_id not in task.category_ids:
        return CommandResult.unchanged(state)
    ids = tuple(c for c in task.category_ids if c != category_id)
    return CommandResult(state=_with_task(state, replace(task, category_ids=ids, updated_at=now)))


def assign_task_to_categories(
    state: AppState, task_id: str, category_ids: Iterable[str], *, now: datetime
) -> CommandResult:
    """Replace the task's category set."""
    task = _require_task(state, task_id)
    ids = tuple(dict.fromkeys(category_ids))
    for cid in ids:
        _require_category(state, cid)
    return CommandResult(state=_with_task(state, replace(task, category_ids=ids, updated_at=now)))


# ---- time presets ----


def add_custom_time_preset(
    state: AppState,
    label: str,
    hour: int,
    minute: int,
    *,
    now: datetime,
    new_id: IdFactory = generate_id,
) -> CommandResult:
    clean = (label or "").strip()
    if not clean:
        raise ValidationError("Invalid input", "Preset label cannot be empty")
    if not (0 <= int(hour) <= 23 and 0 <= int(minute) <= 59):
        raise ValidationError("Invalid time", f"{hour:02}:{minute:02} is not a valid time")
    preset = TimePreset(
        id=new_id(), label=clean, hour=int(hour), minute=int(minute), is_custom=True, created_at=now
    )
    return CommandResult(
        state=replace(state, custom_time_presets=state.custom_time_presets + (preset,)),
        events=(DomainEvent.success("Preset saved", f"{clean} ({preset.hour:02}:{preset.minute:02})"),),
    )


def remove_custom_time_preset(state: AppState, preset_id: str) -> CommandResult:
    if not any(p.id == preset_id for p in state.custom_time_presets):
        raise NotFoundError("Preset not found", f"No custom preset with id {preset_id}")
    presets = tuple(p for p in state.custom_time_presets if p.id != preset_id)
    return CommandResult(
        state=replace(state, custom_time_presets=presets),
        events=(DomainEvent.info("Preset removed"),),
    )


def remove_built_in_preset(state: AppState, preset_id: str) -> CommandResult:
    """Soft-delete: built-ins are constants, so only their id is recorded as disabled."""
    if preset_id not in BUILT_IN_PRESET_IDS:
        raise NotFoundError("Preset not found", f"No built-in preset with id {preset_id}")
    if preset_id in state.disabled_built_in_presets:
        return CommandResult.unchanged(state)
    return CommandResult(
        state=replace(
            state, disabled_built_in_presets=state.disabled_built_in_presets + (preset_id,)
        ),
        events=(DomainEvent.info("Preset removed"),),
    )


def restore_built_in_preset(state: AppState, preset_id: str) -> CommandResult:
    if preset_id not in state.disabled_built_in_presets:
        return CommandResult.unchanged(state)
    disabled = tuple(p for p in state.disabled_built_in_presets if p != preset_id)
    return CommandResult(state=replace(state, disabled_built_in_presets=disabled))


# ---- view / presentation ----


def set_view(
    state: AppState,
    view: ViewType | str,
    list_id: str | None = None,
    category_id: str | None = None,
) -> CommandResult:
    try:
        vt = ViewType(view)
    except ValueError:
        raise ValidationError("Unknown view", str(view)) from None
    if vt == ViewType.LIST:
        if not list_id:
            raise ValidationError("Invalid view", "A list view needs a list id")
        _require_list(state, list_id)
    if vt == ViewType.CATEGORY:
        if not category_id:
            raise ValidationError("Invalid view", "A category view needs a category id")
        _require_category(state, category_id)
    return CommandResult(
        state=replace(
            state,
            current_view=vt,
            current_list_id=list_id if vt == ViewType.LIST else None,
            current_category_id=category_id if vt == ViewType.CATEGORY else None,
        )
    )


def set_search_query(state: AppState, text: str) -> CommandResult:
    return CommandResult(state=replace(state, search_query=text or ""), persist=False)


def toggle_dark_mode(state: AppState) -> CommandResult:
    return CommandResult(state=replace(state, dark_mode=not state.dark_mode))


def toggle_sidebar(state: AppState) -> CommandResult:
    return CommandResult(state=replace(state, sidebar_collapsed=not state.sidebar_collapsed))
