# src/taskdeck/storage/codec.py

"""
AppState <-> JSON text.

Datetimes are tagged as {"kind": "Date", "value": <ISO-8601>} so they come
back as datetimes. The older {"__type": "Date", ...} tag is still read.
Field names on disk are camelCase.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from ..core.models import (
    AppState,
    Category,
    ListGroup,
    RepeatKind,
    SubTask,
    Task,
    TaskList,
    TimePreset,
    ViewType,
    default_system_lists,
)

_DATE_KIND = "Date"


# ---- date tagging ----


def _tag(value: datetime | None) -> dict[str, str] | None:
    if value is None:
        return None
    return {"kind": _DATE_KIND, "value": value.isoformat()}


def _revive(obj: dict[str, Any]) -> Any:
    tag = obj.get("kind", obj.get("__type"))
    if tag == _DATE_KIND and isinstance(obj.get("value"), str) and len(obj) == 2:
        return _parse_iso(obj["value"])
    return obj


def _parse_iso(raw: str) -> datetime:
    # JS toISOString() ends with "Z"; stored datetimes are naive local time.
    dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def dumps(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False)


def loads(text: str) -> dict[str, Any]:
    data = json.loads(text, object_hook=_revive)
    if not isinstance(data, dict):
        raise ValueError("state blob is not a JSON object")
    return data


# ---- state -> payload ----


def _subtask_to_dict(s: SubTask) -> dict[str, Any]:
    return {"id": s.id, "title": s.title, "completed": s.completed, "createdAt": _tag(s.created_at)}


def _task_to_dict(t: Task) -> dict[str, Any]:
    return {
        "id": t.id,
        "title": t.title,
        "notes": t.notes,
        "completed": t.completed,
        "important": t.important,
        "myDay": t.my_day,
        "pinned": t.pinned,
        "pinnedGlobally": t.pinned_globally,
        "dueDate": _tag(t.due_date),
        "reminder": _tag(t.reminder),
        "repeat": str(t.repeat),
        "repeatDays": list(t.repeat_days),
        "order": t.order,
        "createdAt": _tag(t.created_at),
        "updatedAt": _tag(t.updated_at),
        "listId": t.list_id,
        "categoryIds": list(t.category_ids),
        "steps": [_subtask_to_dict(s) for s in t.steps],
    }


def _list_to_dict(lst: TaskList) -> dict[str, Any]:
    return {
        "id": lst.id,
        "name": lst.name,
        "emoji": lst.emoji,
        "color": lst.color,
        "isSystem": lst.is_system,
        "groupId": lst.group_id,
        "order": lst.order,
        "createdAt": _tag(lst.created_at),
    }


def _group_to_dict(g: ListGroup) -> dict[str, Any]:
    return {
        "id": g.id,
        "name": g.name,
        "emoji": g.emoji,
        "color": g.color,
        "collapsed": g.collapsed,
        "order": g.order,
        "overrideListIcons": g.override_list_icons,
        "createdAt": _tag(g.created_at),
    }


def _category_to_dict(c: Category) -> dict[str, Any]:
    return {
        "id": c.id,
        "name": c.name,
        "color": c.color,
        "emoji": c.emoji,
        "description": c.description,
        "createdAt": _tag(c.created_at),
        "updatedAt": _tag(c.updated_at),
    }


def _preset_to_dict(p: TimePreset) -> dict[str, Any]:
    return {
        "id": p.id,
        "label": p.label,
        "hour": p.hour,
        "minute": p.minute,
        "isCustom": p.is_custom,
        "createdAt": _tag(p.created_at),
    }


def state_to_payload(state: AppState, *, schema_version: int) -> dict[str, Any]:
    """Persistent subset of the state. The search query is session-only and not saved."""
    return {
        "schemaVersion": schema_version,
        "tasks": [_task_to_dict(t) for t in state.tasks],
        "lists": [_list_to_dict(lst) for lst in state.lists if not lst.is_system],
        "listGroups": [_group_to_dict(g) for g in state.list_groups],
        "categories": [_category_to_dict(c) for c in state.categories],
        "currentView": str(state.current_view),
        "currentListId": state.current_list_id,
        "currentCategoryId": state.current_category_id,
        "darkMode": state.dark_mode,
        "sidebarCollapsed": state.sidebar_collapsed,
        "customTimePresets": [_preset_to_dict(p) for p in state.custom_time_presets],
        "disabledBuiltInPresets": list(state.disabled_built_in_presets),
    }


# ---- payload -> state ----


def _dt(value: Any, fallback: datetime | None = None) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return _parse_iso(value)
        except ValueError:
            return fallback
    return fallback


def _opt_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _subtask_from_dict(d: dict[str, Any], now: datetime) -> SubTask:
    return SubTask(
        id=str(d["id"]),
        title=str(d.get("title") or ""),
        completed=bool(d.get("completed", False)),
        created_at=_dt(d.get("createdAt"), now) or now,
    )


def _task_from_dict(d: dict[str, Any], now: datetime) -> Task:
    created = _dt(d.get("createdAt"), now) or now
    return Task(
        id=str(d["id"]),
        title=str(d.get("title") or ""),
        list_id=str(d.get("listId") or "all"),
        created_at=created,
        updated_at=_dt(d.get("updatedAt"), created) or created,
        completed=bool(d.get("completed", False)),
        important=bool(d.get("important", False)),
        my_day=bool(d.get("myDay", False)),
        pinned=bool(d.get("pinned", False)),
        pinned_globally=bool(d.get("pinnedGlobally", False)),
        due_date=_dt(d.get("dueDate")),
        reminder=_dt(d.get("reminder")),
        notes=_opt_str(d.get("notes")),
        repeat=RepeatKind.from_raw(d.get("repeat")),
        repeat_days=tuple(int(x) for x in d.get("repeatDays") or ()),
        order=int(d.get("order", 0)),
        category_ids=tuple(str(x) for x in d.get("categoryIds") or ()),
        steps=tuple(_subtask_from_dict(s, now) for s in d.get("steps") or () if isinstance(s, dict)),
    )


def _list_from_dict(d: dict[str, Any]) -> TaskList:
    return TaskList(
        id=str(d["id"]),
        name=str(d.get("name") or ""),
        emoji=_opt_str(d.get("emoji")),
        color=_opt_str(d.get("color")),
        group_id=_opt_str(d.get("groupId")),
        order=int(d.get("order", 0)),
        created_at=_dt(d.get("createdAt")),
    )


def _group_from_dict(d: dict[str, Any]) -> ListGroup:
    return ListGroup(
        id=str(d["id"]),
        name=str(d.get("name") or ""),
        emoji=_opt_str(d.get("emoji")),
        color=_opt_str(d.get("color")),
        collapsed=bool(d.get("collapsed", False)),
        order=int(d.get("order", 0)),
        override_list_icons=bool(d.get("overrideListIcons", False)),
        created_at=_dt(d.get("createdAt")),
    )


def _category_from_dict(d: dict[str, Any], now: datetime) -> Category:
    created = _dt(d.get("createdAt"), now) or now
    return Category(
        id=str(d["id"]),
        name=str(d.get("name") or ""),
        created_at=created,
        updated_at=_dt(d.get("updatedAt"), created) or created,
        color=_opt_str(d.get("color")),
        emoji=_opt_str(d.get("emoji")),
        description=_opt_str(d.get("description")),
    )


def _preset_from_dict(d: dict[str, Any]) -> TimePreset:
    return TimePreset(
        id=str(d["id"]),
        label=str(d.get("label") or ""),
        hour=int(d.get("hour", 0)),
        minute=int(d.get("minute", 0)),
        is_custom=bool(d.get("isCustom", True)),
        created_at=_dt(d.get("createdAt")),
    )


def _records(payload: dict[str, Any], key: str) -> list[dict[str, Any]]:
    raw = payload.get(key) or []
    if not isinstance(raw, list):
        return []
    return [r for r in raw if isinstance(r, dict) and r.get("id")]


def payload_to_state(payload: dict[str, Any], *, now: datetime) -> AppState:
    """
    Build AppState from an (already migrated) payload.

    System lists are always re-seeded; stored copies of them are ignored.
    """
    user_lists = [
        _list_from_dict(d) for d in _records(payload, "lists") if not d.get("isSystem", False)
    ]
    return AppState(
        tasks=tuple(_task_from_dict(d, now) for d in _records(payload, "tasks")),
        lists=default_system_lists(now) + tuple(user_lists),
        list_groups=tuple(_group_from_dict(d) for d in _records(payload, "listGroups")),
        categories=tuple(_category_from_dict(d, now) for d in _records(payload, "categories")),
        current_view=ViewType.from_raw(payload.get("currentView")),
        current_list_id=_opt_str(payload.get("currentListId")),
        current_category_id=_opt_str(payload.get("currentCategoryId")),
        dark_mode=bool(payload.get("darkMode", False)),
        sidebar_collapsed=bool(payload.get("sidebarCollapsed", False)),
        custom_time_presets=tuple(_preset_from_dict(d) for d in _records(payload, "customTimePresets")),
        disabled_built_in_presets=tuple(
            str(x) for x in payload.get("disabledBuiltInPresets") or () if isinstance(x, str)
        ),
    )
