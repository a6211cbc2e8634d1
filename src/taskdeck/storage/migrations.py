# src/taskdeck/storage/migrations.py

"""
Versioned repairs for persisted blobs.

Each step upgrades a payload to `target` and only backfills what is missing;
it never overwrites values already present. Payloads with no schemaVersion
are treated as version 0.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Payload = dict[str, Any]


def _records(payload: Payload, key: str) -> list[Any]:
    raw = payload.get(key)
    if not isinstance(raw, list):
        raw = []
        payload[key] = raw
    return raw


def _to_v1(payload: Payload) -> None:
    """Tasks gained order, pin flags, categories and steps."""
    for index, task in enumerate(_records(payload, "tasks")):
        if not isinstance(task, dict):
            continue
        if not isinstance(task.get("order"), int):
            task["order"] = index
        task.setdefault("pinned", False)
        task.setdefault("pinnedGlobally", False)
        if not isinstance(task.get("categoryIds"), list):
            task["categoryIds"] = []
        if not isinstance(task.get("steps"), list):
            task["steps"] = []


def _to_v2(payload: Payload) -> None:
    """Lists gained groups/order; groups, categories and time presets were added."""
    for index, lst in enumerate(_records(payload, "lists")):
        if not isinstance(lst, dict):
            continue
        lst.setdefault("groupId", None)
        if not isinstance(lst.get("order"), int):
            lst["order"] = index
    for group in _records(payload, "listGroups"):
        if isinstance(group, dict):
            group.setdefault("overrideListIcons", False)
            group.setdefault("collapsed", False)
    _records(payload, "categories")
    _records(payload, "customTimePresets")
    _records(payload, "disabledBuiltInPresets")


MIGRATIONS: list[tuple[int, Callable[[Payload], None]]] = [
    (1, _to_v1),
    (2, _to_v2),
]

SCHEMA_VERSION = MIGRATIONS[-1][0]


def stored_version(payload: Payload) -> int:
    raw = payload.get("schemaVersion")
    return raw if isinstance(raw, int) and raw >= 0 else 0


def migrate(payload: Payload) -> Payload:
    """Run every migration newer than the payload's version, in order (in place)."""
    version = stored_version(payload)
    for target, step in MIGRATIONS:
        if target <= version:
            continue
        step(payload)
        logger.info("State migration: schema v%d -> v%d", version, target)
        version = target
    payload["schemaVersion"] = version
    return payload
