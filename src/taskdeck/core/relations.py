# src/taskdeck/core/relations.py

"""
Parent/child delete policies.

Every delete command that removes a parent entity looks its dependents up here,
so the list/group/category asymmetry lives in one table instead of per-command code.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from .models import AppState


class DeletePolicy(StrEnum):
    CASCADE = "cascade"  # dependents are deleted
    REASSIGN = "reassign"  # dependents point at a caller-supplied replacement
    STRIP = "strip"  # parent id is removed from a membership collection


@dataclass(frozen=True, slots=True)
class Relation:
    parent: str
    collection: str
    field: str
    policy: DeletePolicy


RELATIONS: dict[str, Relation] = {
    "list": Relation("list", "tasks", "list_id", DeletePolicy.CASCADE),
    "group": Relation("group", "lists", "group_id", DeletePolicy.REASSIGN),
    "category": Relation("category", "tasks", "category_ids", DeletePolicy.STRIP),
}


def apply_delete_policy(
    state: AppState,
    parent: str,
    parent_id: str,
    *,
    target_id: str | None = None,
) -> tuple[AppState, int]:
    """
    Apply the dependent-side effect of deleting `parent_id`.

    Returns the new state and the number of affected dependents. The parent
    record itself is removed by the caller.
    """
    rel = RELATIONS[parent]
    items = getattr(state, rel.collection)

    if rel.policy is DeletePolicy.CASCADE:
        kept = tuple(i for i in items if getattr(i, rel.field) != parent_id)
        return replace(state, **{rel.collection: kept}), len(items) - len(kept)

    if rel.policy is DeletePolicy.REASSIGN:
        affected = 0
        out = []
        for item in items:
            if getattr(item, rel.field) == parent_id:
                affected += 1
                item = replace(item, **{rel.field: target_id})
            out.append(item)
        return replace(state, **{rel.collection: tuple(out)}), affected

    affected = 0
    out = []
    for item in items:
        members = getattr(item, rel.field)
        if parent_id in members:
            affected += 1
            item = replace(item, **{rel.field: tuple(m for m in members if m != parent_id)})
        out.append(item)
    return replace(state, **{rel.collection: tuple(out)}), affected
