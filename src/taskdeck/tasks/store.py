# src/taskdeck/tasks/store.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from ..core.events import CommandResult, DomainEvent
from ..core.models import (
    ALL_LIST_ID,
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
    initial_state,
)
from ..core.ports import Clock, EventSink, IdFactory
from ..storage.persistence import PersistenceAdapter
from . import commands, queries
from .statistics import TaskStatistics, compute_statistics

logger = logging.getLogger(__name__)


class _NullSink:
    def notify(self, event: DomainEvent) -> None:
        return


class TaskStore:
    """
    The only writer of AppState.

    Each command runs the matching pure command, swaps in the resulting
    state, persists once, then forwards its events to the sink. Rejected
    commands leave the state alone and only emit an error event.

    Construct one instance at start-up and pass it to whoever needs it.
    """

    def __init__(
        self,
        persistence: PersistenceAdapter,
        *,
        sink: EventSink | None = None,
        clock: Clock = datetime.now,
        new_id: IdFactory = generate_id,
        week_starts_on: int = 0,
    ) -> None:
        self._persistence = persistence
        self._sink: EventSink = sink or _NullSink()
        self._clock = clock
        self._new_id = new_id
        self.week_starts_on = week_starts_on

        now = self._clock()
        self._state = persistence.load(now=now) or initial_state(now)
        logger.info(
            "TaskStore ready tasks=%d lists=%d groups=%d categories=%d",
            len(self._state.tasks),
            len(self._state.lists),
            len(self._state.list_groups),
            len(self._state.categories),
        )
        self.process_repeating_tasks()

    @property
    def state(self) -> AppState:
        return self._state

    def now(self) -> datetime:
        return self._clock()

    # ---- dispatch ----

    def _dispatch(self, command: commands.Command, *args: Any, **kwargs: Any) -> CommandResult:
        result = commands.run(command, self._state, *args, **kwargs)
        if result.changed:
            self._state = result.state
            if result.persist:
                self._persistence.save(self._state)
        for event in result.events:
            try:
                self._sink.notify(event)
            except Exception:
                logger.exception("Event sink failed for %s", event.title)
        return result

    # ---- tasks ----

    def add_task(
        self,
        title: str,
        list_id: str = ALL_LIST_ID,
        *,
        important: bool = False,
        my_day: bool = False,
        due_date: datetime | None = None,
        reminder: datetime | None = None,
        notes: str | None = None,
        repeat: RepeatKind | str = RepeatKind.NONE,
        repeat_days: Iterable[int] | None = None,
        category_ids: Iterable[str] | None = None,
        steps: Iterable[str | SubTask] | None = None,
    ) -> Task | None:
        """Returns the new task, or None when validation rejected it."""
        result = self._dispatch(
            commands.add_task,
            title,
            list_id,
            now=self.now(),
            new_id=self._new_id,
            important=important,
            my_day=my_day,
            due_date=due_date,
            reminder=reminder,
            notes=notes,
            repeat=repeat,
            repeat_days=repeat_days,
            category_ids=category_ids,
            steps=steps,
        )
        return result.state.tasks[-1] if result.changed else None

    def update_task(self, task_id: str, changes: Mapping[str, Any]) -> bool:
        return self._dispatch(
            commands.update_task, task_id, changes, now=self.now(), new_id=self._new_id
        ).changed

    def delete_task(self, task_id: str) -> bool:
        return self._dispatch(commands.delete_task, task_id).changed

    def toggle_task(self, task_id: str) -> bool:
        return self._dispatch(commands.toggle_task, task_id, now=self.now()).changed

    def toggle_important(self, task_id: str) -> bool:
        return self._dispatch(commands.toggle_important, task_id, now=self.now()).changed

    def toggle_my_day(self, task_id: str) -> bool:
        return self._dispatch(commands.toggle_my_day, task_id, now=self.now()).changed

    def toggle_pin(self, task_id: str) -> bool:
        return self._dispatch(commands.toggle_pin, task_id, now=self.now()).changed

    def toggle_global_pin(self, task_id: str) -> bool:
        return self._dispatch(commands.toggle_global_pin, task_id, now=self.now()).changed

    def add_sub_task(self, task_id: str, title: str) -> bool:
        return self._dispatch(
            commands.add_sub_task, task_id, title, now=self.now(), new_id=self._new_id
        ).changed

    def toggle_sub_task(self, task_id: str, step_id: str) -> bool:
        return self._dispatch(commands.toggle_sub_task, task_id, step_id, now=self.now()).changed

    def delete_sub_task(self, task_id: str, step_id: str) -> bool:
        return self._dispatch(commands.delete_sub_task, task_id, step_id, now=self.now()).changed

    def reorder_tasks(self, task_ids: Iterable[str], list_id: str) -> bool:
        return self._dispatch(commands.reorder_tasks, list(task_ids), list_id).changed

    def process_repeating_tasks(self) -> bool:
        return self._dispatch(commands.process_repeating_tasks, now=self.now()).changed

    # ---- lists ----

    def add_list(
        self,
        name: str,
        *,
        color: str | None = None,
        emoji: str | None = None,
        group_id: str | None = None,
    ) -> TaskList | None:
        result = self._dispatch(
            commands.add_list,
            name,
            now=self.now(),
            new_id=self._new_id,
            color=color,
            emoji=emoji,
            group_id=group_id,
        )
        return result.state.lists[-1] if result.changed else None

    def update_list(self, list_id: str, changes: Mapping[str, Any]) -> bool:
        return self._dispatch(commands.update_list, list_id, changes).changed

    def delete_list(self, list_id: str) -> bool:
        return self._dispatch(commands.delete_list, list_id).changed

    def reorder_lists(self, list_ids: Iterable[str], group_id: str | None = None) -> bool:
        return self._dispatch(commands.reorder_lists, list(list_ids), group_id).changed

    def move_list_to_group(self, list_id: str, group_id: str | None) -> bool:
        return self._dispatch(commands.move_list_to_group, list_id, group_id).changed

    # ---- groups ----

    def add_group(
        self, name: str, *, emoji: str | None = None, color: str | None = None
    ) -> ListGroup | None:
        result = self._dispatch(
            commands.add_group, name, now=self.now(), new_id=self._new_id, emoji=emoji, color=color
        )
        return result.state.list_groups[-1] if result.changed else None

    def update_group(self, group_id: str, changes: Mapping[str, Any]) -> bool:
        return self._dispatch(commands.update_group, group_id, changes).changed

    def delete_group(self, group_id: str, target_group_id: str | None = None) -> bool:
        return self._dispatch(commands.delete_group, group_id, target_group_id).changed

    def reorder_groups(self, group_ids: Iterable[str]) -> bool:
        return self._dispatch(commands.reorder_groups, list(group_ids)).changed

    def toggle_group_collapsed(self, group_id: str) -> bool:
        return self._dispatch(commands.toggle_group_collapsed, group_id).changed

    # ---- categories ----

    def add_category(
        self,
        name: str,
        *,
        color: str | None = None,
        emoji: str | None = None,
        description: str | None = None,
    ) -> Category | None:
        result = self._dispatch(
            commands.add_category,
            name,
            now=self.now(),
            new_id=self._new_id,
            color=color,
            emoji=emoji,
            description=description,
        )
        return result.state.categories[-1] if result.changed else None

    def update_category(self, category_id: str, changes: Mapping[str, Any]) -> bool:
        return self._dispatch(commands.update_category, category_id, changes, now=self.now()).changed

    def delete_category(self, category_id: str) -> bool:
        return self._dispatch(commands.delete_category, category_id).changed

    def assign_task_to_category(self, task_id: str, category_id: str) -> bool:
        return self._dispatch(
            commands.assign_task_to_category, task_id, category_id, now=self.now()
        ).changed

    def remove_task_from_category(self, task_id: str, category_id: str) -> bool:
        return self._dispatch(
            commands.remove_task_from_category, task_id, category_id, now=self.now()
        ).changed

    def assign_task_to_categories(self, task_id: str, category_ids: Iterable[str]) -> bool:
        return self._dispatch(
            commands.assign_task_to_categories, task_id, list(category_ids), now=self.now()
        ).changed

    # ---- time presets ----

    def add_custom_time_preset(self, label: str, hour: int, minute: int) -> TimePreset | None:
        result = self._dispatch(
            commands.add_custom_time_preset, label, hour, minute, now=self.now(), new_id=self._new_id
        )
        return result.state.custom_time_presets[-1] if result.changed else None

    def remove_custom_time_preset(self, preset_id: str) -> bool:
        return self._dispatch(commands.remove_custom_time_preset, preset_id).changed

    def remove_built_in_preset(self, preset_id: str) -> bool:
        return self._dispatch(commands.remove_built_in_preset, preset_id).changed

    def restore_built_in_preset(self, preset_id: str) -> bool:
        return self._dispatch(commands.restore_built_in_preset, preset_id).changed

    # ---- view / presentation ----

    def set_view(
        self,
        view: ViewType | str,
        list_id: str | None = None,
        category_id: str | None = None,
    ) -> bool:
        return self._dispatch(commands.set_view, view, list_id, category_id).changed

    def set_search_query(self, text: str) -> None:
        self._dispatch(commands.set_search_query, text)

    def toggle_dark_mode(self) -> None:
        self._dispatch(commands.toggle_dark_mode)

    def toggle_sidebar(self) -> None:
        self._dispatch(commands.toggle_sidebar)

    # ---- queries ----

    def get_filtered_tasks(self, flt: queries.TaskFilter | None = None) -> list[Task]:
        return queries.filter_tasks(
            self._state, flt, now=self.now(), week_starts_on=self.week_starts_on
        )

    def get_tasks_for_current_view(self) -> list[Task]:
        return queries.tasks_for_current_view(self._state, now=self.now())

    def get_task_count_for_list(self, list_id: str) -> int:
        return queries.task_count_for_list(self._state, list_id, now=self.now())

    def get_task_count_for_category(self, category_id: str) -> int:
        return queries.task_count_for_category(self._state, category_id)

    def get_lists_in_group(self, group_id: str | None) -> list[TaskList]:
        return queries.lists_in_group(self._state, group_id)

    def get_grouped_lists(self) -> list[tuple[ListGroup, list[TaskList]]]:
        return queries.grouped_lists(self._state)

    def get_group_for_list(self, list_id: str) -> ListGroup | None:
        return queries.group_for_list(self._state, list_id)

    def get_categories_for_task(self, task_id: str) -> list[Category]:
        return queries.categories_for_task(self._state, task_id)

    def get_time_presets(self) -> list[TimePreset]:
        return queries.time_presets(self._state)

    def get_statistics_for_current_view(self) -> TaskStatistics:
        s = self._state
        return compute_statistics(
            s.tasks,
            s.current_view,
            now=self.now(),
            list_id=s.current_list_id,
            category_id=s.current_category_id,
            week_starts_on=self.week_starts_on,
        )
