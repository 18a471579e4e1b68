# src/kanban_dashboard/core/board.py

from __future__ import annotations

"""
Board controller (view-model).

Owns the current task collection and the filter bar, applies transitions through
the pure reducer and mirrors every change to the injected TaskRepo.
Connectors read derived views from here and never touch storage directly.
"""

import logging
from dataclasses import replace

from ..tasks.filters import (
    TaskFilter,
    category_options,
    column_counts,
    filter_tasks,
    partition_by_status,
)
from ..tasks.task_models import Task, TaskDraft, TaskStatus
from ..tasks.transitions import (
    Add,
    Delete,
    IdFactory,
    Load,
    Move,
    Tasks,
    Transition,
    Update,
    new_task_id,
    reduce,
)
from .ports import TaskRepo

logger = logging.getLogger(__name__)


class BoardController:
    def __init__(
        self,
        repo: TaskRepo,
        *,
        default_status: TaskStatus = TaskStatus.PROGRESS,
        id_factory: IdFactory = new_task_id,
    ) -> None:
        self._repo = repo
        self._default_status = default_status
        self._id_factory = id_factory
        self._tasks: Tasks = ()
        self._filter = TaskFilter()
        self._mounted = False

    # ---- state ----

    @property
    def tasks(self) -> Tasks:
        return self._tasks

    @property
    def filter(self) -> TaskFilter:
        return self._filter

    @property
    def default_status(self) -> TaskStatus:
        return self._default_status

    def mount(self) -> None:
        """Load the persisted collection once. Later calls are ignored."""
        if self._mounted:
            return
        self._mounted = True
        self._tasks = reduce(self._tasks, Load(self._repo.load()))
        logger.info("Board mounted with %d tasks", len(self._tasks))

    def dispatch(self, transition: Transition) -> Tasks:
        """Apply one transition; persist the whole collection if it changed."""
        nxt = reduce(
            self._tasks,
            transition,
            id_factory=self._id_factory,
            default_status=self._default_status,
        )
        if nxt is not self._tasks:
            self._tasks = nxt
            self._repo.save(nxt)
        return self._tasks

    # ---- lookup ----

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def resolve(self, ref: str) -> Task:
        """Find a task by exact id or by a unique id prefix."""
        ref = (ref or "").strip()
        if not ref:
            raise LookupError("Task id is required.")
        exact = self.get(ref)
        if exact is not None:
            return exact
        hits = [t for t in self._tasks if t.id.startswith(ref)]
        if not hits:
            raise LookupError(f"No task with id {ref!r}.")
        if len(hits) > 1:
            raise LookupError(f"Task id {ref!r} is ambiguous ({len(hits)} matches).")
        return hits[0]

    # ---- user actions ----

    def save_task(self, draft: TaskDraft, editing: Task | None = None) -> Task:
        """Form submit: add a new task, or replace the one being edited."""
        if editing is None:
            self.dispatch(Add(draft))
            created = self._tasks[-1]
            logger.debug("Task added id=%s status=%s", created.id, created.status)
            return created

        updated = editing.with_draft(draft)
        self.dispatch(Update(updated))
        logger.debug("Task updated id=%s", updated.id)
        return updated

    def delete_task(self, task_id: str) -> None:
        self.dispatch(Delete(task_id))

    def move_task(self, task_id: str, status: TaskStatus) -> None:
        self.dispatch(Move(task_id, status))

    # ---- filter bar ----

    def set_filter(
        self,
        *,
        search: str | None = None,
        category: str | None = None,
        priority: str | None = None,
        service_date: str | None = None,
    ) -> TaskFilter:
        changes = {
            k: v
            for k, v in {
                "search": search,
                "category": category,
                "priority": priority,
                "service_date": service_date,
            }.items()
            if v is not None
        }
        self._filter = replace(self._filter, **changes)
        return self._filter

    def clear_filter(self) -> None:
        self._filter = TaskFilter()

    # ---- derived views ----

    def visible_tasks(self) -> list[Task]:
        return filter_tasks(self._tasks, self._filter)

    def columns(self) -> dict[TaskStatus, list[Task]]:
        return partition_by_status(self.visible_tasks())

    def counts(self) -> dict[TaskStatus, int]:
        return column_counts(self.visible_tasks())

    def categories(self) -> list[str]:
        return category_options(self._tasks)
