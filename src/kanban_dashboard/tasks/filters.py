# src/kanban_dashboard/tasks/filters.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .task_models import Task, TaskStatus

COLUMN_TITLES: dict[TaskStatus, str] = {
    TaskStatus.TODO: "To Do",
    TaskStatus.PROGRESS: "On Progress",
    TaskStatus.DONE: "Done",
}


@dataclass(frozen=True, slots=True)
class TaskFilter:
    """Board filter bar. Empty fields do not constrain anything."""

    search: str = ""
    category: str = ""
    priority: str = ""
    service_date: str = ""

    def is_empty(self) -> bool:
        return not (self.search or self.category or self.priority or self.service_date)

    def matches(self, task: Task) -> bool:
        if self.search and self.search.lower() not in task.title.lower():
            return False
        if self.category and task.category != self.category:
            return False
        if self.priority and task.priority.value != self.priority:
            return False
        if self.service_date and task.service_date != self.service_date:
            return False
        return True


def filter_tasks(tasks: Iterable[Task], criteria: TaskFilter) -> list[Task]:
    return [t for t in tasks if criteria.matches(t)]


def partition_by_status(tasks: Iterable[Task]) -> dict[TaskStatus, list[Task]]:
    columns: dict[TaskStatus, list[Task]] = {s: [] for s in TaskStatus}
    for t in tasks:
        columns[t.status].append(t)
    return columns


def column_counts(tasks: Iterable[Task]) -> dict[TaskStatus, int]:
    return {s: len(items) for s, items in partition_by_status(tasks).items()}


def category_options(tasks: Iterable[Task]) -> list[str]:
    """Distinct non-empty categories across all tasks, first-seen order."""
    seen: dict[str, None] = {}
    for t in tasks:
        if t.category:
            seen.setdefault(t.category, None)
    return list(seen)
