# src/kanban_dashboard/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """Board column a task belongs to."""

    TODO = "todo"
    PROGRESS = "progress"
    DONE = "done"

    @classmethod
    def parse(cls, raw: str) -> TaskStatus:
        value = (raw or "").strip().lower()
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown status {raw!r} (expected one of: {allowed})") from None


class Priority(StrEnum):
    LOW = "Low"
    HIGH = "High"

    @classmethod
    def parse(cls, raw: str) -> Priority:
        # Exact labels are stored; user input is matched case-insensitively.
        value = (raw or "").strip().lower()
        for p in cls:
            if p.value.lower() == value:
                return p
        raise ValueError(f"Unknown priority {raw!r} (expected Low or High)")


def normalize_service_date(raw: str | None) -> str:
    """Return an ISO date string ("" when unset). Raises ValueError on garbage."""
    value = (raw or "").strip()
    if not value:
        return ""
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise ValueError(f"Invalid service date {raw!r} (expected YYYY-MM-DD)") from None


@dataclass(frozen=True, slots=True)
class TaskDraft:
    """Form payload: everything a task has except id and status."""

    title: str = ""
    description: str = ""
    priority: Priority = Priority.LOW
    category: str = ""
    service_date: str = ""
    image: str = ""


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    description: str
    priority: Priority
    category: str
    service_date: str
    status: TaskStatus
    image: str = ""

    @classmethod
    def from_draft(cls, draft: TaskDraft, *, task_id: str, status: TaskStatus) -> Task:
        return cls(
            id=task_id,
            title=draft.title,
            description=draft.description,
            priority=draft.priority,
            category=draft.category,
            service_date=draft.service_date,
            status=status,
            image=draft.image,
        )

    def to_draft(self) -> TaskDraft:
        return TaskDraft(
            title=self.title,
            description=self.description,
            priority=self.priority,
            category=self.category,
            service_date=self.service_date,
            image=self.image,
        )

    def with_draft(self, draft: TaskDraft) -> Task:
        """Apply edited form fields, keeping id and status."""
        return replace(
            self,
            title=draft.title,
            description=draft.description,
            priority=draft.priority,
            category=draft.category,
            service_date=draft.service_date,
            image=draft.image,
        )

    # ---- serialization (stored shape uses the dashboard's camelCase keys) ----

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "category": self.category,
            "serviceDate": self.service_date,
            "status": self.status.value,
            "image": self.image,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        """
        Build a Task from a stored record.

        id and title are required; every other field falls back to the form default.
        Raises ValueError/TypeError on records that cannot be interpreted.
        """
        if not isinstance(raw, dict):
            raise TypeError(f"task record must be an object, got {type(raw).__name__}")

        task_id = raw.get("id")
        if task_id is None or str(task_id) == "":
            raise ValueError("task record has no id")
        title = raw.get("title")
        if title is None:
            raise ValueError(f"task {task_id} has no title")

        return cls(
            id=str(task_id),
            title=str(title),
            description=str(raw.get("description") or ""),
            priority=Priority.parse(str(raw.get("priority") or Priority.LOW.value)),
            category=str(raw.get("category") or ""),
            service_date=str(raw.get("serviceDate") or ""),
            status=TaskStatus.parse(str(raw.get("status") or TaskStatus.PROGRESS.value)),
            image=str(raw.get("image") or ""),
        )
