# src/kanban_dashboard/tasks/transitions.py

from __future__ import annotations

"""
Task collection reducer.

The board state is an immutable tuple of Task values. Every change goes through
`reduce(tasks, transition)`, which returns the next tuple and has no side effects.
Persisting the result is the caller's job (see core/board.py).

Transitions form a closed set: Load, Add, Update, Delete, Move.
Update/Delete/Move on an id that is not on the board leave the collection unchanged.
"""

import logging
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from .task_models import Task, TaskDraft, TaskStatus

logger = logging.getLogger(__name__)

Tasks = tuple[Task, ...]
IdFactory = Callable[[], str]

MAX_ID_ATTEMPTS = 100


def new_task_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class Load:
    tasks: Sequence[Task]


@dataclass(frozen=True, slots=True)
class Add:
    draft: TaskDraft


@dataclass(frozen=True, slots=True)
class Update:
    task: Task


@dataclass(frozen=True, slots=True)
class Delete:
    task_id: str


@dataclass(frozen=True, slots=True)
class Move:
    task_id: str
    status: TaskStatus


Transition = Load | Add | Update | Delete | Move


def _has(tasks: Tasks, task_id: str) -> bool:
    return any(t.id == task_id for t in tasks)


def _fresh_id(tasks: Tasks, id_factory: IdFactory) -> str:
    for _ in range(MAX_ID_ATTEMPTS):
        task_id = id_factory()
        if not _has(tasks, task_id):
            return task_id
    raise RuntimeError(f"Id factory returned only existing ids after {MAX_ID_ATTEMPTS} attempts")


def reduce(
    tasks: Tasks,
    transition: Transition,
    *,
    id_factory: IdFactory = new_task_id,
    default_status: TaskStatus = TaskStatus.PROGRESS,
) -> Tasks:
    match transition:
        case Load(tasks=loaded):
            return tuple(loaded)

        case Add(draft=draft):
            task_id = _fresh_id(tasks, id_factory)
            return (*tasks, Task.from_draft(draft, task_id=task_id, status=default_status))

        case Update(task=updated):
            if not _has(tasks, updated.id):
                logger.debug("Update ignored: no task id=%s", updated.id)
                return tasks
            return tuple(updated if t.id == updated.id else t for t in tasks)

        case Delete(task_id=task_id):
            if not _has(tasks, task_id):
                logger.debug("Delete ignored: no task id=%s", task_id)
                return tasks
            return tuple(t for t in tasks if t.id != task_id)

        case Move(task_id=task_id, status=status):
            if not _has(tasks, task_id):
                logger.debug("Move ignored: no task id=%s", task_id)
                return tasks
            return tuple(replace(t, status=status) if t.id == task_id else t for t in tasks)

    raise TypeError(f"Unknown transition: {transition!r}")
