# src/kanban_dashboard/tasks/task_store.py

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from ..core.ports import SlotStorage
from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_TASKS_SLOT = "dashboard_tasks"


class JsonTaskRepository:
    """
    Full-state mirror of the task collection in one storage slot.

    - save() serializes the whole collection as a JSON array and replaces the slot.
    - load() returns the stored collection, or an empty one when the slot is
      missing or cannot be interpreted. There is no history and no diffing.
    """

    def __init__(self, storage: SlotStorage, slot: str = DEFAULT_TASKS_SLOT) -> None:
        self._storage = storage
        self._slot = slot

    @property
    def slot(self) -> str:
        return self._slot

    def load(self) -> tuple[Task, ...]:
        try:
            raw = self._storage.get_item(self._slot)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Ignoring unreadable tasks in slot=%s: %s", self._slot, e)
            return ()
        if not raw:
            logger.info("No saved tasks in slot=%s, starting empty", self._slot)
            return ()

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            tasks = tuple(Task.from_dict(item) for item in data)
        except (ValueError, TypeError, RecursionError) as e:
            logger.warning("Ignoring malformed tasks in slot=%s: %s", self._slot, e)
            return ()

        ids = [t.id for t in tasks]
        if len(set(ids)) != len(ids):
            logger.warning("Ignoring tasks in slot=%s: duplicate ids", self._slot)
            return ()

        logger.info("Loaded %d tasks from slot=%s", len(tasks), self._slot)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        payload = json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)
        self._storage.set_item(self._slot, payload)
        logger.debug("Saved %d tasks to slot=%s", len(tasks), self._slot)
