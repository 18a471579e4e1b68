# src/kanban_dashboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (storage, task repo, auth client, session gate).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.board import BoardController
from ..core.state import AppState
from ..session.auth_client import HttpAuthClient
from ..session.gate import SessionGate, SlotTokenRepo
from ..storage.local_storage import LocalStorage
from ..tasks.task_models import TaskStatus
from ..tasks.task_store import JsonTaskRepository

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, auth=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the auth client) injectable makes the app easier to test
    and avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage = LocalStorage(settings.storage_dir)

    if auth is None:
        auth = HttpAuthClient(
            settings.auth_base_url,
            timeout_seconds=settings.http_timeout_seconds,
        )

    board = BoardController(
        JsonTaskRepository(storage, slot=settings.tasks_slot),
        default_status=TaskStatus.parse(settings.default_status),
    )
    session = SessionGate(auth, SlotTokenRepo(storage, slot=settings.token_slot))

    logger.debug(
        "State ready storage=%s session=%s default_status=%s",
        storage.root,
        session.state,
        board.default_status,
    )
    return AppState(settings=settings, board=board, session=session)
