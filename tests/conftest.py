# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from kanban_dashboard.cli.bootstrap import create_initial_state
from kanban_dashboard.core.state import AppState
from kanban_dashboard.storage.local_storage import LocalStorage
from kanban_dashboard.tasks.task_models import Priority, Task, TaskDraft, TaskStatus

from .fakes import FakeAuthClient


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and commands.

    We intentionally use a SimpleNamespace rather than reading the environment,
    to keep unit tests isolated and deterministic.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="kanban-test",
        log_level="DEBUG",
        log_to_file=False,
        auth_base_url="https://auth.test",
        http_timeout_seconds=1.0,
        data_dir=data_dir,
        storage_dir=data_dir / "storage",
        tasks_slot="dashboard_tasks",
        token_slot="jwt_token",
        default_status="progress",
    )


@pytest.fixture()
def auth() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture()
def storage(settings: SimpleNamespace) -> LocalStorage:
    return LocalStorage(settings.storage_dir)


@pytest.fixture()
def logged_out_state(settings: SimpleNamespace, auth: FakeAuthClient) -> AppState:
    state = create_initial_state(settings=settings, auth=auth)
    state.board.mount()
    return state


@pytest.fixture()
def state(settings: SimpleNamespace, storage: LocalStorage, auth: FakeAuthClient) -> AppState:
    """AppState with a stored session token, i.e. already on the board screen."""
    storage.set_item(settings.token_slot, "stored-token")
    state = create_initial_state(settings=settings, auth=auth)
    state.board.mount()
    return state


def make_task(
    task_id: str,
    title: str = "Task",
    *,
    category: str = "",
    priority: Priority = Priority.LOW,
    status: TaskStatus = TaskStatus.PROGRESS,
    service_date: str = "",
    description: str = "",
    image: str = "",
) -> Task:
    return Task(
        id=task_id,
        title=title,
        description=description,
        priority=priority,
        category=category,
        service_date=service_date,
        status=status,
        image=image,
    )


def make_draft(title: str = "Task", **kwargs) -> TaskDraft:
    return TaskDraft(title=title, **kwargs)
