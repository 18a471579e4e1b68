# tests/test_config.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from kanban_dashboard.config import Settings
from kanban_dashboard.logging_setup import setup_logging


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in (
        "KANBAN_APP_NAME",
        "KANBAN_LOG_LEVEL",
        "KANBAN_AUTH_BASE_URL",
        "KANBAN_HTTP_TIMEOUT_SECONDS",
        "KANBAN_DATA_DIR",
        "KANBAN_STORAGE_DIR",
        "KANBAN_TASKS_SLOT",
        "KANBAN_TOKEN_SLOT",
        "KANBAN_DEFAULT_STATUS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env) -> None:
    s = Settings.from_env()

    assert s.auth_base_url == "https://apis.ccbp.in"
    assert s.data_dir == Path(".local/kanban")
    assert s.storage_dir == Path(".local/kanban/storage")
    assert s.tasks_slot == "dashboard_tasks"
    assert s.token_slot == "jwt_token"
    assert s.default_status == "progress"
    assert s.http_timeout_seconds == 10.0


def test_env_overrides(clean_env, tmp_path: Path) -> None:
    clean_env.setenv("KANBAN_AUTH_BASE_URL", "http://localhost:8000/")
    clean_env.setenv("KANBAN_DATA_DIR", str(tmp_path))
    clean_env.setenv("KANBAN_DEFAULT_STATUS", "TODO")
    clean_env.setenv("KANBAN_HTTP_TIMEOUT_SECONDS", "not-a-number")

    s = Settings.from_env()

    assert s.auth_base_url == "http://localhost:8000"
    assert s.storage_dir == tmp_path / "storage"
    assert s.default_status == "todo"
    assert s.http_timeout_seconds == 10.0


def test_unknown_default_status_falls_back(clean_env) -> None:
    clean_env.setenv("KANBAN_DEFAULT_STATUS", "archived")
    assert Settings.from_env().default_status == "progress"


def test_setup_logging_writes_log_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved = list(root.handlers)
    try:
        setup_logging(log_dir=tmp_path, console_level=logging.ERROR)
        logging.getLogger("kanban_dashboard.test").info("hello file")
        for h in root.handlers:
            h.flush()
        assert "hello file" in (tmp_path / "kanban.log").read_text("utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved:
            root.addHandler(h)


@pytest.mark.parametrize("status", ["todo", "progress", "done"])
def test_every_board_column_is_a_valid_default_status(clean_env, status: str) -> None:
    clean_env.setenv("KANBAN_DEFAULT_STATUS", status.upper())
    assert Settings.from_env().default_status == status
