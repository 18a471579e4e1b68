# src/kanban_dashboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time.
- Tests build their own settings objects instead of reading the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .tasks.task_models import TaskStatus

ENV_PREFIX = "KANBAN"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_status(name: str, default: str) -> str:
    raw = _env(name, default).strip().lower()
    return raw if raw in {s.value for s in TaskStatus} else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_to_file: bool

    # ---- Auth endpoint ----
    auth_base_url: str
    http_timeout_seconds: float

    # ---- Local storage ----
    data_dir: Path
    storage_dir: Path
    tasks_slot: str
    token_slot: str

    # ---- Board behavior ----
    default_status: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "kanban") or "kanban"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")
        log_to_file = _env_bool(_k("LOG_TO_FILE"), True)

        auth_base_url = _env(_k("AUTH_BASE_URL"), "https://apis.ccbp.in").strip().rstrip("/")
        http_timeout_seconds = max(0.1, _env_float(_k("HTTP_TIMEOUT_SECONDS"), 10.0))

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/kanban"))
        storage_dir = _env_path(_k("STORAGE_DIR"), data_dir / "storage")
        tasks_slot = _env(_k("TASKS_SLOT"), "dashboard_tasks").strip() or "dashboard_tasks"
        token_slot = _env(_k("TOKEN_SLOT"), "jwt_token").strip() or "jwt_token"

        # New tasks land in "progress" unless configured otherwise.
        default_status = _env_status(_k("DEFAULT_STATUS"), "progress")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_to_file=log_to_file,
            auth_base_url=auth_base_url,
            http_timeout_seconds=http_timeout_seconds,
            data_dir=data_dir,
            storage_dir=storage_dir,
            tasks_slot=tasks_slot,
            token_slot=token_slot,
            default_status=default_status,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
