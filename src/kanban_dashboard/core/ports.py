# src/kanban_dashboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the board and the session gate.

The core depends on Protocols instead of concrete implementations.
This keeps storage and the auth endpoint swappable and makes testing easier.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from ..tasks.task_models import Task


class SlotStorage(Protocol):
    """Named-slot text storage (the local analogue of browser localStorage)."""

    def get_item(self, slot: str) -> str | None: ...
    def set_item(self, slot: str, value: str) -> None: ...
    def remove_item(self, slot: str) -> None: ...


class TaskRepo(Protocol):
    """Whole-collection mirror: load once at startup, save after every change."""

    def load(self) -> tuple[Task, ...]: ...
    def save(self, tasks: Sequence[Task]) -> None: ...


class TokenRepo(Protocol):
    def load_token(self) -> str | None: ...
    def save_token(self, token: str) -> None: ...
    def clear_token(self) -> None: ...


@dataclass(frozen=True, slots=True)
class AuthResponse:
    """Raw outcome of one login request: HTTP status plus decoded JSON body."""

    status_code: int
    payload: dict[str, Any]

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class AuthClient(Protocol):
    """Remote authentication endpoint. One request per call, no retries."""

    async def login(self, username: str, password: str) -> AuthResponse: ...
