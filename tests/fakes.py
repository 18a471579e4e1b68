# tests/fakes.py

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from itertools import count
from typing import Any

import httpx

from kanban_dashboard.core.ports import AuthResponse
from kanban_dashboard.tasks.task_models import Task


class FakeAuthClient:
    """
    Deterministic AuthClient for unit tests.

    - Captures calls for assertions
    - Returns a predefined response, or raises a predefined error
    """

    def __init__(
        self,
        status_code: int = 200,
        payload: dict[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.payload = {"jwt_token": "abc"} if payload is None else payload
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def login(self, username: str, password: str) -> AuthResponse:
        self.calls.append((username, password))
        if self.error is not None:
            raise self.error
        return AuthResponse(status_code=self.status_code, payload=dict(self.payload))


@dataclass(slots=True)
class InMemoryStorage:
    """SlotStorage kept in a dict (no filesystem)."""

    slots: dict[str, str] = field(default_factory=dict)

    def get_item(self, slot: str) -> str | None:
        return self.slots.get(slot)

    def set_item(self, slot: str, value: str) -> None:
        self.slots[slot] = value

    def remove_item(self, slot: str) -> None:
        self.slots.pop(slot, None)


@dataclass(slots=True)
class RecordingTaskRepo:
    """TaskRepo that records every saved snapshot."""

    initial: tuple[Task, ...] = ()
    saved: list[tuple[Task, ...]] = field(default_factory=list)

    def load(self) -> tuple[Task, ...]:
        return self.initial

    def save(self, tasks: Sequence[Task]) -> None:
        self.saved.append(tuple(tasks))


def sequential_ids(prefix: str = "t"):
    """Id factory yielding t1, t2, ... for readable assertions."""
    counter = count(1)
    return lambda: f"{prefix}{next(counter)}"


def login_transport(status_code: int, body: Any, seen: list[httpx.Request] | None = None) -> httpx.MockTransport:
    """httpx transport that answers every request with a fixed JSON body."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if isinstance(body, (dict, list)):
            return httpx.Response(status_code, json=body)
        return httpx.Response(status_code, text=str(body))

    return httpx.MockTransport(handler)
