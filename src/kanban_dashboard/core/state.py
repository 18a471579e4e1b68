# src/kanban_dashboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..session.gate import Screen, SessionGate
from .board import BoardController


@dataclass
class AppState:
    # Settings live on the state so connectors and commands can reach them.
    settings: Any

    board: BoardController
    session: SessionGate

    @property
    def screen(self) -> Screen:
        return self.session.screen
