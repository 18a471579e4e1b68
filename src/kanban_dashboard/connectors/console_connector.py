# src/kanban_dashboard/connectors/console_connector.py

from __future__ import annotations

import asyncio
import getpass
import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..session.gate import LoginResult, Screen
from .board_view import render_board

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def submit_login(state: AppState, username: str, password: str) -> LoginResult:
    """Run one login attempt to completion (the request cannot be cancelled)."""
    return asyncio.run(state.session.login(username, password))


def run_login_screen(
    state: AppState,
    *,
    read_line: Prompt = input,
    read_secret: Prompt = getpass.getpass,
) -> bool:
    """
    Login form. Loops until a login succeeds (True) or the user quits (False).
    A failed attempt shows the server's message inline and asks again.
    """
    _print_ts("[LOGIN] Enter your credentials. Empty username or /exit to quit.")
    while state.screen is Screen.LOGIN:
        try:
            username = read_line("Username: ").strip()
            if not username or username.lower() in ("/exit", "/quit"):
                return False
            password = read_secret("Password: ")
        except (EOFError, KeyboardInterrupt):
            print()
            return False

        result = submit_login(state, username, password)
        if not result.ok:
            _print_ts(f"[LOGIN] {result.error_msg}")

    return True


def run_console_loop(
    state: AppState,
    *,
    read_line: Prompt = input,
    read_secret: Prompt = getpass.getpass,
) -> None:
    logger.info("Console connector started (screen=%s).", state.screen)

    def emit(text: str) -> None:
        # Immediate user-visible feedback for slow operations (e.g. image reads)
        print(f"[{_ts_local()}] {text}", flush=True)

    state.board.mount()

    while True:
        if state.screen is Screen.LOGIN:
            if not run_login_screen(state, read_line=read_line, read_secret=read_secret):
                logger.info("Login screen closed, exiting.")
                break
            print(render_board(state.board))
            _print_ts("[BOARD] Use /help for commands. Use /exit to quit.\n")

        try:
            user_input = read_line(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is None:
            response = "Commands start with '/'. Use /help to list them."

        print(f"[{_ts_local()}] {response}")

        # Board-changing commands re-render so the columns stay current.
        if state.screen is Screen.BOARD and _changes_board(user_input):
            print(render_board(state.board))

    logger.info("Console connector finished.")


_RERENDER = {"add", "edit", "delete", "rm", "move", "mv", "filter"}


def _changes_board(line: str) -> bool:
    parts = line[1:].split(maxsplit=1)
    return bool(parts) and parts[0].lower() in _RERENDER
