# src/kanban_dashboard/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
import shlex
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import cast

from ..connectors.board_view import describe_filter, render_board, short_id
from ..core.state import AppState
from ..session.gate import Screen
from ..tasks.filters import COLUMN_TITLES
from ..tasks.task_models import Priority, TaskDraft, TaskStatus, normalize_service_date
from ..tasks.images import read_image_data_url

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

FIELD_ALIASES = {
    "title": "title",
    "description": "description",
    "desc": "description",
    "priority": "priority",
    "category": "category",
    "date": "service_date",
    "servicedate": "service_date",
    "service_date": "service_date",
    "image": "image",
}

FILTER_KEYS = {
    "search": "search",
    "q": "search",
    "category": "category",
    "priority": "priority",
    "date": "service_date",
}


@dataclass(slots=True)
class _Command:
    handler: CommandHandler
    help_text: str
    requires_login: bool


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._commands: dict[str, _Command] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        *,
        requires_login: bool = True,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        cmd = _Command(handler=handler, help_text=help_text, requires_login=requires_login)
        self._commands[key] = cmd
        self._help[key] = help_text
        for alias in aliases:
            self._commands[alias.lower()] = cmd

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Cannot parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        cmd = self._commands.get(name)
        if not cmd:
            return f"Unknown command: /{name}. Use /help to list available commands."

        if cmd.requires_login and state.screen is not Screen.BOARD:
            return "Please log in first."

        try:
            nparams = len(inspect.signature(cmd.handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, cmd.handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, cmd.handler)
            return h2(state, args)
        except (ValueError, LookupError, OSError) as e:
            # User input problems: shown inline, board state untouched.
            logger.debug("Command /%s rejected: %s", name, e)
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- form parsing ----


def parse_fields(args: list[str], allowed: dict[str, str]) -> dict[str, str]:
    """Parse `key=value` arguments into {canonical_key: value}."""
    out: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep:
            raise ValueError(f"Expected key=value, got {arg!r}.")
        canonical = allowed.get(key.strip().lower())
        if canonical is None:
            raise ValueError(f"Unknown field {key!r}. Allowed: {', '.join(sorted(allowed))}.")
        out[canonical] = value
    return out


def build_draft(
    fields: dict[str, str],
    base: TaskDraft | None = None,
    emit: CommandEmitter | None = None,
) -> TaskDraft:
    """Apply form fields on top of `base` (a blank form when None)."""
    draft = base or TaskDraft()
    changes: dict[str, object] = {}

    if "title" in fields:
        changes["title"] = fields["title"].strip()
    if "description" in fields:
        changes["description"] = fields["description"].strip()
    if "category" in fields:
        changes["category"] = fields["category"].strip()
    if "priority" in fields:
        changes["priority"] = Priority.parse(fields["priority"])
    if "service_date" in fields:
        changes["service_date"] = normalize_service_date(fields["service_date"])
    if "image" in fields:
        path = fields["image"].strip()
        if path:
            if emit:
                with contextlib.suppress(Exception):
                    emit(f"Reading image {path}...")
            changes["image"] = read_image_data_url(path)
        else:
            changes["image"] = ""

    return replace(draft, **changes)


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_board(state: AppState, args: list[str]) -> str:
    return render_board(state.board)


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add title="Fix sink" priority=High category=Plumbing date=2024-05-01 image=./sink.png
    """
    draft = build_draft(parse_fields(args, FIELD_ALIASES), emit=emit)
    task = state.board.save_task(draft)
    return f"Added #{short_id(task)} {task.title!r} ({COLUMN_TITLES[task.status]})."


def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /edit <id> field=value ...   (fields not given keep their current value)
    """
    if not args:
        return "Usage: /edit <id> field=value ..."
    task = state.board.resolve(args[0])
    fields = parse_fields(args[1:], FIELD_ALIASES)
    if not fields:
        return "Nothing to change. Usage: /edit <id> field=value ..."
    draft = build_draft(fields, base=task.to_draft(), emit=emit)
    updated = state.board.save_task(draft, editing=task)
    return f"Updated #{short_id(updated)} {updated.title!r}."


def cmd_delete(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /delete <id>"
    task = state.board.resolve(args[0])
    state.board.delete_task(task.id)
    return f"Deleted #{short_id(task)} {task.title!r}."


def cmd_move(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /move <id> <todo|progress|done>"
    task = state.board.resolve(args[0])
    status = TaskStatus.parse(args[1])
    state.board.move_task(task.id, status)
    return f"Moved #{short_id(task)} to {COLUMN_TITLES[status]}."


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter                -> show current filter
    /filter clear          -> remove all criteria
    /filter key=value ...  -> set criteria (empty value clears that criterion)
    """
    board = state.board
    if not args:
        current = describe_filter(board.filter)
        return f"Filter: {current}" if current else "No filter set."

    if len(args) == 1 and args[0].lower() in ("clear", "reset", "off"):
        board.clear_filter()
        return "Filter cleared."

    fields = parse_fields(args, FILTER_KEYS)
    if fields.get("priority"):
        fields["priority"] = Priority.parse(fields["priority"]).value
    if fields.get("service_date"):
        fields["service_date"] = normalize_service_date(fields["service_date"])

    board.set_filter(**fields)
    visible = len(board.visible_tasks())
    return f"Filter: {describe_filter(board.filter) or '(none)'} -> {visible} of {len(board.tasks)} tasks."


def cmd_categories(state: AppState, args: list[str]) -> str:
    cats = state.board.categories()
    if not cats:
        return "No categories yet."
    return "Categories: " + ", ".join(cats)


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    counts = state.board.counts()
    return (
        "Status:\n"
        f"  Session: {state.session.state.value}\n"
        f"  Tasks: {len(state.board.tasks)} "
        f"(todo={counts[TaskStatus.TODO]}, progress={counts[TaskStatus.PROGRESS]}, done={counts[TaskStatus.DONE]})\n"
        f"  New tasks start in: {state.board.default_status.value}\n"
        f"  Storage: {getattr(settings, 'storage_dir', '?')}\n"
        f"  Auth endpoint: {getattr(settings, 'auth_base_url', '?')}/login"
    )


def cmd_logout(state: AppState, args: list[str]) -> str:
    state.session.logout()
    return "Logged out."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"], requires_login=False)
registry.register("board", cmd_board, help_text="Show the board.", aliases=["b", "ls"])
registry.register(
    "add",
    cmd_add,
    help_text="Add a task: /add title=.. description=.. priority=Low|High category=.. date=YYYY-MM-DD image=<path>.",
)
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> field=value ...")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register("move", cmd_move, help_text="Move a task: /move <id> todo|progress|done.", aliases=["mv"])
registry.register(
    "filter",
    cmd_filter,
    help_text="Filter: /filter search=.. category=.. priority=.. date=.. | /filter clear.",
)
registry.register("categories", cmd_categories, help_text="List categories used on the board.")
registry.register("status", cmd_status, help_text="Show session and storage status.")
registry.register("logout", cmd_logout, help_text="Log out and return to the login screen.")
