# src/kanban_dashboard/connectors/board_view.py

"""Plain-text rendering of the board: three columns side by side, one card per task."""

from __future__ import annotations

import shutil
import textwrap

from ..core.board import BoardController
from ..tasks.filters import COLUMN_TITLES, TaskFilter
from ..tasks.images import describe_image
from ..tasks.task_models import Task, TaskStatus

MIN_COL_WIDTH = 20
SEP = " | "
SHORT_ID_LEN = 8


def short_id(task: Task) -> str:
    return task.id[:SHORT_ID_LEN]


def _column_width(total_width: int) -> int:
    n = len(TaskStatus)
    return max(MIN_COL_WIDTH, (total_width - len(SEP) * (n - 1)) // n)


def render_card(task: Task, width: int) -> list[str]:
    lines: list[str] = []
    tags = f"[{task.priority.value}]"
    if task.category:
        tags += f" [{task.category}]"
    lines.extend(textwrap.wrap(tags, width) or [""])
    lines.extend(textwrap.wrap(task.title or "<untitled>", width))
    if task.description:
        lines.extend(textwrap.wrap(task.description, width, initial_indent="  ", subsequent_indent="  "))
    if task.service_date:
        lines.append(f"date: {task.service_date}"[:width])
    if task.image:
        lines.extend(textwrap.wrap(f"img: {describe_image(task.image)}", width))
    lines.append(f"#{short_id(task)}"[:width])
    return lines


def describe_filter(criteria: TaskFilter) -> str:
    parts: list[str] = []
    if criteria.search:
        parts.append(f"search={criteria.search!r}")
    if criteria.category:
        parts.append(f"category={criteria.category}")
    if criteria.priority:
        parts.append(f"priority={criteria.priority}")
    if criteria.service_date:
        parts.append(f"date={criteria.service_date}")
    return ", ".join(parts)


def render_board(board: BoardController, *, width: int | None = None) -> str:
    if width is None:
        width = shutil.get_terminal_size((120, 30)).columns
    col_w = _column_width(width)

    columns = board.columns()
    blocks: dict[TaskStatus, list[str]] = {}
    for status in TaskStatus:
        cells: list[str] = []
        tasks = columns[status]
        if not tasks:
            cells.append("(empty)")
        for i, t in enumerate(tasks):
            if i:
                cells.append("")
            cells.extend(render_card(t, col_w))
        blocks[status] = cells

    out: list[str] = []
    if not board.filter.is_empty():
        out.append(f"Filter: {describe_filter(board.filter)}")

    headers = [f"{COLUMN_TITLES[s]} ({len(columns[s])})".ljust(col_w)[:col_w] for s in TaskStatus]
    out.append(SEP.join(headers).rstrip())
    out.append(SEP.join("-" * col_w for _ in TaskStatus))

    rows = max(len(b) for b in blocks.values())
    for r in range(rows):
        cells = [(blocks[s][r] if r < len(blocks[s]) else "").ljust(col_w) for s in TaskStatus]
        out.append(SEP.join(cells).rstrip())

    return "\n".join(out)
