# tests/test_task_store.py

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from kanban_dashboard.core.board import BoardController
from kanban_dashboard.storage.local_storage import LocalStorage
from kanban_dashboard.tasks.task_models import Priority, Task, TaskStatus
from kanban_dashboard.tasks.task_store import JsonTaskRepository

from .conftest import make_task


def test_save_then_load_round_trips_order_and_fields(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path)
    repo = JsonTaskRepository(storage)
    tasks = (
        make_task("b", "Second first", category="Plumbing", priority=Priority.HIGH, service_date="2024-05-01"),
        make_task("a", "Then this", status=TaskStatus.DONE, description="multi\nline", image="data:image/png;base64,AAAA"),
    )

    repo.save(tasks)

    assert JsonTaskRepository(LocalStorage(tmp_path)).load() == tasks


def test_snapshot_uses_dashboard_record_shape(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path)
    JsonTaskRepository(storage).save([make_task("1", "A", service_date="2024-01-02")])

    data = json.loads(storage.get_item("dashboard_tasks") or "")
    assert data == [
        {
            "id": "1",
            "title": "A",
            "description": "",
            "priority": "Low",
            "category": "",
            "serviceDate": "2024-01-02",
            "status": "progress",
            "image": "",
        }
    ]


def test_save_replaces_previous_snapshot(tmp_path: Path) -> None:
    repo = JsonTaskRepository(LocalStorage(tmp_path))
    repo.save([make_task("1"), make_task("2")])
    repo.save([make_task("3")])

    assert [t.id for t in repo.load()] == ["3"]


def test_missing_slot_loads_empty(tmp_path: Path) -> None:
    assert JsonTaskRepository(LocalStorage(tmp_path)).load() == ()


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        '{"id": "1"}',
        '[{"title": "no id"}]',
        '[{"id": "1", "title": "x", "priority": "Urgent"}]',
        '[{"id": "1", "title": "x", "status": "archived"}]',
        '[{"id": "1", "title": "a"}, {"id": "1", "title": "b"}]',
        "[1, 2]",
    ],
)
def test_malformed_snapshot_is_treated_as_no_data(tmp_path: Path, raw: str) -> None:
    storage = LocalStorage(tmp_path)
    storage.set_item("dashboard_tasks", raw)

    assert JsonTaskRepository(storage).load() == ()


def test_non_utf8_snapshot_is_treated_as_no_data(tmp_path: Path) -> None:
    (tmp_path / "dashboard_tasks").write_bytes(b"\xff\xfe[garbage")
    board = BoardController(JsonTaskRepository(LocalStorage(tmp_path)))

    board.mount()

    assert board.tasks == ()


def test_deeply_nested_snapshot_is_treated_as_no_data(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path)
    storage.set_item("dashboard_tasks", "[" * 200_000 + "]" * 200_000)

    assert JsonTaskRepository(storage).load() == ()


def test_records_missing_optional_fields_get_defaults(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path)
    storage.set_item("dashboard_tasks", json.dumps([{"id": 17, "title": "Legacy"}]))

    (task,) = JsonTaskRepository(storage).load()
    assert task == Task(
        id="17",
        title="Legacy",
        description="",
        priority=Priority.LOW,
        category="",
        service_date="",
        status=TaskStatus.PROGRESS,
        image="",
    )


def test_local_storage_slots(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path / "nested")

    assert storage.get_item("jwt_token") is None
    storage.set_item("jwt_token", "abc")
    assert storage.get_item("jwt_token") == "abc"
    if os.name == "posix":
        assert (tmp_path / "nested" / "jwt_token").stat().st_mode & 0o777 == 0o600

    storage.remove_item("jwt_token")
    storage.remove_item("jwt_token")
    assert storage.get_item("jwt_token") is None


@pytest.mark.parametrize("slot", ["", "..", "../escape", "a/b"])
def test_local_storage_rejects_bad_slot_names(tmp_path: Path, slot: str) -> None:
    with pytest.raises(ValueError):
        LocalStorage(tmp_path).get_item(slot)
