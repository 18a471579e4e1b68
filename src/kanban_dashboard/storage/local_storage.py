# src/kanban_dashboard/storage/local_storage.py

from __future__ import annotations

import contextlib
import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_SLOT_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class LocalStorage:
    """
    Named-slot key/value storage on the local filesystem.

    One file per slot under root_dir. Values are text. A write replaces the
    previous value wholesale (temp file + os.replace), so readers never see a
    half-written slot.
    """

    def __init__(self, root_dir: str | Path) -> None:
        self._root = Path(root_dir)
        self._root.mkdir(parents=True, exist_ok=True)
        logger.debug("LocalStorage ready root=%s", self._root)

    @property
    def root(self) -> Path:
        return self._root

    def _slot_path(self, slot: str) -> Path:
        if not slot or not _SLOT_RE.match(slot) or slot in {".", ".."}:
            raise ValueError(f"Invalid storage slot name: {slot!r}")
        return self._root / slot

    def get_item(self, slot: str) -> str | None:
        path = self._slot_path(slot)
        try:
            return path.read_text("utf-8")
        except FileNotFoundError:
            return None

    def set_item(self, slot: str, value: str) -> None:
        path = self._slot_path(slot)
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(value, "utf-8")
        os.replace(tmp, path)
        with contextlib.suppress(OSError):
            # Slots may hold a session token, keep them private on disk.
            os.chmod(path, 0o600)
        logger.debug("Slot written slot=%s bytes=%d", slot, len(value))

    def remove_item(self, slot: str) -> None:
        path = self._slot_path(slot)
        with contextlib.suppress(FileNotFoundError):
            path.unlink()
            logger.debug("Slot removed slot=%s", slot)
