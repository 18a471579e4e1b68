# src/kanban_dashboard/tasks/images.py

from __future__ import annotations

import base64
import logging
import mimetypes
from pathlib import Path

logger = logging.getLogger(__name__)


def read_image_data_url(path: str | Path) -> str:
    """
    Read a local image file and return it as an inline `data:` URL.

    The task owns the encoded bytes; nothing references the original file afterwards.
    Raises FileNotFoundError for missing files and ValueError for non-images.
    """
    p = Path(path).expanduser()
    if not p.is_file():
        raise FileNotFoundError(f"Image file not found: {p}")

    mime, _ = mimetypes.guess_type(p.name)
    if not mime or not mime.startswith("image/"):
        raise ValueError(f"Not an image file: {p.name}")

    data = p.read_bytes()
    encoded = base64.b64encode(data).decode("ascii")
    logger.debug("Embedded image %s (%s, %d bytes)", p.name, mime, len(data))
    return f"data:{mime};base64,{encoded}"


def describe_image(data_url: str) -> str:
    """Short human label for an embedded image, e.g. 'image/png, 12.3 KB'."""
    if not data_url:
        return ""
    header, _, body = data_url.partition(",")
    mime = header.removeprefix("data:").split(";", 1)[0] or "image"
    size = len(body) * 3 // 4
    if size >= 1024:
        return f"{mime}, {size / 1024:.1f} KB"
    return f"{mime}, {size} B"
