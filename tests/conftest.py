from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

EXPORT_DIR = FIXTURES_DIR / "export"

CHATGPT_CONVERSATIONS: list[dict] = json.loads(
    (EXPORT_DIR / "conversations.json").read_text(encoding="utf-8")
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16

UPLOADED_IMAGE = "file_00000000abc123-photo.png"


def text_node(
    node_id: str,
    parent: str | None,
    children: list[str],
    text: str,
    role: str = "user",
) -> dict[str, Any]:
    """A mapping entry carrying a plain text message."""
    return {
        "id": node_id,
        "parent": parent,
        "children": children,
        "message": {
            "id": node_id,
            "author": {"role": role},
            "content": {"content_type": "text", "parts": [text]},
        },
    }


def root_node(node_id: str, children: list[str]) -> dict[str, Any]:
    return {"id": node_id, "parent": None, "children": children, "message": None}


def conversation(
    mapping: dict[str, Any],
    title: str | None = "Hello",
    create_time: float | None = 1700000000.0,
    conversation_id: str = "conv-x",
) -> dict[str, Any]:
    record: dict[str, Any] = {"id": conversation_id, "mapping": mapping}
    if title is not None:
        record["title"] = title
    if create_time is not None:
        record["create_time"] = create_time
    return record


def hello_mapping() -> dict[str, Any]:
    """root -> m1 (user "Hi") -> m2 (assistant "Hello back")."""
    return {
        "root": root_node("root", ["m1"]),
        "m1": text_node("m1", "root", ["m2"], "Hi"),
        "m2": text_node("m2", "m1", [], "Hello back", role="assistant"),
    }


def write_export(directory: Path, conversations: list[dict]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "conversations.json"
    path.write_text(json.dumps(conversations), encoding="utf-8")
    return path


@pytest.fixture()
def export_dir(tmp_path: Path) -> Path:
    """Copy of the fixture export with one uploaded image in ``user-alice``."""
    target = tmp_path / "export"
    shutil.copytree(EXPORT_DIR, target)
    uploads = target / "user-alice"
    uploads.mkdir()
    (uploads / UPLOADED_IMAGE).write_bytes(PNG_BYTES)
    (uploads / "file_00000000abc123-photo.jpg").write_bytes(b"not a png")
    return target

