from __future__ import annotations

import shutil
from pathlib import Path
from typing import BinaryIO

from chatterbook.storage.base import StorageBackend


class DiskStorage(StorageBackend):
    """Local filesystem storage backend."""

    def __init__(self, base_path: str) -> None:
        self._base = Path(base_path)
        self._base.mkdir(parents=True, exist_ok=True)

    def _resolve(self, key: str) -> Path:
        return self._base / key

    # ---- interface ----

    def write(self, key: str, data: bytes) -> None:
        path = self._resolve(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def open_stream(self, key: str) -> BinaryIO:
        path = self._resolve(key)
        return open(path, "rb")  # noqa: SIM115

    def copy_file(self, source: Path, key: str) -> None:
        path = self._resolve(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, path)
