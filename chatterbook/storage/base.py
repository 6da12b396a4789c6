from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO


class StorageBackend(ABC):
    """Abstract base class for storage backends."""

    @abstractmethod
    def write(self, key: str, data: bytes) -> None:
        """Write data to the given key."""
        ...

    @abstractmethod
    def open_stream(self, key: str) -> BinaryIO:
        """Open a binary stream for the given key (for large exports)."""
        ...

    @abstractmethod
    def copy_file(self, source: Path, key: str) -> None:
        """Copy an external file into storage under *key*.

        The source is never moved or deleted.
        """
        ...
