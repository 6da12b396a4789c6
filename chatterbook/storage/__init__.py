from chatterbook.storage.base import StorageBackend
from chatterbook.storage.disk import DiskStorage

__all__ = [
    "StorageBackend",
    "DiskStorage",
]
