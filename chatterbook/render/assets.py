"""Resolve ``sediment://`` asset pointers to image files shipped with an export."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from chatterbook.core.exceptions import AssetResolutionError
from chatterbook.storage.base import StorageBackend

logger = logging.getLogger(__name__)

ASSET_POINTER_PREFIX = "sediment://"
UPLOAD_DIR_PREFIX = "user-"
IMAGE_SUFFIX = ".png"
DEFAULT_MAX_SCAN_ENTRIES = 10_000


class AssetResolver:
    """Finds uploaded images and copies them next to the transcript.

    Uploads live in ``user-*`` folders directly below *uploads_dir*.
    The scan is read-only and visits entries in name order so repeated
    runs pick the same file. At most *max_scan_entries* directory
    entries are examined per lookup.
    """

    def __init__(
        self,
        uploads_dir: Path,
        storage: StorageBackend,
        *,
        max_scan_entries: int = DEFAULT_MAX_SCAN_ENTRIES,
    ) -> None:
        self._uploads_dir = uploads_dir
        self._storage = storage
        self._max_scan_entries = max_scan_entries

    @staticmethod
    def file_id(asset_pointer: str) -> str | None:
        """Strip the pointer prefix. ``None`` if it is not a sediment pointer."""
        if not asset_pointer.startswith(ASSET_POINTER_PREFIX):
            return None
        return asset_pointer.removeprefix(ASSET_POINTER_PREFIX) or None

    def _iter_entries(self) -> Iterator[Path]:
        """Yield upload folders and the files inside them, in name order."""
        try:
            folders = sorted(self._uploads_dir.iterdir())
        except OSError as exc:
            logger.debug("Cannot list uploads in %s: %s", self._uploads_dir, exc)
            return

        for folder in folders:
            yield folder
            if not folder.name.startswith(UPLOAD_DIR_PREFIX) or not folder.is_dir():
                continue
            try:
                yield from sorted(folder.iterdir())
            except OSError as exc:
                logger.debug("Cannot list %s: %s", folder, exc)

    def find_source(self, file_id: str) -> Path | None:
        for scanned, entry in enumerate(self._iter_entries(), start=1):
            if scanned > self._max_scan_entries:
                logger.warning(
                    "Stopped scanning %s after %d entries looking for %s",
                    self._uploads_dir,
                    self._max_scan_entries,
                    file_id,
                )
                return None
            if entry.parent == self._uploads_dir:
                continue
            if entry.name.startswith(file_id) and entry.name.endswith(IMAGE_SUFFIX):
                return entry
        return None

    def resolve(self, asset_pointer: str, base_name: str) -> str:
        """Copy the image behind *asset_pointer* and return the copy's name.

        The copy is named ``<base_name>_<source stem><suffix>``.

        Raises:
            AssetResolutionError: unknown pointer format, no matching
                upload, or the copy failed.
        """
        file_id = self.file_id(asset_pointer)
        if file_id is None:
            raise AssetResolutionError(
                asset_pointer, f"Not a {ASSET_POINTER_PREFIX} pointer: {asset_pointer}"
            )

        source = self.find_source(file_id)
        if source is None:
            logger.info("No upload found for %s", asset_pointer)
            raise AssetResolutionError(asset_pointer)

        name = f"{base_name}_{source.stem}{source.suffix}"
        try:
            self._storage.copy_file(source, name)
        except OSError as exc:
            logger.error("Failed to copy %s to %s: %s", source, name, exc)
            raise AssetResolutionError(
                asset_pointer, f"Failed to copy {source}: {exc}"
            ) from exc

        logger.info("Copied %s to %s", source, name)
        return name
