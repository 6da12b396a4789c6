from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from chatterbook.config import RenderSettings, parse_config
from chatterbook.core.exceptions import ExportFormatError
from chatterbook.core.types import ConversionResult
from chatterbook.export.walker import BranchPolicy
from chatterbook.pipeline import ConversationPipe
from chatterbook.render.assets import AssetResolver
from chatterbook.render.transcript import TranscriptAssembler
from chatterbook.storage.base import StorageBackend
from chatterbook.storage.disk import DiskStorage

logger = logging.getLogger(__name__)


class Chatterbook:
    """Main entry point for the chatterbook library.

    Usage::

        book = Chatterbook.from_config({
            "output": {"path": "./transcripts"},
            "render": {"branch_policy": "last"},
        })
        result = book.convert("/path/to/conversations.json")
    """

    def __init__(
        self,
        storage: StorageBackend,
        settings: RenderSettings | None = None,
    ) -> None:
        self._storage = storage
        self._settings = settings or RenderSettings()

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> Chatterbook:
        """Construct a Chatterbook instance from a configuration dict."""
        storage, settings = parse_config(config)
        return cls(storage=storage, settings=settings)

    @property
    def settings(self) -> RenderSettings:
        return self._settings

    def convert(self, input_path: str) -> ConversionResult:
        """Write one Markdown transcript per conversation in the export.

        Args:
            input_path: Filesystem path to ``conversations.json``.

        Returns:
            A ConversionResult summarising written and skipped
            conversations. A failed write is recorded in ``errors`` and
            does not stop the batch.

        Raises:
            ExportFormatError: the export is missing or not a JSON array.
        """
        path = Path(input_path)
        if not path.is_file():
            raise ExportFormatError(f"Input file not found: {path}")

        uploads_dir = (
            Path(self._settings.uploads_dir)
            if self._settings.uploads_dir
            else path.parent
        )
        resolver = AssetResolver(
            uploads_dir,
            self._storage,
            max_scan_entries=self._settings.max_scan_entries,
        )
        assembler = TranscriptAssembler(
            resolver,
            policy=self._settings.branch_policy,
            skip_titles=self._settings.skip_titles,
        )
        pipe = ConversationPipe(assembler)
        source = DiskStorage(str(path.parent))

        result = ConversionResult(input_path=str(path))
        for transcript in pipe.run(path.name, source):
            try:
                self._storage.write(
                    transcript.filename, transcript.text.encode("utf-8")
                )
            except OSError as exc:
                logger.error("Failed to write %s: %s", transcript.filename, exc)
                result.errors.append(f"{transcript.filename}: {exc}")
                continue
            logger.info("Wrote %s", transcript.filename)
            result.written.append(transcript.filename)
            result.assets_copied += len(transcript.assets)

        result.conversations_seen = pipe.extracted_count + pipe.invalid_count
        result.invalid_records = pipe.invalid_count
        result.dropped_nodes = pipe.dropped_nodes
        result.skipped = pipe.skipped
        return result


__all__ = [
    "BranchPolicy",
    "Chatterbook",
    "ConversionResult",
    "RenderSettings",
]
