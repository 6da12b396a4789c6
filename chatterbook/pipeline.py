from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator

import ijson
from pydantic import ValidationError

from chatterbook.core.exceptions import ConversationSkipped, ExportFormatError
from chatterbook.core.types import SkippedConversation, Transcript
from chatterbook.export.schemas import ConversationRecord
from chatterbook.render.transcript import TranscriptAssembler
from chatterbook.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class ConversationPipe:
    """Extract → transform loop over one ``conversations.json`` export.

    :meth:`extract` streams the top-level array with ``ijson`` so large
    exports are never held in memory at once, and :meth:`transform`
    renders one record into a :class:`Transcript`. Persisting the
    transcripts is left to the caller.

    After :meth:`run` is fully consumed, the counters and
    :attr:`skipped` reflect the totals.
    """

    def __init__(self, assembler: TranscriptAssembler) -> None:
        self._assembler = assembler
        self.extracted_count: int = 0
        self.invalid_count: int = 0
        self.transformed_count: int = 0
        self.dropped_nodes: int = 0
        self.skipped: list[SkippedConversation] = []

    def extract(
        self, source_key: str, storage: StorageBackend
    ) -> Iterator[ConversationRecord]:
        """Yield validated conversation records.

        Records that do not validate are counted in
        :attr:`invalid_count` and skipped.

        Raises:
            ExportFormatError: the export is not a JSON array or is not
                valid JSON.
        """
        with storage.open_stream(source_key) as stream:
            try:
                events = ijson.parse(stream, use_float=True)
                first = next(events, None)
                if first is None or first[1] != "start_array":
                    raise ExportFormatError(
                        f"{source_key} is not a JSON array of conversations"
                    )
                for raw in ijson.items(itertools.chain([first], events), "item"):
                    try:
                        record = ConversationRecord.model_validate(raw)
                    except ValidationError as exc:
                        self.invalid_count += 1
                        logger.warning(
                            "Skipping conversation record that does not validate "
                            "(%d errors)",
                            exc.error_count(),
                        )
                        continue
                    yield record
            except ijson.JSONError as exc:
                raise ExportFormatError(f"{source_key}: {exc}") from exc

    def transform(self, record: ConversationRecord) -> Transcript:
        return self._assembler.assemble(record)

    def run(self, source_key: str, storage: StorageBackend) -> Iterator[Transcript]:
        """Run the extract → transform loop, yielding one transcript at a time.

        Skipped conversations are logged and recorded; they never stop
        the batch.
        """
        self.extracted_count = 0
        self.invalid_count = 0
        self.transformed_count = 0
        self.dropped_nodes = 0
        self.skipped = []

        for record in self.extract(source_key, storage):
            self.extracted_count += 1
            try:
                transcript = self.transform(record)
            except ConversationSkipped as exc:
                logger.warning("Skipping %s: %s", record.id, exc.message)
                self.dropped_nodes += exc.dropped_nodes
                self.skipped.append(
                    SkippedConversation(
                        conversation_id=record.id,
                        title=exc.title,
                        reason=exc.reason,
                    )
                )
                continue
            self.transformed_count += 1
            self.dropped_nodes += transcript.dropped_nodes
            yield transcript
