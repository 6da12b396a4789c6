from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Transcript:
    """One rendered conversation, ready to be persisted.

    ``base_name`` is shared by the document and every asset copied
    for it, so ``assets`` always start with ``base_name``.
    """

    conversation_id: str
    title: str
    base_name: str
    text: str
    message_count: int
    assets: list[str] = field(default_factory=list)
    dropped_nodes: int = 0

    @property
    def filename(self) -> str:
        return f"{self.base_name}.md"


@dataclass
class SkippedConversation:
    conversation_id: str
    title: str
    reason: str


@dataclass
class ConversionResult:
    """Result returned from :meth:`Chatterbook.convert`."""

    input_path: str
    conversations_seen: int = 0
    written: list[str] = field(default_factory=list)
    skipped: list[SkippedConversation] = field(default_factory=list)
    invalid_records: int = 0
    assets_copied: int = 0
    dropped_nodes: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def written_count(self) -> int:
        return len(self.written)

    @property
    def failed_count(self) -> int:
        return len(self.errors)
