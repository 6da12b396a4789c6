from __future__ import annotations

import logging
from collections.abc import Iterable

from chatterbook.core.exceptions import (
    EmptyTranscriptError,
    PlaceholderTitleError,
    RootNotFoundError,
)
from chatterbook.core.naming import created_label, document_base_name
from chatterbook.core.types import Transcript
from chatterbook.export.graph import build_graph, find_entry_point
from chatterbook.export.schemas import ConversationRecord
from chatterbook.export.walker import DEFAULT_BRANCH_POLICY, BranchPolicy, walk_thread
from chatterbook.render.assets import AssetResolver
from chatterbook.render.content import ContentRenderer

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "untitled"
PLACEHOLDER_TITLES = frozenset({"New chat"})


class TranscriptAssembler:
    """Builds the Markdown transcript of one conversation.

    All working state (node table, walk, rendered text) lives inside a
    single :meth:`assemble` call, so one assembler can serve a whole
    batch.
    """

    def __init__(
        self,
        resolver: AssetResolver | None = None,
        *,
        policy: BranchPolicy = DEFAULT_BRANCH_POLICY,
        skip_titles: Iterable[str] = PLACEHOLDER_TITLES,
    ) -> None:
        self._resolver = resolver
        self._policy = policy
        self._skip_titles = frozenset(skip_titles)

    def assemble(self, record: ConversationRecord) -> Transcript:
        """Render *record* or raise a :class:`ConversationSkipped` subclass."""
        title = record.title if record.title is not None else DEFAULT_TITLE
        if title in self._skip_titles:
            raise PlaceholderTitleError(title)

        created = created_label(record.create_time)
        base_name = document_base_name(title, created)

        graph = build_graph(record.mapping)
        entry_id = find_entry_point(graph, self._policy)
        if entry_id is None:
            raise RootNotFoundError(
                title,
                f"No root message found in {title!r} "
                f"({len(graph)} nodes, {graph.dropped} dropped)",
                dropped_nodes=graph.dropped,
            )

        renderer = ContentRenderer(self._resolver, base_name)
        sections = [f"# {title}\n\n"]
        if created is not None:
            sections.append(f"_Created: {created}_\n\n")

        message_count = 0
        for node in walk_thread(graph, entry_id, self._policy):
            assert node.message is not None
            sections.append(renderer.render_message(node.message))
            message_count += 1

        if message_count == 0:
            raise EmptyTranscriptError(
                title,
                f"Failed to detect content for {title!r} ({base_name}.md)",
                dropped_nodes=graph.dropped,
            )

        logger.debug("Rendered %d messages for %s", message_count, record.id)
        return Transcript(
            conversation_id=record.id,
            title=title,
            base_name=base_name,
            text="".join(sections),
            message_count=message_count,
            assets=renderer.assets,
            dropped_nodes=graph.dropped,
        )
