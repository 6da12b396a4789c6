"""Message graph construction and root resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from chatterbook.export.schemas import MessageNode
from chatterbook.export.walker import DEFAULT_BRANCH_POLICY, BranchPolicy

logger = logging.getLogger(__name__)


@dataclass
class MessageGraph:
    """Arena of message nodes addressed by their own identifiers.

    ``dropped`` counts mapping entries that did not validate as a
    :class:`MessageNode` and were left out of ``nodes``.
    """

    nodes: dict[str, MessageNode] = field(default_factory=dict)
    dropped: int = 0

    def get(self, node_id: str) -> MessageNode | None:
        return self.nodes.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)


def build_graph(mapping: dict[str, Any] | None) -> MessageGraph:
    """Validate every mapping entry and index the survivors by node id."""
    graph = MessageGraph()
    if not mapping:
        return graph

    for key, raw in mapping.items():
        try:
            node = MessageNode.model_validate(raw)
        except ValidationError as exc:
            graph.dropped += 1
            logger.debug(
                "Dropping malformed node %s (%d validation errors)",
                key,
                exc.error_count(),
            )
            continue
        graph.nodes[node.id] = node

    if graph.dropped:
        logger.warning(
            "Dropped %d of %d nodes that do not match the node shape",
            graph.dropped,
            len(mapping),
        )
    return graph


def find_entry_point(
    graph: MessageGraph,
    policy: BranchPolicy = DEFAULT_BRANCH_POLICY,
) -> str | None:
    """Return the id of the first message below the synthetic root.

    Returns ``None`` when no node is parentless or the root has no
    children.
    """
    roots = [node for node in graph.nodes.values() if node.parent is None]
    if not roots:
        return None
    if len(roots) > 1:
        logger.warning(
            "Found %d parentless nodes, using %s", len(roots), roots[0].id
        )
    return policy.choose(roots[0].children)
