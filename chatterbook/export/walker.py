from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from enum import StrEnum
from typing import TYPE_CHECKING

from chatterbook.export.schemas import MessageNode

if TYPE_CHECKING:
    from chatterbook.export.graph import MessageGraph

logger = logging.getLogger(__name__)


class BranchPolicy(StrEnum):
    """Which child continues the thread when a node has several.

    Children are stored in creation order, so ``LAST`` follows the most
    recent edit or regeneration and ``FIRST`` the original branch.
    """

    FIRST = "first"
    LAST = "last"

    def choose(self, children: Sequence[str]) -> str | None:
        if not children:
            return None
        if self is BranchPolicy.FIRST:
            return children[0]
        return children[-1]


DEFAULT_BRANCH_POLICY = BranchPolicy.LAST


def walk_thread(
    graph: MessageGraph,
    start_id: str,
    policy: BranchPolicy = DEFAULT_BRANCH_POLICY,
) -> Iterator[MessageNode]:
    """Yield the nodes carrying a message along one branch, in thread order.

    The walk stops at a node without children, at an identifier missing
    from the graph (dropped or dangling), or at an identifier already
    visited.
    """
    visited: set[str] = set()
    current: str | None = start_id

    while current is not None:
        if current in visited:
            logger.warning("Cycle detected at node %s, stopping walk", current)
            return
        node = graph.get(current)
        if node is None:
            logger.debug("Walk ended at unknown node %s", current)
            return
        visited.add(current)

        if node.message is not None:
            yield node

        current = policy.choose(node.children)
