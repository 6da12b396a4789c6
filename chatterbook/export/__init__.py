from chatterbook.export.graph import MessageGraph, build_graph, find_entry_point
from chatterbook.export.schemas import ConversationRecord, Message, MessageNode
from chatterbook.export.walker import BranchPolicy, walk_thread

__all__ = [
    "BranchPolicy",
    "ConversationRecord",
    "Message",
    "MessageGraph",
    "MessageNode",
    "build_graph",
    "find_entry_point",
    "walk_thread",
]
