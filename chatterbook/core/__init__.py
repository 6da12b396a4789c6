from chatterbook.core.exceptions import (
    AssetResolutionError,
    ChatterbookError,
    ConversationSkipped,
    EmptyTranscriptError,
    ExportFormatError,
    PlaceholderTitleError,
    RootNotFoundError,
)
from chatterbook.core.types import ConversionResult, SkippedConversation, Transcript

__all__ = [
    "AssetResolutionError",
    "ChatterbookError",
    "ConversationSkipped",
    "ConversionResult",
    "EmptyTranscriptError",
    "ExportFormatError",
    "PlaceholderTitleError",
    "RootNotFoundError",
    "SkippedConversation",
    "Transcript",
]
