"""Custom exceptions for export conversion."""


class ChatterbookError(Exception):
    """Base class for all chatterbook errors."""

    pass


class ExportFormatError(ChatterbookError):
    """Raised when the export cannot be read as a JSON array of conversations."""

    def __init__(self, message: str | None = None):
        self.message = (
            f"Unreadable export: {message}" if message else "Unreadable export"
        )
        super().__init__(self.message)


class ConversationSkipped(ChatterbookError):
    """A single conversation produced no transcript. The batch continues."""

    reason: str = "skipped"

    def __init__(
        self,
        title: str,
        message: str | None = None,
        *,
        dropped_nodes: int = 0,
    ):
        self.title = title
        self.dropped_nodes = dropped_nodes
        self.message = message or f"{self.reason}: {title!r}"
        super().__init__(self.message)


class PlaceholderTitleError(ConversationSkipped):
    reason = "placeholder title"


class RootNotFoundError(ConversationSkipped):
    """Raised when the graph has no parentless node, or it has no children."""

    reason = "no root message"


class EmptyTranscriptError(ConversationSkipped):
    """Raised when the walk rendered zero messages."""

    reason = "no content"


class AssetResolutionError(ChatterbookError):
    """Raised when an asset pointer cannot be turned into a local copy."""

    def __init__(self, asset_pointer: str, message: str | None = None):
        self.asset_pointer = asset_pointer
        self.message = message or f"Cannot resolve asset {asset_pointer}"
        super().__init__(self.message)
