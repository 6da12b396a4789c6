from __future__ import annotations

import logging

from chatterbook.core.exceptions import AssetResolutionError
from chatterbook.export.schemas import (
    CodeContent,
    Content,
    InlineImage,
    Message,
    MultimodalContent,
    ReasoningRecapContent,
    TextContent,
    TextPart,
    ThoughtsContent,
)
from chatterbook.render.assets import AssetResolver

logger = logging.getLogger(__name__)

ROLE_LABELS = {
    "user": "👤 User",
    "assistant": "🤖 Assistant",
}

DEFAULT_CODE_LANGUAGE = "text"


def role_label(role: str) -> str:
    """Display label for an author role. Unknown roles pass through."""
    return ROLE_LABELS.get(role, role)


class ContentRenderer:
    """Turns message content into Markdown for one transcript.

    Images are copied through *resolver* under *base_name*; the names of
    the copies are collected in :attr:`assets`. A pointer referenced more
    than once is copied once.
    """

    def __init__(self, resolver: AssetResolver | None, base_name: str) -> None:
        self._resolver = resolver
        self._base_name = base_name
        self.assets: list[str] = []
        self._copied: dict[str, str] = {}

    def render_message(self, message: Message) -> str:
        label = role_label(message.author.role)
        body = self.render(message.content)
        return f"**{label}:**\n\n{body}\n\n---\n\n"

    def render(self, content: Content) -> str:
        match content:
            case TextContent(parts=parts):
                return "\n".join(self._text_part(part) for part in parts)

            case MultimodalContent(parts=parts):
                return "\n\n".join(self._image(part.asset_pointer) for part in parts)

            case ThoughtsContent(thoughts=thoughts):
                return "\n\n".join(
                    f"**{thought.summary}**\n{thought.content}" for thought in thoughts
                )

            case CodeContent(language=language, text=text):
                return f"```{language or DEFAULT_CODE_LANGUAGE}\n{text}\n```"

            case ReasoningRecapContent(content=text, content_references=references):
                lines = [text]
                for reference in references or []:
                    if reference.safe_urls:
                        lines.append(f"[Reference]({reference.safe_urls[0]})")
                return "\n".join(lines)

            case _:
                raise TypeError(f"Unhandled content variant: {type(content).__name__}")

    def _text_part(self, part: TextPart) -> str:
        if isinstance(part, InlineImage):
            pointer = part.asset_pointer or part.content_type
            logger.warning("Inline image in text content is not rendered: %s", pointer)
            return f"![Unsupported inline image {pointer}]"
        return part

    def _image(self, asset_pointer: str) -> str:
        if asset_pointer in self._copied:
            return f"![]({self._copied[asset_pointer]})"
        if self._resolver is None:
            return f"![Missing image for {asset_pointer}]"
        try:
            name = self._resolver.resolve(asset_pointer, self._base_name)
        except AssetResolutionError:
            return f"![Missing image for {asset_pointer}]"
        self._copied[asset_pointer] = name
        self.assets.append(name)
        return f"![]({name})"
