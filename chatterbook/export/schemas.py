"""Pydantic schemas for raw ChatGPT export data.

Only the fields needed to rebuild and render a transcript are required.
Everything else is optional and unknown keys are ignored, so older and
newer export versions validate against the same models.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Content parts
# ---------------------------------------------------------------------------


class InlineImage(BaseModel):
    """Structured image descriptor found inside a ``text`` content's parts."""

    content_type: str
    asset_pointer: str | None = None
    size_bytes: int | None = None
    width: int | None = None
    height: int | None = None
    fovea: Any = None
    metadata: dict[str, Any] | None = None


# Literal text wins; a dict is only ever read as an image descriptor.
TextPart = Annotated[str | InlineImage, Field(union_mode="left_to_right")]


class ImageAssetPointer(BaseModel):
    content_type: Literal["image_asset_pointer"]
    asset_pointer: str
    size_bytes: int | None = None
    width: int | None = None
    height: int | None = None
    fovea: Any = None
    metadata: dict[str, Any] | None = None


class Thought(BaseModel):
    summary: str
    content: str
    chunks: list[str] = Field(default_factory=list)
    finished: bool | None = None


class ContentReference(BaseModel):
    matched_text: str = ""
    safe_urls: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Content variants (closed set, discriminated on ``content_type``)
# ---------------------------------------------------------------------------


class TextContent(BaseModel):
    content_type: Literal["text"]
    parts: list[TextPart] = Field(default_factory=list)


class MultimodalContent(BaseModel):
    content_type: Literal["multimodal_text"]
    parts: list[ImageAssetPointer] = Field(default_factory=list)


class ThoughtsContent(BaseModel):
    content_type: Literal["thoughts"]
    thoughts: list[Thought] = Field(default_factory=list)
    source_analysis_msg_id: str | None = None


class CodeContent(BaseModel):
    content_type: Literal["code"]
    language: str | None = None
    text: str
    response_format_name: str | None = None


class ReasoningRecapContent(BaseModel):
    content_type: Literal["reasoning_recap"]
    content: str
    content_references: list[ContentReference] | None = None


Content = Annotated[
    TextContent
    | MultimodalContent
    | ThoughtsContent
    | CodeContent
    | ReasoningRecapContent,
    Field(discriminator="content_type"),
]


# ---------------------------------------------------------------------------
# Messages and graph nodes
# ---------------------------------------------------------------------------


class Author(BaseModel):
    role: str
    name: str | None = None
    metadata: dict[str, Any] | None = None


class Message(BaseModel):
    author: Author
    content: Content
    id: str | None = None
    create_time: float | None = None
    update_time: float | None = None
    status: str | None = None
    end_turn: bool | None = None
    weight: float | None = None
    metadata: dict[str, Any] | None = None
    recipient: str | None = None
    channel: str | None = None


class MessageNode(BaseModel):
    """One entry of a conversation's ``mapping``.

    ``children`` keeps export order, which is branch-creation order:
    an edit or regeneration appends a new child.
    """

    id: str
    message: Message | None = None
    parent: str | None = None
    children: list[str] = Field(default_factory=list)


class ConversationRecord(BaseModel):
    """One element of the top-level ``conversations.json`` array."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(validation_alias=AliasChoices("id", "conversation_id"))
    title: str | None = None
    create_time: float | None = None
    mapping: dict[str, Any] | None = None
