from chatterbook.render.assets import AssetResolver
from chatterbook.render.content import ContentRenderer, role_label
from chatterbook.render.transcript import TranscriptAssembler

__all__ = [
    "AssetResolver",
    "ContentRenderer",
    "TranscriptAssembler",
    "role_label",
]
