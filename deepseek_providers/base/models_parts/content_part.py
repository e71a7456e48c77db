"""
Structured content part model for chat messages.

A message may carry its content as a list of parts instead of a plain string:
text segments, inline images (base64 + MIME type), or the reasoning trace that
``deepseek-reasoner`` streams alongside the answer.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal, Optional


ContentPartType = Literal[
    "text",       # Plain text content
    "image",      # Inline image; ``data`` holds ``mime_type`` and base64 ``data``
    "reasoning",  # Model reasoning trace (never sent back to the vendor)
]


@dataclass
class ContentPart:
    """A single piece of structured message content.

    Attributes:
        type: The semantic kind of the part.
        text: Text for ``text`` and ``reasoning`` parts.
        data: Payload for ``image`` parts: ``{"mime_type": ..., "data": <base64>}``.
    """

    type: ContentPartType
    text: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    @classmethod
    def image(cls, data: str, mime_type: str = "image/png") -> "ContentPart":
        """Build an inline image part from base64 ``data``."""
        return cls(type="image", data={"mime_type": mime_type, "data": data})

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the object."""
        return asdict(self)


__all__ = [
    "ContentPart",
    "ContentPartType",
]
