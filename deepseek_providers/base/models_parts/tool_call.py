"""
Tool call model.

Represents one function call requested by the assistant. Streamed calls are
reassembled from fragments by the collector; the normalizer decodes the
argument text. A call whose name or arguments cannot be used keeps the raw
text and records why in ``error`` so the caller can report it back to the
model instead of failing the whole completion.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ToolCall:
    """A single assistant tool call.

    Attributes:
        id: Vendor-assigned call id, echoed back in the tool result message.
        name: Function name.
        arguments: Decoded JSON object arguments (empty when undecodable).
        raw_arguments: Argument text exactly as received.
        error: Reason the call is unusable, or ``None``.
    """

    id: str
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    raw_arguments: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


__all__ = ["ToolCall"]
