"""
Message DTO used for both request history and completion results.

Defines the `Message` dataclass and the `Role` literal. Content may be a plain
string or a list of `ContentPart` objects. Assistant turns may carry tool
calls; tool turns reference the call they answer via ``tool_call_id``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Union

from .content_part import ContentPart
from .tool_call import ToolCall


Role = Literal["system", "user", "assistant", "tool"]


@dataclass
class Message:
    """A chat message.

    Attributes:
        role: The role of the message author.
        content: Plain text, or a list of `ContentPart` items.
        tool_calls: Tool calls requested by an assistant turn.
        tool_call_id: For ``tool`` turns, the id of the call being answered.
    """

    role: Role
    content: Union[str, List[ContentPart]] = ""
    tool_calls: List[ToolCall] = field(default_factory=list)
    tool_call_id: Optional[str] = None

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(role="user", content=text)

    @classmethod
    def assistant(cls, text: str, tool_calls: Optional[List[ToolCall]] = None) -> "Message":
        return cls(role="assistant", content=text, tool_calls=list(tool_calls or []))

    @classmethod
    def tool_result(cls, tool_call_id: str, text: str) -> "Message":
        return cls(role="tool", content=text, tool_call_id=tool_call_id)

    def is_structured(self) -> bool:
        """Return True if the message content is a structured list of parts."""
        return isinstance(self.content, list)

    def text(self) -> str:
        """Return the concatenated text parts (reasoning and images excluded)."""
        if isinstance(self.content, str):
            return self.content
        return "".join(p.text or "" for p in self.content if p.type == "text")

    def reasoning(self) -> Optional[str]:
        """Return the reasoning trace, if the message carries one."""
        if isinstance(self.content, str):
            return None
        parts = [p.text or "" for p in self.content if p.type == "reasoning"]
        return "".join(parts) if parts else None

    def is_empty(self) -> bool:
        """True when there is neither text nor a tool call.

        An empty assistant message is a legitimate completion outcome that
        callers check for separately; it is not an error.
        """
        return not self.text() and not self.tool_calls


__all__ = [
    "Message",
    "Role",
]
