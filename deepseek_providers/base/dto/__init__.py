"""Pydantic DTOs: streamed wire frames and tool declarations."""

from .stream_frame import ChoiceDelta, FunctionDelta, StreamChoice, StreamFrame, ToolCallDelta
from .tool_spec import ToolSpec

__all__ = [
    "ChoiceDelta",
    "FunctionDelta",
    "StreamChoice",
    "StreamFrame",
    "ToolCallDelta",
    "ToolSpec",
]
