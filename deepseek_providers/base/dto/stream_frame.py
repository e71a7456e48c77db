"""
Pydantic DTOs for one Server-Sent-Events data frame.

Purpose
-------
Each ``data:`` line of an OpenAI-compatible chat stream carries a partial
completion object. These models describe the keys the collector folds; every
field is optional and unknown keys are ignored so vendor additions never
invalidate a frame.

``usage`` and ``error`` are kept as raw JSON values on purpose: a malformed
usage object must not discard the content carried by the same frame. They are
validated later by the normalizer.

Failure semantics: ``StreamFrame.model_validate_json`` raises
``pydantic.ValidationError`` for invalid JSON or mismatched shapes. The
collector treats that as a dropped frame.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _FrameModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class FunctionDelta(_FrameModel):
    """Partial function descriptor of a streamed tool call."""

    name: Optional[str] = None
    arguments: Optional[str] = None


class ToolCallDelta(_FrameModel):
    """One tool-call fragment; fragments sharing ``index`` belong together."""

    index: int = 0
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[FunctionDelta] = None

    @field_validator("index", mode="before")
    @classmethod
    def _null_index(cls, value: Any) -> Any:
        return 0 if value is None else value


class ChoiceDelta(_FrameModel):
    """Incremental message delta for a choice."""

    role: Optional[str] = None
    content: Optional[str] = None
    reasoning_content: Optional[str] = None
    tool_calls: Optional[List[ToolCallDelta]] = None


class StreamChoice(_FrameModel):
    """A choice entry inside a frame."""

    index: int = 0
    delta: Optional[ChoiceDelta] = None
    finish_reason: Optional[str] = None

    @field_validator("index", mode="before")
    @classmethod
    def _null_index(cls, value: Any) -> Any:
        return 0 if value is None else value


class StreamFrame(_FrameModel):
    """A parsed SSE data frame.

    Attributes:
        id: Vendor response id (repeated on every frame).
        model: Model that served the request.
        choices: Zero or more choice deltas; only index ``0`` is folded.
        usage: Raw usage object, usually present on the terminal frame only.
        error: Raw vendor error object, if the vendor reported one mid-stream.
    """

    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[StreamChoice] = Field(default_factory=list)
    usage: Optional[Any] = None
    error: Optional[Any] = None

    @field_validator("choices", mode="before")
    @classmethod
    def _null_choices(cls, value: Any) -> Any:
        # Some gateways send ``"choices": null`` on the usage-only final frame.
        return [] if value is None else value

    def primary_choice(self) -> Optional[StreamChoice]:
        """Return the choice with index ``0`` (or ``None``)."""
        return next((c for c in self.choices if c.index == 0), None)


__all__ = [
    "FunctionDelta",
    "ToolCallDelta",
    "ChoiceDelta",
    "StreamChoice",
    "StreamFrame",
]
