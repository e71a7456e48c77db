"""
Payload builder for OpenAI-compatible chat completions.

Purpose:
- Translate provider-agnostic DTOs (``Message``, ``ToolSpec``, ``ModelConfig``)
  into the JSON request body of ``POST /v1/chat/completions``.
- Streaming is always requested; the adapter has no non-streaming mode.

Guarantees:
- Pure and deterministic: the same inputs give an equal payload, inputs are
  never mutated, and every call returns freshly built containers.
- Message history order is preserved; the system prompt (when non-empty) is
  always the first message.

Failure semantics:
- Duplicate tool names, or a tool declaration that fails validation, raise
  ``ProviderError(VALIDATION)``. Nothing else in this module raises.
"""

from __future__ import annotations

import copy
import json
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from ..dto.tool_spec import ToolSpec
from ..errors import ErrorCode, ProviderError
from ..models import ContentPart, Message, ModelConfig, ToolCall

ToolInput = Union[ToolSpec, Mapping[str, Any]]


class ImageFormat(str, Enum):
    """Wire shape used for inline images."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


def _image_part(part: ContentPart, image_format: ImageFormat) -> Dict[str, Any]:
    data = part.data or {}
    mime_type = data.get("mime_type", "image/png")
    b64 = data.get("data", "")
    if image_format is ImageFormat.ANTHROPIC:
        return {"type": "image", "source": {"type": "base64", "media_type": mime_type, "data": b64}}
    return {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{b64}"}}


def _render_content(message: Message, image_format: ImageFormat) -> Union[str, List[Dict[str, Any]]]:
    """Render message content; text-only content collapses to a string.

    Reasoning parts are model output and are never sent back.
    """
    if isinstance(message.content, str):
        return message.content
    if not any(p.type == "image" for p in message.content):
        return message.text()
    parts: List[Dict[str, Any]] = []
    for part in message.content:
        if part.type == "text" and part.text:
            parts.append({"type": "text", "text": part.text})
        elif part.type == "image":
            parts.append(_image_part(part, image_format))
    return parts


def _tool_call_to_openai(call: ToolCall) -> Dict[str, Any]:
    if call.error is not None and call.raw_arguments is not None:
        arguments = call.raw_arguments
    else:
        arguments = json.dumps(call.arguments, ensure_ascii=False)
    return {"id": call.id, "type": "function", "function": {"name": call.name, "arguments": arguments}}


def messages_to_openai(messages: Sequence[Message], image_format: ImageFormat = ImageFormat.OPENAI) -> List[Dict[str, Any]]:
    """Convert a message history to OpenAI ``messages`` entries, in order."""
    out: List[Dict[str, Any]] = []
    for message in messages:
        if message.role == "tool":
            out.append({"role": "tool", "tool_call_id": message.tool_call_id, "content": message.text()})
            continue
        entry: Dict[str, Any] = {"role": message.role}
        content = _render_content(message, image_format)
        if message.role == "assistant" and message.tool_calls:
            entry["content"] = content or None
            entry["tool_calls"] = [_tool_call_to_openai(c) for c in message.tool_calls]
        else:
            entry["content"] = content
        out.append(entry)
    return out


def _as_tool_spec(tool: ToolInput) -> ToolSpec:
    if isinstance(tool, ToolSpec):
        return tool
    try:
        return ToolSpec.model_validate(dict(tool))
    except (ValidationError, TypeError, ValueError) as e:
        raise ProviderError(
            code=ErrorCode.VALIDATION,
            message=f"Invalid tool declaration: {e}",
            raw=e,
        ) from e


def tools_to_openai(tools: Optional[Sequence[ToolInput]]) -> List[Dict[str, Any]]:
    """Render tool declarations; duplicate names are rejected."""
    rendered: List[Dict[str, Any]] = []
    seen: set[str] = set()
    for tool in tools or ():
        spec = _as_tool_spec(tool)
        if spec.name in seen:
            raise ProviderError(code=ErrorCode.VALIDATION, message=f"Duplicate tool name: {spec.name}")
        seen.add(spec.name)
        rendered.append(copy.deepcopy(spec.to_openai()))
    return rendered


def create_request(
    model_config: ModelConfig,
    system: str,
    messages: Sequence[Message],
    tools: Optional[Sequence[ToolInput]] = None,
    image_format: ImageFormat = ImageFormat.OPENAI,
) -> Dict[str, Any]:
    """Build the streaming chat-completion request body.

    Parameters:
        model_config: Target model and optional sampling controls.
        system: System prompt; omitted from ``messages`` when empty.
        messages: Conversation history, sent in the given order.
        tools: Tool declarations (``ToolSpec`` or equivalent mappings).
        image_format: Wire shape for inline images.

    Returns:
        A fresh JSON-serializable dict with ``stream`` set to ``True``. The
        ``tools`` key is present only when at least one tool is declared;
        ``temperature`` and ``max_tokens`` only when configured.

    Raises:
        ProviderError: ``VALIDATION`` for duplicate or invalid tools.
    """
    wire_messages: List[Dict[str, Any]] = []
    if system:
        wire_messages.append({"role": "system", "content": system})
    wire_messages.extend(messages_to_openai(messages, image_format))

    payload: Dict[str, Any] = {"model": model_config.model_name, "messages": wire_messages}
    if rendered_tools := tools_to_openai(tools):
        payload["tools"] = rendered_tools
    if model_config.temperature is not None:
        payload["temperature"] = float(model_config.temperature)
    if model_config.max_tokens is not None:
        payload["max_tokens"] = int(model_config.max_tokens)
    payload["stream"] = True
    payload["stream_options"] = {"include_usage": True}
    return payload


__all__ = ["ImageFormat", "ToolInput", "create_request", "messages_to_openai", "tools_to_openai"]
