"""
Response normalizer for OpenAI-compatible chat completions.

Turns the chat-completion shaped mapping produced by the stream collector (or
returned directly by the vendor) into provider-agnostic results.

Failure semantics:
- A top-level ``error`` object is a vendor-reported failure and raises
  ``ProviderError(AUTH)`` with the vendor message.
- Unusable tool calls do not raise; the offending ``ToolCall`` carries an
  ``error`` string so the caller can report it back to the model.
- A response without content and without tool calls yields an empty
  assistant message.
"""

from __future__ import annotations

import json
import re
from typing import Any, List, Mapping, Optional

from ..errors import error_from_payload
from ..models import ContentPart, Message, ToolCall

TOOL_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


def raise_for_error_payload(response: Any, *, provider: str = "deepseek", model: Optional[str] = None) -> None:
    """Raise ``AUTH`` when ``response`` carries a vendor error object."""
    err = error_from_payload(response, provider=provider, model=model)
    if err is not None:
        raise err


def _primary_message(response: Any) -> Mapping[str, Any]:
    if not isinstance(response, Mapping):
        return {}
    choices = response.get("choices")
    if not isinstance(choices, list) or not choices:
        return {}
    first = choices[0]
    if not isinstance(first, Mapping):
        return {}
    message = first.get("message")
    return message if isinstance(message, Mapping) else {}


def _decode_tool_call(raw: Mapping[str, Any], position: int) -> ToolCall:
    function = raw.get("function") if isinstance(raw.get("function"), Mapping) else {}
    call_id = raw.get("id") if isinstance(raw.get("id"), str) and raw.get("id") else f"call_{position}"
    name = function.get("name") if isinstance(function.get("name"), str) else ""
    arguments_text = function.get("arguments")
    if not isinstance(arguments_text, str):
        arguments_text = "" if arguments_text is None else json.dumps(arguments_text)

    call = ToolCall(id=call_id, name=name, raw_arguments=arguments_text)
    if not TOOL_NAME_PATTERN.fullmatch(name):
        call.error = f"The provided function name '{name}' had invalid characters, it must match this regex [a-zA-Z0-9_-]+"
        return call
    if not arguments_text.strip():
        return call
    try:
        decoded = json.loads(arguments_text)
    except ValueError as e:
        call.error = f"Could not interpret tool use parameters for id {call_id}: {e}"
        return call
    if not isinstance(decoded, dict):
        call.error = f"Tool use parameters for id {call_id} must be a JSON object, got {type(decoded).__name__}"
        return call
    call.arguments = decoded
    return call


def response_to_message(response: Any) -> Message:
    """Build the assistant :class:`Message` from a chat-completion mapping.

    Text becomes the message content. When the response carries a reasoning
    trace, content is structured as ``[reasoning, text]`` parts. Tool calls
    keep their order.
    """
    message = _primary_message(response)
    text = message.get("content") if isinstance(message.get("content"), str) else ""
    reasoning = message.get("reasoning_content")

    tool_calls: List[ToolCall] = []
    raw_calls = message.get("tool_calls")
    if isinstance(raw_calls, list):
        for position, raw in enumerate(raw_calls):
            if isinstance(raw, Mapping):
                tool_calls.append(_decode_tool_call(raw, position))

    if isinstance(reasoning, str) and reasoning:
        parts = [ContentPart(type="reasoning", text=reasoning)]
        if text:
            parts.append(ContentPart(type="text", text=text))
        return Message(role="assistant", content=parts, tool_calls=tool_calls)
    return Message(role="assistant", content=text, tool_calls=tool_calls)


def get_model(response: Any, fallback: str) -> str:
    """Return the model reported by the vendor, else ``fallback``."""
    if isinstance(response, Mapping):
        model = response.get("model")
        if isinstance(model, str) and model:
            return model
    return fallback


def finish_reason(response: Any) -> Optional[str]:
    """Return the finish reason of the first choice, if reported."""
    if not isinstance(response, Mapping):
        return None
    choices = response.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], Mapping):
        reason = choices[0].get("finish_reason")
        return reason if isinstance(reason, str) else None
    return None


__all__ = ["TOOL_NAME_PATTERN", "finish_reason", "get_model", "raise_for_error_payload", "response_to_message"]
