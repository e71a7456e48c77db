"""OpenAI-compatible wire format: request payload builder and response normalizer."""

from .normalize import finish_reason, get_model, raise_for_error_payload, response_to_message
from .payload import ImageFormat, create_request, messages_to_openai, tools_to_openai

__all__ = [
    "ImageFormat",
    "create_request",
    "messages_to_openai",
    "tools_to_openai",
    "finish_reason",
    "get_model",
    "raise_for_error_payload",
    "response_to_message",
]
