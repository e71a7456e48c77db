"""
Adapter base package.

Provider-agnostic building blocks shared by concrete adapters:
- Models (DTOs): messages, tool calls, usage, provider metadata
- Interfaces: the completion and model-listing contracts
- Errors and cancellation
- Streaming pipeline pieces: payload builder, transport, collector, normalizer
"""

from .cancellation import CancellationToken, CancelledError
from .errors import ErrorCode, ProviderError
from .interfaces import CompletionProvider, ModelListingProvider
from .models import (
    ConfigKey,
    ContentPart,
    ContentPartType,
    Message,
    ModelConfig,
    ProviderInfo,
    ProviderUsage,
    Role,
    ToolCall,
    Usage,
)

__all__ = [
    # Models
    "ConfigKey",
    "ContentPart",
    "ContentPartType",
    "Message",
    "ModelConfig",
    "ProviderInfo",
    "ProviderUsage",
    "Role",
    "ToolCall",
    "Usage",
    # Interfaces
    "CompletionProvider",
    "ModelListingProvider",
    # Errors / cancellation
    "ErrorCode",
    "ProviderError",
    "CancellationToken",
    "CancelledError",
]
