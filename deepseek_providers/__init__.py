"""deepseek_providers package

Streaming chat-completion adapter for DeepSeek and other OpenAI-compatible
Server-Sent-Events APIs.

Public API (re-exported):
    - Version: ``__version__``
    - Adapter: :class:`DeepseekProvider`
    - Models: :class:`Message`, :class:`ContentPart`, :class:`ToolCall`,
      :class:`ModelConfig`, :class:`Usage`, :class:`ProviderUsage`,
      :class:`ProviderInfo`, :class:`ToolSpec`
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`,
      :class:`CancelledError`
    - Cancellation: :class:`CancellationToken`
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.dto import ToolSpec
from .base.errors import ErrorCode, ProviderError
from .base.models import (
    ContentPart,
    Message,
    ModelConfig,
    ProviderInfo,
    ProviderUsage,
    ToolCall,
    Usage,
)
from .deepseek.client import DeepseekProvider

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "DeepseekProvider",
    "ContentPart",
    "Message",
    "ModelConfig",
    "ProviderInfo",
    "ProviderUsage",
    "ToolCall",
    "ToolSpec",
    "Usage",
    "ErrorCode",
    "ProviderError",
    "CancellationToken",
    "CancelledError",
]
