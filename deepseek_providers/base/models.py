"""
Provider-agnostic domain models (DTOs) public surface.

Re-exports the one-class-per-file implementations under
``deepseek_providers.base.models_parts``.
"""

from .models_parts.content_part import ContentPart, ContentPartType
from .models_parts.message import Message, Role
from .models_parts.model_config import ModelConfig
from .models_parts.provider_info import ConfigKey, ProviderInfo
from .models_parts.tool_call import ToolCall
from .models_parts.usage import ProviderUsage, Usage

__all__ = [
    "ContentPart",
    "ContentPartType",
    "Message",
    "Role",
    "ModelConfig",
    "ConfigKey",
    "ProviderInfo",
    "ToolCall",
    "ProviderUsage",
    "Usage",
]
