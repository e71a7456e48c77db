"""Domain model implementations re-exported by ``deepseek_providers.base.models``."""

from .content_part import ContentPart, ContentPartType
from .message import Message, Role
from .model_config import ModelConfig
from .provider_info import ConfigKey, ProviderInfo
from .tool_call import ToolCall
from .usage import ProviderUsage, Usage

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
