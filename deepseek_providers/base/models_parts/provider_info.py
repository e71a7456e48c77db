"""
Static provider description.

`ProviderInfo` describes a provider to configuration UIs and callers: its
identity, default and known models, documentation link, and the configuration
keys it reads (`ConfigKey`).
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ConfigKey:
    """A configuration key consumed by a provider.

    Attributes:
        name: Environment / config key name (e.g., ``"DEEPSEEK_HOST"``).
        required: Whether the provider needs a value (a default may supply it).
        secret: Whether the value must be treated as a credential.
        default: Default value used when none is configured.
    """

    name: str
    required: bool
    secret: bool
    default: Optional[str] = None


@dataclass(frozen=True)
class ProviderInfo:
    """Descriptive metadata for a provider."""

    id: str
    display_name: str
    description: str
    default_model: str
    known_models: List[str] = field(default_factory=list)
    doc_url: Optional[str] = None
    config_keys: List[ConfigKey] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ConfigKey", "ProviderInfo"]
