"""
Token usage records.

`Usage` counts default to zero: providers frequently omit usage on interim
frames and a missing usage object is an expected, non-fatal outcome.
`ProviderUsage` pairs the counts with the model that produced them.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Usage:
    """Vendor-reported token counts."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0

    def is_zero(self) -> bool:
        return not (self.input_tokens or self.output_tokens or self.total_tokens)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProviderUsage:
    """Usage attributed to the model that served the completion."""

    model: str
    usage: Usage = field(default_factory=Usage)

    def to_dict(self) -> Dict[str, Any]:
        return {"model": self.model, "usage": self.usage.to_dict()}


__all__ = ["Usage", "ProviderUsage"]
