"""
Model configuration for a provider instance.

Holds the target model identity and the optional sampling controls the payload
builder forwards to the vendor.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ModelConfig:
    """Target model and generation parameters.

    Attributes:
        model_name: Vendor model identifier (e.g., ``"deepseek-chat"``).
        temperature: Sampling temperature; omitted from the request when ``None``.
        max_tokens: Completion token cap; omitted from the request when ``None``.
        context_limit: Context window size, informative only.
    """

    model_name: str
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    context_limit: Optional[int] = None


__all__ = ["ModelConfig"]
