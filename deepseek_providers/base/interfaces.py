"""
Provider-agnostic interfaces (Protocols) for the adapter layer.

``CompletionProvider`` is the caller contract a streaming completion adapter
fulfils; ``ModelListingProvider`` covers the remote model directory.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from .cancellation import CancellationToken
from .models import Message, ModelConfig, ProviderInfo, ProviderUsage


@runtime_checkable
class ModelListingProvider(Protocol):
    """Interface to obtain the model ids a provider currently serves."""

    def fetch_supported_models(self) -> List[str]:
        """Return remote model ids, sorted."""
        ...


@runtime_checkable
class CompletionProvider(ModelListingProvider, Protocol):
    """Minimal interface for streaming chat completion adapters.

    Implementations never leak transport objects upstream: results are
    ``Message`` / ``ProviderUsage`` and failures are ``ProviderError``.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"deepseek"``."""
        ...

    def complete(
        self,
        system: str,
        messages: Sequence[Message],
        tools: Optional[Sequence] = None,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Tuple[Message, ProviderUsage]:
        """Run one completion and return the assistant message with usage."""
        ...

    def get_model_config(self) -> ModelConfig:
        ...

    def supports_embeddings(self) -> bool:
        ...

    def create_embeddings(self, texts: Sequence[str]) -> List[List[float]]:
        ...

    @classmethod
    def metadata(cls) -> ProviderInfo:
        ...


__all__ = ["CompletionProvider", "ModelListingProvider"]
