"""
Structured provider error exception type.

Wraps transport, vendor, and caller failures with a normalized `ErrorCode` for
consistent handling and structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message. For ``AUTH`` errors this is the
            vendor message verbatim.
        provider: Provider key where the error originated (e.g., ``"deepseek"``).
        model: Optional model name associated with the failure.
        status: HTTP status code when the failure came from a response.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str = "deepseek"
    model: Optional[str] = None
    status: Optional[int] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"

    @property
    def fatal(self) -> bool:
        """Whether the failure aborts a completion (usage failures do not)."""
        return self.code is not ErrorCode.USAGE


__all__ = ["ProviderError"]
