"""Cooperative cancellation primitives.

``CancellationToken`` lets a caller abandon an in-flight completion. The stream
collector polls the token between byte chunks; once cancelled, the partially
built accumulator is discarded and ``CancelledError`` is raised. Nothing is
committed on cancellation because a result has no effect until returned.
"""
from __future__ import annotations

from threading import Lock
from typing import Optional


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancellation request."""


class CancellationToken:
    """A thread-safe cooperative cancellation flag with an optional reason."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._cancelled = False
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._cancelled

    @property
    def reason(self) -> Optional[str]:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation. Later calls keep the first reason."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._reason = reason

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if the token is cancelled."""
        if self._cancelled:
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken", "CancelledError"]
