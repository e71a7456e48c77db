"""
Normalized provider error codes (taxonomy).

Defines the `ErrorCode` enumeration raised by the DeepSeek adapter. Values are
lowercase snake_case and are considered a stable public contract for logging
and caller-side branching.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories.

    ``REQUEST_FAILED`` covers every transport-level failure (bad URL,
    connection error, timeout, non-2xx status without a vendor error body).
    ``AUTH`` is used whenever the vendor answers with a structured error
    object. ``USAGE`` marks malformed usage or listing payloads and is
    recoverable for completions.
    """

    REQUEST_FAILED = "request_failed"
    AUTH = "auth"
    USAGE = "usage"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    CANCELLED = "cancelled"


__all__ = ["ErrorCode"]
