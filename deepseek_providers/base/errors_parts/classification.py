"""
Error classification helpers.

Maps raised exceptions and vendor error payloads onto :class:`ProviderError`.
Transport exceptions are never retried here; they are classified once and
surfaced to the caller.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from ..cancellation import CancelledError
from .error_code import ErrorCode
from .provider_error import ProviderError

UNKNOWN_VENDOR_ERROR = "unknown error"


def extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    # httpx raises RuntimeError when .response is accessed on a request-only error
    try:
        resp = getattr(exc, "response", None)
    except RuntimeError:
        resp = None
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Cooperative cancellation.
        3. Everything else is a transport failure.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    return ErrorCode.REQUEST_FAILED


def wrap_exception(
    exc: Exception,
    *,
    provider: str,
    model: Optional[str] = None,
    prefix: Optional[str] = None,
) -> ProviderError:
    """Return ``exc`` as a :class:`ProviderError`, classifying when needed."""
    if isinstance(exc, ProviderError):
        return exc
    text = str(exc) or exc.__class__.__name__
    return ProviderError(
        code=classify_exception(exc),
        message=f"{prefix}: {text}" if prefix else text,
        provider=provider,
        model=model,
        status=extract_status(exc),
        raw=exc,
    )


def vendor_error_message(payload: Any) -> Optional[str]:
    """Return the vendor error text when ``payload`` carries an ``error`` key.

    The error value may be an object with a ``message`` field or a bare string.
    Returns ``None`` when the payload has no error.
    """
    if not isinstance(payload, Mapping):
        return None
    err = payload.get("error")
    if err is None:
        return None
    if isinstance(err, Mapping):
        msg = err.get("message")
        return msg if isinstance(msg, str) and msg else UNKNOWN_VENDOR_ERROR
    if isinstance(err, str) and err:
        return err
    return UNKNOWN_VENDOR_ERROR


def error_from_payload(
    payload: Any,
    *,
    provider: str,
    model: Optional[str] = None,
    status: Optional[int] = None,
) -> Optional[ProviderError]:
    """Build an ``AUTH`` error from a vendor error object, if present."""
    msg = vendor_error_message(payload)
    if msg is None:
        return None
    return ProviderError(code=ErrorCode.AUTH, message=msg, provider=provider, model=model, status=status)


__all__ = [
    "classify_exception",
    "error_from_payload",
    "extract_status",
    "vendor_error_message",
    "wrap_exception",
    "UNKNOWN_VENDOR_ERROR",
]
