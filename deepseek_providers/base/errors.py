"""Unified provider error taxonomy public surface.

This module re-exports the implementations under
``deepseek_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import (
    classify_exception,
    error_from_payload,
    extract_status,
    vendor_error_message,
    wrap_exception,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "error_from_payload",
    "extract_status",
    "vendor_error_message",
    "wrap_exception",
]
