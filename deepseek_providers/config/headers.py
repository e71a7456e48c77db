"""Parsing helpers for string-valued connection settings.

``DEEPSEEK_CUSTOM_HEADERS`` is a flat ``k1=v1,k2=v2`` string: pairs are split
on commas, each pair on its first ``=``, and both sides are trimmed. Pairs
without ``=`` or with an empty name are skipped, so ``"X-A=1,bogus"`` yields
``{"X-A": "1"}``. Values may themselves contain ``=``.

``DEEPSEEK_TIMEOUT`` is a number of seconds and must be positive.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional, Union

from ..base.errors import ErrorCode, ProviderError

HeadersInput = Union[str, Mapping[str, Any], None]


def parse_custom_headers(value: HeadersInput) -> Dict[str, str]:
    """Return custom headers from a ``k=v,...`` string or a mapping."""
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return {str(k).strip(): str(v).strip() for k, v in value.items() if str(k).strip()}
    headers: Dict[str, str] = {}
    for pair in value.split(","):
        name, sep, val = pair.partition("=")
        name = name.strip()
        if not sep or not name:
            continue
        headers[name] = val.strip()
    return headers


def parse_timeout(value: Optional[Union[str, int, float]], default: float) -> float:
    """Return a positive timeout in seconds; ``None`` or blank gives ``default``.

    Raises:
        ProviderError: ``CONFIGURATION`` when the value is not a positive number.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return float(default)
    try:
        seconds = float(value)
    except (TypeError, ValueError) as e:
        raise ProviderError(
            code=ErrorCode.CONFIGURATION,
            message=f"Invalid timeout: {value!r}",
            raw=e,
        ) from e
    if not math.isfinite(seconds) or seconds <= 0:
        raise ProviderError(code=ErrorCode.CONFIGURATION, message=f"Timeout must be positive: {value!r}")
    return seconds


__all__ = ["HeadersInput", "parse_custom_headers", "parse_timeout"]
