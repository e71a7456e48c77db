"""Token usage extraction.

Maps the OpenAI-style ``usage`` object of a chat-completion response onto the
canonical :class:`~deepseek_providers.base.models.Usage` record:

    prompt_tokens     -> input_tokens
    completion_tokens -> output_tokens
    total_tokens      -> total_tokens

Failure Modes
-------------
* ``usage`` absent or ``null`` -> all-zero ``Usage`` (the vendor only reports
  usage on the terminal frame, and only when asked to).
* ``usage`` present but not an object, or a count that is not a
  non-negative integer -> ``ProviderError(USAGE)``. Completion callers treat
  that as non-fatal and substitute zero usage.
* ``total_tokens`` missing -> derived as input + output.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..errors import ErrorCode, ProviderError
from ..models import Usage


def _coerce_int(value: Any) -> Optional[int]:
    """Return ``value`` as a non-negative ``int`` or ``None`` when unusable.

    Floats are accepted only when integral (some gateways serialize ``12.0``).
    Booleans are rejected even though they subclass ``int``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float) and value.is_integer() and value >= 0:
        return int(value)
    return None


def _count(usage: Mapping[str, Any], key: str, *, provider: str, model: Optional[str]) -> Optional[int]:
    if usage.get(key) is None:
        return None
    value = _coerce_int(usage[key])
    if value is None:
        raise ProviderError(
            code=ErrorCode.USAGE,
            message=f"Invalid {key} in usage: {usage[key]!r}",
            provider=provider,
            model=model,
        )
    return value


def extract_usage(response: Any, *, provider: str = "deepseek", model: Optional[str] = None) -> Usage:
    """Extract vendor-reported token counts from a response mapping.

    Args:
        response: Chat-completion shaped mapping (collector output).
        provider: Provider name attached to raised errors.
        model: Model name attached to raised errors.

    Returns:
        Usage: Counts, zero when the response carries no usage.

    Raises:
        ProviderError: ``USAGE`` when the usage object is malformed.
    """
    usage = response.get("usage") if isinstance(response, Mapping) else None
    if usage is None:
        return Usage()
    if not isinstance(usage, Mapping):
        raise ProviderError(
            code=ErrorCode.USAGE,
            message=f"Usage is not an object: {type(usage).__name__}",
            provider=provider,
            model=model,
        )
    prompt = _count(usage, "prompt_tokens", provider=provider, model=model)
    completion = _count(usage, "completion_tokens", provider=provider, model=model)
    total = _count(usage, "total_tokens", provider=provider, model=model)
    if total is None:
        total = (prompt or 0) + (completion or 0)
    return Usage(input_tokens=prompt or 0, output_tokens=completion or 0, total_tokens=total)


__all__ = ["extract_usage"]
