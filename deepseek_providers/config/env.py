"""deepseek_providers.config.env
=============================

Environment variable mapping and helpers for provider credentials.

Purpose
-------
- Provide a single source of truth for mapping provider identifiers to the
  environment variables they read.
- Offer small utilities to look up provider API keys consistently.

Failure Modes
-------------
- Functions return ``None`` when a provider is unknown or no value is present.
- Helpers never raise on missing providers or unset variables; callers decide
  how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical provider -> API key env var
ENV_MAP: Dict[str, str] = {
    "deepseek": "DEEPSEEK_API_KEY",
}

# Config field -> env var suffix (``<PROVIDER>_<SUFFIX>``)
ENV_FIELD_MAP: Dict[str, str] = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "host": "HOST",
    "base_path": "BASE_PATH",
    "custom_headers": "CUSTOM_HEADERS",
    "timeout": "TIMEOUT",
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and ignores surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the API key environment variable name for a provider."""
    return ENV_MAP.get(provider.lower()) if provider else None


def env_var_names(provider: str) -> Iterable[str]:
    """Yield every ``<PROVIDER>_<SUFFIX>`` variable read for ``provider``."""
    prefix = (provider or "").upper()
    for suffix in ENV_FIELD_MAP.values():
        yield f"{prefix}_{suffix}"


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a provider from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)``; ``(None, None)`` when nothing usable is set.
        Placeholder values are treated as unset.
    """
    name = get_env_var_name(provider)
    if name is None:
        return None, None
    val = os.environ.get(name)
    if val and not is_placeholder(val):
        return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_FIELD_MAP",
    "is_placeholder",
    "get_env_var_name",
    "env_var_names",
    "resolve_provider_key",
]
