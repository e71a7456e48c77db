"""Unified configuration layer for the DeepSeek adapter.

Goals
-----
* Centralize defaults (model, host, base path, timeout).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by PROVIDERS_CONFIG_FILE
    3. Environment variables (e.g. DEEPSEEK_MODEL, DEEPSEEK_API_KEY)
    4. In-code overrides passed to helper
* Provide a single call site: ``get_provider_config(provider: str)``.

Environment Variable Conventions
--------------------------------
<PROVIDER>_MODEL, <PROVIDER>_API_KEY, <PROVIDER>_HOST, <PROVIDER>_BASE_PATH,
<PROVIDER>_CUSTOM_HEADERS, <PROVIDER>_TIMEOUT, e.g. DEEPSEEK_HOST.

A ``.env`` file (path from DOTENV_FILE, default ``.env``) is read once and only
fills variables that are unset or hold a placeholder value.

External Config File (Optional)
-------------------------------
If PROVIDERS_CONFIG_FILE is set to a path, JSON is tried first, then YAML.
Structure example:

```
deepseek:
  model: deepseek-reasoner
  host: https://api.deepseek.com
  timeout: 120
```

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* get_model(provider: str) -> str | None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    DEEPSEEK_DEFAULT_BASE_PATH,
    DEEPSEEK_DEFAULT_HOST,
    DEEPSEEK_DEFAULT_MODEL,
    DEEPSEEK_DEFAULT_TIMEOUT_SECONDS,
)
from .env import ENV_FIELD_MAP, is_placeholder

# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "deepseek": {
        "model": DEEPSEEK_DEFAULT_MODEL,
        "host": DEEPSEEK_DEFAULT_HOST,
        "base_path": DEEPSEEK_DEFAULT_BASE_PATH,
        "timeout": DEEPSEEK_DEFAULT_TIMEOUT_SECONDS,
    },
}


_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Overrides existing environment variables only if their
    current values appear to be placeholders.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("PROVIDERS_CONFIG_FILE")
    if not path:
        _FILE_CACHE = {}
        return _FILE_CACHE
    p = Path(path)
    if not p.exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    return data


def reset_config_cache() -> None:
    """Forget the cached config file and ``.env`` state (tests, reloads)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is None:
            continue
        if field == "api_key" and is_placeholder(val):
            continue
        out[field] = val
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    # 1. Defaults
    cfg |= DEFAULTS.get(name, {})

    # 2. External config file section
    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    # 3. Env overrides
    cfg |= _env_overrides(name)

    # 4. Explicit overrides arg
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "get_provider_config",
    "get_model",
    "reset_config_cache",
    "DEFAULTS",
]
