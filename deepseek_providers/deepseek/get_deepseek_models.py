"""
DeepSeek: get models

Behavior
- Fetches the model directory from DeepSeek's OpenAI-compatible endpoint:
    GET {host}/v1/models  (RFC 3986 join onto the configured host)
- Sends the same bearer token and custom headers as completion calls.
- Returns the bare model ids, sorted lexicographically.

Failure semantics
- Transport failure or a non-JSON body -> ``ProviderError(REQUEST_FAILED)``.
- Top-level ``error`` object -> ``ProviderError(AUTH)`` with the vendor message.
- Non-2xx without an error object -> ``REQUEST_FAILED``.
- Missing or non-list ``data`` -> ``ProviderError(USAGE)``.

Entry points:
- fetch_model_ids(...)  used by ``DeepseekProvider.fetch_supported_models``
- run()                 builds a provider from the environment and fetches
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

import httpx

from ..base.errors import ErrorCode, ProviderError, error_from_payload
from ..base.http import build_headers, build_url, get_json
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..config.defaults import DEEPSEEK_MODELS_PATH, DEEPSEEK_PROVIDER

MISSING_DATA_MESSAGE = "Missing data field in JSON response"


def parse_models_response(status: int, payload: Any, *, provider: str = DEEPSEEK_PROVIDER) -> List[str]:
    """Extract sorted model ids from a decoded ``/v1/models`` body.

    Entries that are not objects or have no string ``id`` are skipped.
    """
    auth = error_from_payload(payload, provider=provider, status=status)
    if auth is not None:
        raise auth
    if not 200 <= status < 300:
        raise ProviderError(
            code=ErrorCode.REQUEST_FAILED,
            message=f"HTTP {status} from models endpoint",
            provider=provider,
            status=status,
        )
    data = payload.get("data") if isinstance(payload, Mapping) else None
    if not isinstance(data, list):
        raise ProviderError(code=ErrorCode.USAGE, message=MISSING_DATA_MESSAGE, provider=provider, status=status)
    ids = [item["id"] for item in data if isinstance(item, Mapping) and isinstance(item.get("id"), str)]
    return sorted(ids)


def fetch_model_ids(
    client: httpx.Client,
    host: str,
    api_key: str,
    custom_headers: Optional[Mapping[str, str]] = None,
    *,
    provider: str = DEEPSEEK_PROVIDER,
    logger: Optional[logging.Logger] = None,
) -> List[str]:
    """GET the models endpoint and return the sorted ids."""
    log = logger or get_logger("deepseek_providers.deepseek.models")
    ctx = LogContext(provider=provider)
    url = build_url(host, DEEPSEEK_MODELS_PATH, provider=provider)
    headers = build_headers(api_key, custom_headers, accept="application/json")
    try:
        status, payload = get_json(client, url, headers, provider=provider)
        ids = parse_models_response(status, payload, provider=provider)
    except ProviderError as e:
        normalized_log_event(
            log,
            "models.error",
            ctx,
            phase="models",
            error_code=e.code.value,
            level=logging.WARNING,
            status=e.status,
            error=e.message,
        )
        raise
    normalized_log_event(log, "models.fetch", ctx, phase="models", emitted=len(ids), url=url)
    return ids


def run() -> List[str]:
    """Fetch model ids using configuration from the environment."""
    from .client import DeepseekProvider

    return DeepseekProvider.from_env().fetch_supported_models()


if __name__ == "__main__":
    models = run()
    print(f"[deepseek] loaded {len(models)} models")
