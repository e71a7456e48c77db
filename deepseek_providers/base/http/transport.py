"""HTTP transport for the streaming completion pipeline.

Purpose:
    Issue exactly one request per call and expose the response body as raw
    byte chunks (POST, streaming) or a decoded JSON value (GET, directory).

External dependencies:
    - ``httpx`` for the underlying synchronous client.

Failure semantics:
    - Invalid URLs, connection errors, timeouts, read errors while the
      body is streaming, and requests sent on a closed client become
      ``ProviderError(REQUEST_FAILED)`` carrying the cause text.
      Nothing is retried at this layer.
    - A non-2xx response whose body is a JSON vendor error object becomes
      ``ProviderError(AUTH)`` with the vendor message; any other non-2xx
      response is ``REQUEST_FAILED``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterator, Mapping, Optional

import httpx

from ..errors import ErrorCode, ProviderError, error_from_payload, wrap_exception

# Cap on the error body excerpt carried in REQUEST_FAILED messages.
_ERROR_BODY_LIMIT = 500
# httpx raises a bare RuntimeError when a request is sent on a closed client.
_TRANSPORT_ERRORS = (httpx.HTTPError, RuntimeError)


def build_url(host: str, path: str, *, provider: str) -> str:
    """Join ``path`` onto ``host`` using RFC 3986 reference resolution.

    ``https://api.deepseek.com`` + ``v1/chat/completions`` gives
    ``https://api.deepseek.com/v1/chat/completions``. A host with a path keeps
    that path only when it ends with ``/``.
    """
    try:
        base = httpx.URL(host)
    except (httpx.InvalidURL, TypeError) as e:
        raise wrap_exception(e, provider=provider, prefix="Invalid base URL") from e
    if not base.scheme or not base.host:
        raise ProviderError(
            code=ErrorCode.REQUEST_FAILED,
            message=f"Invalid base URL: {host!r}",
            provider=provider,
        )
    try:
        return str(base.join(path))
    except (httpx.InvalidURL, TypeError) as e:
        raise wrap_exception(e, provider=provider, prefix="Failed to construct endpoint URL") from e


def build_headers(api_key: str, custom_headers: Optional[Mapping[str, str]] = None, *, accept: str) -> Dict[str, str]:
    """Return bearer auth headers followed by caller-supplied custom headers."""
    headers = {"Authorization": f"Bearer {api_key}", "Accept": accept}
    if custom_headers:
        headers.update(custom_headers)
    return headers


def _decode_json(raw: bytes) -> Any:
    try:
        return json.loads(raw.decode("utf-8", errors="replace"))
    except ValueError:
        return None


def _status_error(response: httpx.Response, body: bytes, *, provider: str, model: Optional[str]) -> ProviderError:
    """Classify a non-2xx response."""
    payload = _decode_json(body)
    auth = error_from_payload(payload, provider=provider, model=model, status=response.status_code)
    if auth is not None:
        return auth
    excerpt = body.decode("utf-8", errors="replace").strip()[:_ERROR_BODY_LIMIT]
    reason = response.reason_phrase or "error"
    return ProviderError(
        code=ErrorCode.REQUEST_FAILED,
        message=f"HTTP {response.status_code} {reason}: {excerpt}" if excerpt else f"HTTP {response.status_code} {reason}",
        provider=provider,
        model=model,
        status=response.status_code,
    )


def stream_post(
    client: httpx.Client,
    url: str,
    payload: Mapping[str, Any],
    headers: Mapping[str, str],
    *,
    provider: str,
    model: Optional[str] = None,
) -> Iterator[bytes]:
    """POST ``payload`` and yield the response body as raw byte chunks.

    The connection is opened lazily on first iteration and closed when the
    generator is exhausted or closed, so a consumer that stops early (for
    example on the ``[DONE]`` sentinel) releases the connection immediately.
    """
    try:
        with client.stream("POST", url, json=dict(payload), headers=dict(headers)) as response:
            if not response.is_success:
                body = response.read()
                raise _status_error(response, body, provider=provider, model=model)
            yield from response.iter_bytes()
    except _TRANSPORT_ERRORS as e:
        raise wrap_exception(e, provider=provider, model=model) from e


def get_json(
    client: httpx.Client,
    url: str,
    headers: Mapping[str, str],
    *,
    provider: str,
) -> tuple[int, Any]:
    """GET ``url`` and return ``(status_code, decoded JSON body)``.

    The status is returned rather than raised so callers can inspect a vendor
    error object before deciding how to classify the failure.
    """
    try:
        response = client.get(url, headers=dict(headers))
    except _TRANSPORT_ERRORS as e:
        raise wrap_exception(e, provider=provider) from e
    try:
        return response.status_code, response.json()
    except ValueError as e:
        raise ProviderError(
            code=ErrorCode.REQUEST_FAILED,
            message=f"Invalid JSON in response (HTTP {response.status_code}): {e}",
            provider=provider,
            status=response.status_code,
            raw=e,
        ) from e


__all__ = ["build_headers", "build_url", "get_json", "stream_post"]
