"""DeepseekProvider adapter for the OpenAI-compatible streaming Chat Completions API.

Pipeline per ``complete`` call, run synchronously and exactly once:

    create_request -> stream_post -> collect_stream -> normalize

The HTTP client is pooled and shared; the payload and the stream accumulator
are built per call. Transport and vendor failures raise ``ProviderError``;
a malformed usage object is logged at DEBUG and replaced by zero usage.
"""

from __future__ import annotations

import logging
import time
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

import httpx

from ..base.cancellation import CancellationToken
from ..base.errors import ErrorCode, ProviderError, classify_exception
from ..base.http import build_headers, build_url, get_httpx_client, stream_post
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ConfigKey, Message, ModelConfig, ProviderInfo, ProviderUsage, Usage
from ..base.openai_format import (
    ImageFormat,
    create_request,
    finish_reason,
    get_model,
    raise_for_error_payload,
    response_to_message,
)
from ..base.openai_format.payload import ToolInput
from ..base.streaming import collect_stream
from ..base.tokens import extract_usage
from ..config import get_provider_config
from ..config.defaults import (
    DEEPSEEK_DEFAULT_BASE_PATH,
    DEEPSEEK_DEFAULT_HOST,
    DEEPSEEK_DEFAULT_MODEL,
    DEEPSEEK_DEFAULT_TIMEOUT_SECONDS,
    DEEPSEEK_DESCRIPTION,
    DEEPSEEK_DISPLAY_NAME,
    DEEPSEEK_DOC_URL,
    DEEPSEEK_KNOWN_MODELS,
    DEEPSEEK_PROVIDER,
)
from ..config.headers import parse_custom_headers, parse_timeout
from .get_deepseek_models import fetch_model_ids

EMBEDDINGS_UNSUPPORTED = "DeepSeek does not support embeddings"


class DeepseekProvider:
    """DeepSeek completion adapter.

    Static configuration (key, host, base path, custom headers, timeout) is
    fixed at construction. Instances are safe to share across threads: no
    per-call state is stored on the instance.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: Optional[str] = None,
        host: Optional[str] = None,
        base_path: Optional[str] = None,
        custom_headers: Union[str, Mapping[str, Any], None] = None,
        timeout: Union[str, int, float, None] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            api_key: Bearer token. Required.
            model: Model name; defaults to ``deepseek-chat``.
            host: API host; defaults to ``https://api.deepseek.com``.
            base_path: Completion path joined onto ``host``.
            custom_headers: ``"k1=v1,k2=v2"`` string or a mapping.
            timeout: Whole-request deadline in seconds (default 600).
            temperature: Optional sampling temperature.
            max_tokens: Optional completion token cap.
            client: Pre-built ``httpx.Client``; a pooled one is used otherwise.

        Raises:
            ProviderError: ``CONFIGURATION`` for a missing key or a bad timeout.
        """
        if not api_key:
            raise ProviderError(
                code=ErrorCode.CONFIGURATION,
                message="DEEPSEEK_API_KEY is not set",
                provider=DEEPSEEK_PROVIDER,
                model=model,
            )
        self._api_key = api_key
        self._model_config = ModelConfig(
            model_name=model or DEEPSEEK_DEFAULT_MODEL,
            temperature=float(temperature) if temperature is not None else None,
            max_tokens=int(max_tokens) if max_tokens is not None else None,
        )
        self._host = host or DEEPSEEK_DEFAULT_HOST
        self._base_path = base_path or DEEPSEEK_DEFAULT_BASE_PATH
        self._custom_headers = parse_custom_headers(custom_headers)
        self._timeout = parse_timeout(timeout, DEEPSEEK_DEFAULT_TIMEOUT_SECONDS)
        self._client = client
        self._logger = get_logger("deepseek_providers.deepseek")

    @classmethod
    def from_env(cls, model: Optional[str] = None, **overrides: Any) -> "DeepseekProvider":
        """Build an adapter from layered configuration (defaults, file, env, overrides)."""
        cfg = get_provider_config(DEEPSEEK_PROVIDER, {"model": model, **overrides})
        return cls(
            cfg.get("api_key"),
            model=cfg.get("model"),
            host=cfg.get("host"),
            base_path=cfg.get("base_path"),
            custom_headers=cfg.get("custom_headers"),
            timeout=cfg.get("timeout"),
            temperature=cfg.get("temperature"),
            max_tokens=cfg.get("max_tokens"),
            client=cfg.get("client"),
        )

    # ----- Capability & basic info -----
    @property
    def provider_name(self) -> str:
        return DEEPSEEK_PROVIDER

    @classmethod
    def metadata(cls) -> ProviderInfo:
        """Describe the provider and the configuration keys it reads."""
        return ProviderInfo(
            id=DEEPSEEK_PROVIDER,
            display_name=DEEPSEEK_DISPLAY_NAME,
            description=DEEPSEEK_DESCRIPTION,
            default_model=DEEPSEEK_DEFAULT_MODEL,
            known_models=list(DEEPSEEK_KNOWN_MODELS),
            doc_url=DEEPSEEK_DOC_URL,
            config_keys=[
                ConfigKey("DEEPSEEK_API_KEY", required=True, secret=True),
                ConfigKey("DEEPSEEK_HOST", required=True, secret=False, default=DEEPSEEK_DEFAULT_HOST),
                ConfigKey("DEEPSEEK_BASE_PATH", required=True, secret=False, default=DEEPSEEK_DEFAULT_BASE_PATH),
                ConfigKey("DEEPSEEK_CUSTOM_HEADERS", required=False, secret=True),
                ConfigKey("DEEPSEEK_TIMEOUT", required=False, secret=False, default=str(DEEPSEEK_DEFAULT_TIMEOUT_SECONDS)),
            ],
        )

    def default_model(self) -> str:
        """Return the model name configured for this adapter."""
        return self._model_config.model_name

    def get_model_config(self) -> ModelConfig:
        return self._model_config

    def supports_embeddings(self) -> bool:
        return False

    def create_embeddings(self, texts: Sequence[str]) -> List[List[float]]:
        """Always raises: the vendor exposes no embeddings endpoint."""
        raise ProviderError(
            code=ErrorCode.UNSUPPORTED,
            message=EMBEDDINGS_UNSUPPORTED,
            provider=DEEPSEEK_PROVIDER,
            model=self._model_config.model_name,
        )

    # ----- Completion -----
    def complete(
        self,
        system: str,
        messages: Sequence[Message],
        tools: Optional[Sequence[ToolInput]] = None,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Tuple[Message, ProviderUsage]:
        """Run one streamed completion and return the assistant message with usage.

        Raises:
            ProviderError: ``VALIDATION`` for bad tool declarations,
                ``REQUEST_FAILED`` for transport failures, ``AUTH`` for vendor
                error objects.
            CancelledError: When ``cancellation_token`` is cancelled mid-stream.
        """
        model = self._model_config.model_name
        ctx = LogContext(provider=DEEPSEEK_PROVIDER, model=model)
        payload = create_request(self._model_config, system, messages, tools, ImageFormat.OPENAI)
        normalized_log_event(
            self._logger,
            "complete.start",
            ctx,
            phase="start",
            attempt=1,
            messages=len(payload["messages"]),
            tools=len(payload.get("tools", [])),
        )

        t0 = time.perf_counter()
        try:
            url = build_url(self._host, self._base_path, provider=DEEPSEEK_PROVIDER)
            headers = build_headers(self._api_key, self._custom_headers, accept="text/event-stream")
            chunks = stream_post(self._http_client(), url, payload, headers, provider=DEEPSEEK_PROVIDER, model=model)
            response = collect_stream(
                chunks,
                cancellation_token=cancellation_token,
                logger=self._logger,
                ctx=ctx,
            )
            raise_for_error_payload(response, provider=DEEPSEEK_PROVIDER, model=model)
        except Exception as e:
            normalized_log_event(
                self._logger,
                "complete.error",
                ctx,
                phase="finalize",
                attempt=1,
                error_code=classify_exception(e).value,
                level=logging.ERROR,
                latency_ms=(time.perf_counter() - t0) * 1000.0,
                error=str(e),
            )
            raise

        message = response_to_message(response)
        usage = self._usage_or_zero(response, ctx)
        normalized_log_event(
            self._logger,
            "complete.end",
            ctx.with_response(response.get("id")),
            phase="finalize",
            attempt=1,
            emitted=not message.is_empty(),
            tokens=usage,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
            finish_reason=finish_reason(response),
            tool_calls=len(message.tool_calls),
        )
        return message, ProviderUsage(model=get_model(response, model), usage=usage)

    def _http_client(self) -> httpx.Client:
        """Return the injected client, else the pooled one (reopened if closed)."""
        if self._client is not None:
            return self._client
        return get_httpx_client(DEEPSEEK_PROVIDER, self._timeout)

    def _usage_or_zero(self, response: Mapping[str, Any], ctx: LogContext) -> Usage:
        try:
            return extract_usage(response, provider=DEEPSEEK_PROVIDER, model=ctx.model)
        except ProviderError as e:
            if e.code is not ErrorCode.USAGE:
                raise
            normalized_log_event(
                self._logger,
                "usage.fallback",
                ctx,
                phase="finalize",
                error_code=e.code.value,
                level=logging.DEBUG,
                error=e.message,
            )
            return Usage()

    # ----- Directory -----
    def fetch_supported_models(self) -> List[str]:
        """Return the model ids served by the configured host, sorted."""
        return fetch_model_ids(
            self._http_client(),
            self._host,
            self._api_key,
            self._custom_headers,
            provider=DEEPSEEK_PROVIDER,
            logger=self._logger,
        )


__all__ = ["DeepseekProvider", "EMBEDDINGS_UNSUPPORTED"]
