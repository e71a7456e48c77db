"""End-to-end ``DeepseekProvider.complete`` behavior over a mock transport."""
from __future__ import annotations

import json
import logging

import httpx
import pytest

from deepseek_providers.base.cancellation import CancellationToken, CancelledError
from deepseek_providers.base.dto import ToolSpec
from deepseek_providers.base.errors import ErrorCode, ProviderError
from deepseek_providers.base.models import Message, Usage
from deepseek_providers.deepseek.client import EMBEDDINGS_UNSUPPORTED, DeepseekProvider

USAGE = {"prompt_tokens": 9, "completion_tokens": 3, "total_tokens": 12}


def _sse(request_log, body: bytes):
    def handler(request: httpx.Request) -> httpx.Response:
        request_log.append(request)
        return httpx.Response(200, content=body, headers={"content-type": "text/event-stream"})

    return handler


def test_complete_happy_path(make_provider, sse_body, frame):
    requests = []
    body = sse_body(
        frame("Hel"),
        frame("lo"),
        {"id": "resp-1", "model": "deepseek-chat", "choices": [{"index": 0, "delta": {}, "finish_reason": "stop"}]},
        {"id": "resp-1", "model": "deepseek-chat", "choices": [], "usage": USAGE},
    )
    provider = make_provider(_sse(requests, body), custom_headers="X-A=1,X-B=2")

    message, usage = provider.complete("be brief", [Message.user("hi")])

    assert message.role == "assistant" and message.text() == "Hello"  # nosec B101
    assert usage.model == "deepseek-chat"  # nosec B101
    assert usage.usage == Usage(input_tokens=9, output_tokens=3, total_tokens=12)  # nosec B101

    (request,) = requests
    assert str(request.url) == "https://api.deepseek.com/v1/chat/completions"  # nosec B101
    assert request.headers["authorization"] == "Bearer sk-unit-key"  # nosec B101
    assert request.headers["accept"] == "text/event-stream"  # nosec B101
    assert request.headers["x-a"] == "1" and request.headers["x-b"] == "2"  # nosec B101
    sent = json.loads(request.content)
    assert sent["stream"] is True and sent["model"] == "deepseek-chat"  # nosec B101
    assert sent["messages"][0] == {"role": "system", "content": "be brief"}  # nosec B101
    assert "tools" not in sent  # nosec B101


def test_reported_model_wins(make_provider, sse_body, frame):
    body = sse_body(frame("x", model="deepseek-chat-0324"))
    _, usage = make_provider(_sse([], body)).complete("", [Message.user("hi")])
    assert usage.model == "deepseek-chat-0324"  # nosec B101


def test_no_usage_frame_is_zero_usage(make_provider, sse_body, frame):
    message, usage = make_provider(_sse([], sse_body(frame("ok")))).complete("", [Message.user("hi")])
    assert message.text() == "ok"  # nosec B101
    assert usage.usage.is_zero()  # nosec B101


def test_malformed_usage_falls_back_to_zero(make_provider, sse_body, frame, log_events):
    body = sse_body(frame("ok"), {"choices": [], "usage": {"prompt_tokens": "many"}})
    message, usage = make_provider(_sse([], body)).complete("", [Message.user("hi")])
    assert message.text() == "ok" and usage.usage.is_zero()  # nosec B101
    (event,) = log_events.named("usage.fallback")
    assert event["error_code"] == "usage"  # nosec B101


def test_tool_calls_end_to_end(make_provider, sse_body):
    tool_frames = [
        {"choices": [{"index": 0, "delta": {"tool_calls": [{"index": 0, "id": "call_1", "type": "function", "function": {"name": "lookup", "arguments": '{"a":'}}]}}]},
        {"choices": [{"index": 0, "delta": {"tool_calls": [{"index": 0, "function": {"arguments": "1}"}}]}}]},
        {"choices": [{"index": 0, "delta": {}, "finish_reason": "tool_calls"}]},
    ]
    requests = []
    provider = make_provider(_sse(requests, sse_body(*tool_frames)))
    message, _ = provider.complete("", [Message.user("find")], [ToolSpec(name="lookup")])

    (call,) = message.tool_calls
    assert (call.id, call.name, call.arguments) == ("call_1", "lookup", {"a": 1})  # nosec B101
    assert message.text() == ""  # nosec B101
    assert json.loads(requests[0].content)["tools"][0]["function"]["name"] == "lookup"  # nosec B101


def test_reasoning_end_to_end(make_provider, sse_body, frame):
    body = sse_body(
        {"choices": [{"index": 0, "delta": {"reasoning_content": "2+2"}}]},
        frame("4"),
    )
    message, _ = make_provider(_sse([], body), model="deepseek-reasoner").complete("", [Message.user("2+2?")])
    assert message.reasoning() == "2+2" and message.text() == "4"  # nosec B101


def test_empty_completion_is_success(make_provider, sse_body):
    message, _ = make_provider(_sse([], sse_body())).complete("", [Message.user("hi")])
    assert message.is_empty()  # nosec B101


def test_vendor_error_frame_is_auth(make_provider, sse_body, frame):
    body = sse_body(frame("partial"), {"error": {"message": "bad key"}})
    with pytest.raises(ProviderError) as ei:
        make_provider(_sse([], body)).complete("", [Message.user("hi")])
    assert ei.value.code is ErrorCode.AUTH and ei.value.message == "bad key"  # nosec B101


def test_http_error_with_json_body_is_auth(make_provider, log_events):
    provider = make_provider(lambda r: httpx.Response(401, json={"error": {"message": "bad key"}}))
    with pytest.raises(ProviderError) as ei:
        provider.complete("", [Message.user("hi")])
    assert ei.value.code is ErrorCode.AUTH and ei.value.message == "bad key"  # nosec B101
    (event,) = log_events.named("complete.error")
    assert event["error_code"] == "auth"  # nosec B101


def test_plain_json_error_with_2xx_is_auth(make_provider):
    provider = make_provider(
        lambda r: httpx.Response(200, json={"error": {"message": "Insufficient Balance"}})
    )
    with pytest.raises(ProviderError) as ei:
        provider.complete("", [Message.user("hi")])
    assert ei.value.code is ErrorCode.AUTH and ei.value.message == "Insufficient Balance"  # nosec B101


def test_transport_failure_is_request_failed(make_provider, log_events):
    def handler(request):
        raise httpx.ConnectTimeout("connect timed out", request=request)

    with pytest.raises(ProviderError) as ei:
        make_provider(handler).complete("", [Message.user("hi")])
    assert ei.value.code is ErrorCode.REQUEST_FAILED  # nosec B101
    assert "connect timed out" in ei.value.message  # nosec B101
    assert log_events.named("complete.error")[0]["error_code"] == "request_failed"  # nosec B101


def test_invalid_host_is_request_failed(make_provider):
    provider = make_provider(lambda r: httpx.Response(200), host="not a url")
    with pytest.raises(ProviderError) as ei:
        provider.complete("", [Message.user("hi")])
    assert ei.value.code is ErrorCode.REQUEST_FAILED  # nosec B101


def test_duplicate_tools_fail_before_any_request(make_provider):
    requests = []
    provider = make_provider(_sse(requests, b""))
    with pytest.raises(ProviderError) as ei:
        provider.complete("", [Message.user("hi")], [ToolSpec(name="t"), ToolSpec(name="t")])
    assert ei.value.code is ErrorCode.VALIDATION  # nosec B101
    assert requests == []  # nosec B101


def test_cancellation_mid_stream(make_provider, sse_body, frame):
    token = CancellationToken()

    def body():
        yield sse_body(frame("a"), done=False)
        token.cancel("caller gave up")
        yield sse_body(frame("b"))

    provider = make_provider(lambda r: httpx.Response(200, content=body()))
    with pytest.raises(CancelledError):
        provider.complete("", [Message.user("hi")], cancellation_token=token)


def test_lifecycle_events_logged(make_provider, sse_body, frame, log_events):
    body = sse_body(frame("ok"), {"choices": [], "usage": USAGE})
    make_provider(_sse([], body)).complete("", [Message.user("hi")])
    (start,) = log_events.named("complete.start")
    (end,) = log_events.named("complete.end")
    assert start["phase"] == "start" and start["messages"] == 1  # nosec B101
    assert end["tokens"]["total_tokens"] == 12  # nosec B101
    assert end["response_id"] == "resp-1"  # nosec B101
    assert end["emitted"] is True  # nosec B101
    levels = dict(zip([e["event"] for e in log_events.events], log_events.levels))
    assert levels["complete.end"] == logging.INFO  # nosec B101


def test_embeddings_unsupported(make_provider):
    provider = make_provider(lambda r: httpx.Response(200))
    assert provider.supports_embeddings() is False  # nosec B101
    with pytest.raises(ProviderError) as ei:
        provider.create_embeddings(["text"])
    assert ei.value.code is ErrorCode.UNSUPPORTED  # nosec B101
    assert ei.value.message == EMBEDDINGS_UNSUPPORTED  # nosec B101


def test_metadata():
    info = DeepseekProvider.metadata()
    assert info.id == "deepseek" and info.display_name == "DeepSeek"  # nosec B101
    assert info.default_model == "deepseek-chat"  # nosec B101
    assert info.known_models == ["deepseek-chat", "deepseek-reasoner"]  # nosec B101
    assert info.doc_url == "https://platform.deepseek.com/api-docs"  # nosec B101
    keys = {k.name: k for k in info.config_keys}
    assert keys["DEEPSEEK_API_KEY"].required and keys["DEEPSEEK_API_KEY"].secret  # nosec B101
    assert keys["DEEPSEEK_HOST"].default == "https://api.deepseek.com"  # nosec B101
    assert keys["DEEPSEEK_BASE_PATH"].default == "v1/chat/completions"  # nosec B101
    assert not keys["DEEPSEEK_CUSTOM_HEADERS"].required and keys["DEEPSEEK_CUSTOM_HEADERS"].secret  # nosec B101
    assert keys["DEEPSEEK_TIMEOUT"].default == "600"  # nosec B101


def test_model_config_and_identity(make_provider):
    provider = make_provider(lambda r: httpx.Response(200), model="deepseek-reasoner", temperature=0.3, max_tokens=64)
    cfg = provider.get_model_config()
    assert (cfg.model_name, cfg.temperature, cfg.max_tokens) == ("deepseek-reasoner", 0.3, 64)  # nosec B101
    assert provider.default_model() == "deepseek-reasoner"  # nosec B101
    assert provider.provider_name == "deepseek"  # nosec B101


def test_missing_api_key_is_configuration_error():
    with pytest.raises(ProviderError) as ei:
        DeepseekProvider(None)
    assert ei.value.code is ErrorCode.CONFIGURATION  # nosec B101


def test_bad_timeout_is_configuration_error():
    with pytest.raises(ProviderError) as ei:
        DeepseekProvider("sk-x", timeout="soon")
    assert ei.value.code is ErrorCode.CONFIGURATION  # nosec B101


def test_from_env(monkeypatch, sse_body, frame):
    requests = []
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-env")
    monkeypatch.setenv("DEEPSEEK_HOST", "https://proxy.example/")
    monkeypatch.setenv("DEEPSEEK_BASE_PATH", "chat")
    monkeypatch.setenv("DEEPSEEK_CUSTOM_HEADERS", "X-Env=yes")
    monkeypatch.setenv("DEEPSEEK_TIMEOUT", "15")
    with httpx.Client(transport=httpx.MockTransport(_sse(requests, sse_body(frame("hi"))))) as client:
        provider = DeepseekProvider.from_env(model="deepseek-reasoner", client=client)
        provider.complete("", [Message.user("hi")])
    (request,) = requests
    assert str(request.url) == "https://proxy.example/chat"  # nosec B101
    assert request.headers["authorization"] == "Bearer sk-env"  # nosec B101
    assert request.headers["x-env"] == "yes"  # nosec B101
    assert json.loads(request.content)["model"] == "deepseek-reasoner"  # nosec B101


def test_from_env_without_key_fails():
    with pytest.raises(ProviderError) as ei:
        DeepseekProvider.from_env()
    assert ei.value.code is ErrorCode.CONFIGURATION  # nosec B101


def test_provider_satisfies_interfaces(make_provider):
    from deepseek_providers.base import CompletionProvider, ModelListingProvider

    provider = make_provider(lambda r: httpx.Response(200))
    assert isinstance(provider, CompletionProvider)  # nosec B101
    assert isinstance(provider, ModelListingProvider)  # nosec B101


def test_pooled_client_is_resolved_per_call(monkeypatch):
    import deepseek_providers.deepseek.client as client_module

    issued = []

    def fake_pool(purpose, timeout):
        if issued and not issued[-1].is_closed:
            return issued[-1]
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"data": [{"id": "m"}]})))
        issued.append(client)
        return client

    monkeypatch.setattr(client_module, "get_httpx_client", fake_pool)
    provider = DeepseekProvider("sk-x")
    assert provider.fetch_supported_models() == ["m"]  # nosec B101
    issued[0].close()
    assert provider.fetch_supported_models() == ["m"]  # nosec B101
    assert len(issued) == 2  # nosec B101
    issued[-1].close()
