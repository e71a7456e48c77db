"""Normalization of chat-completion mappings into Message results."""
from __future__ import annotations

import pytest

from deepseek_providers.base.errors import ErrorCode, ProviderError
from deepseek_providers.base.openai_format import (
    finish_reason,
    get_model,
    raise_for_error_payload,
    response_to_message,
)


def _response(message, **extra):
    resp = {"id": "r", "model": "deepseek-chat", "choices": [{"index": 0, "message": message, "finish_reason": "stop"}]}
    resp.update(extra)
    return resp


def _call(name, arguments, call_id="call_1"):
    return {"id": call_id, "type": "function", "function": {"name": name, "arguments": arguments}}


def test_text_content_becomes_assistant_message():
    msg = response_to_message(_response({"role": "assistant", "content": "hello"}))
    assert msg.role == "assistant" and msg.content == "hello"  # nosec B101
    assert msg.tool_calls == []  # nosec B101


def test_empty_content_is_not_an_error():
    msg = response_to_message(_response({"role": "assistant", "content": ""}))
    assert msg.is_empty()  # nosec B101
    assert response_to_message({}).is_empty()  # nosec B101


def test_reasoning_surfaces_as_content_part():
    msg = response_to_message(_response({"content": "42", "reasoning_content": "let me think"}))
    assert msg.is_structured()  # nosec B101
    assert msg.text() == "42"  # nosec B101
    assert msg.reasoning() == "let me think"  # nosec B101


def test_tool_call_arguments_decoded():
    msg = response_to_message(_response({"content": "", "tool_calls": [_call("lookup", '{"a":1}')]}))
    (call,) = msg.tool_calls
    assert call.ok and call.arguments == {"a": 1}  # nosec B101
    assert call.raw_arguments == '{"a":1}'  # nosec B101


def test_empty_arguments_decode_to_empty_object():
    (call,) = response_to_message(_response({"tool_calls": [_call("ping", "")]})).tool_calls
    assert call.ok and call.arguments == {}  # nosec B101


@pytest.mark.parametrize("name", ["bad name", "dots.not.allowed", "", "x\n"])
def test_invalid_tool_name_marks_call(name):
    (call,) = response_to_message(_response({"tool_calls": [_call(name, "{}")]})).tool_calls
    assert not call.ok  # nosec B101
    assert "invalid characters" in call.error  # nosec B101


def test_invalid_json_arguments_mark_call():
    (call,) = response_to_message(_response({"tool_calls": [_call("f", '{"a":')]})).tool_calls
    assert call.error and "call_1" in call.error  # nosec B101
    assert call.raw_arguments == '{"a":'  # nosec B101


def test_non_object_arguments_mark_call():
    (call,) = response_to_message(_response({"tool_calls": [_call("f", "[1, 2]")]})).tool_calls
    assert call.error and "JSON object" in call.error  # nosec B101


def test_one_bad_call_does_not_affect_others():
    calls = response_to_message(
        _response({"tool_calls": [_call("good", '{"x": true}', "a"), _call("bad!", "{}", "b")]})
    ).tool_calls
    assert [c.id for c in calls] == ["a", "b"]  # nosec B101
    assert calls[0].ok and not calls[1].ok  # nosec B101


def test_error_payload_raises_auth_with_vendor_message():
    with pytest.raises(ProviderError) as ei:
        raise_for_error_payload({"error": {"message": "bad key"}})
    assert ei.value.code is ErrorCode.AUTH  # nosec B101
    assert ei.value.message == "bad key"  # nosec B101


def test_error_payload_without_message_is_unknown_error():
    with pytest.raises(ProviderError) as ei:
        raise_for_error_payload({"error": {"code": 401}})
    assert ei.value.message == "unknown error"  # nosec B101


def test_no_error_passes():
    raise_for_error_payload(_response({"content": "x"}))


def test_get_model_prefers_response():
    assert get_model({"model": "deepseek-reasoner"}, "deepseek-chat") == "deepseek-reasoner"  # nosec B101
    assert get_model({"model": None}, "deepseek-chat") == "deepseek-chat"  # nosec B101
    assert get_model({}, "deepseek-chat") == "deepseek-chat"  # nosec B101


def test_finish_reason():
    assert finish_reason(_response({"content": "x"})) == "stop"  # nosec B101
    assert finish_reason({}) is None  # nosec B101
