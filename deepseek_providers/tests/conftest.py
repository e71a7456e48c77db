"""Pytest configuration for the adapter test suite.

Provides:
- ``sse_body``: build a ``text/event-stream`` body from frame dicts.
- ``make_provider``: a ``DeepseekProvider`` wired to an ``httpx.MockTransport``
  so no test touches the network.
- ``log_events``: capture structured events emitted on the shared logger.
- Isolation of the layered config (env vars, ``.env``, config file cache).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

import httpx
import pytest

from deepseek_providers.base.http import close_all_clients
from deepseek_providers.base.logging import LOG_LEVEL_ENV, get_logger
from deepseek_providers.config import reset_config_cache
from deepseek_providers.config.env import env_var_names
from deepseek_providers.deepseek.client import DeepseekProvider

TEST_API_KEY = "sk-unit-key"  # pragma: allowlist secret - fake credential


class _EventHandler(logging.Handler):
    """Collect JSON log payloads emitted by ``log_event``."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []
        self.levels: List[int] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            return
        if isinstance(payload, dict):
            self.events.append(payload)
            self.levels.append(record.levelno)

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("event") == event]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Start every test from a clean configuration environment."""
    for name in env_var_names("deepseek"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("PROVIDERS_CONFIG_FILE", raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "absent.env"))
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()


@pytest.fixture()
def log_events(monkeypatch: pytest.MonkeyPatch) -> Iterator[_EventHandler]:
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    logger = get_logger()
    handler = _EventHandler()
    logger.addHandler(handler)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)


def _sse_body(*frames: Any, done: bool = True) -> bytes:
    parts = []
    for frame in frames:
        data = frame if isinstance(frame, str) else json.dumps(frame)
        parts.append(f"data: {data}\n\n")
    if done:
        parts.append("data: [DONE]\n\n")
    return "".join(parts).encode("utf-8")


@pytest.fixture()
def sse_body() -> Callable[..., bytes]:
    """Return a builder: ``sse_body(frame, ..., done=True) -> bytes``.

    Frames may be dicts (JSON-encoded) or raw strings (sent verbatim).
    """
    return _sse_body


def content_frame(text: str, **extra: Any) -> Dict[str, Any]:
    frame: Dict[str, Any] = {
        "id": "resp-1",
        "model": "deepseek-chat",
        "choices": [{"index": 0, "delta": {"content": text}, "finish_reason": None}],
    }
    frame.update(extra)
    return frame


@pytest.fixture()
def frame() -> Callable[..., Dict[str, Any]]:
    """Return a builder for a content delta frame."""
    return content_frame


@pytest.fixture()
def make_provider() -> Iterator[Callable[..., DeepseekProvider]]:
    """Return ``make(handler, **kwargs)`` building a provider on a mock transport.

    ``handler`` receives the ``httpx.Request`` and returns an ``httpx.Response``.
    """
    clients: List[httpx.Client] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response], api_key: Optional[str] = TEST_API_KEY, **kwargs: Any) -> DeepseekProvider:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return DeepseekProvider(api_key, client=client, **kwargs)

    yield _make
    for c in clients:
        c.close()
