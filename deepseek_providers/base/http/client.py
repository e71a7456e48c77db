"""Shared HTTP client pool.

Purpose:
    Provide a thread-safe pool of reusable ``httpx.Client`` instances so every
    completion and directory call made by an adapter shares one connection
    pool. A client holds no per-call state and is safe to share across
    concurrent calls.

Timeout strategy:
    A single connection-level deadline (seconds) governs each request's whole
    lifetime, including reading the streamed body. It is fixed when the client
    is created; there is no per-chunk timeout.

Lifecycle & cleanup:
    Clients are cached by ``(purpose, timeout)``. All clients are closed at
    interpreter exit via ``atexit``; tests may call :func:`close_all_clients`.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, Tuple

import httpx

_CLIENTS: Dict[Tuple[str, float], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(purpose: str, timeout: float) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given purpose and timeout.

    Parameters:
        purpose: Short string discriminating separate pools (e.g. ``"deepseek"``).
        timeout: Request deadline in seconds.

    Thread-safety:
        Creation is guarded by a re-entrant lock with a double-checked lookup.
    """
    key = (purpose, float(timeout))
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        client = httpx.Client(timeout=httpx.Timeout(float(timeout)))
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            # Interpreter-exit teardown; a failing close is not actionable.
            with contextlib.suppress(Exception):
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
