"""Streaming package: SSE line handling and the stream collector.

Re-exports the public helpers so callers can import from
``deepseek_providers.base.streaming`` directly.
"""

from .collector import StreamAccumulator, collect_stream
from .sse import DATA_PREFIX, DONE_SENTINEL, frame_payload, is_done, iter_lines

__all__ = [
    "StreamAccumulator",
    "collect_stream",
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "frame_payload",
    "is_done",
    "iter_lines",
]
