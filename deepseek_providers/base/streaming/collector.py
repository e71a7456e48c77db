"""Stream collector: fold SSE frames into one chat-completion response.

Purpose:
    Consume the raw byte chunks of an OpenAI-compatible chat stream and build
    the single response object a non-streaming call would have returned. The
    response normalizer then treats streamed and directly returned payloads
    the same way.

State machine:
    ``AWAITING_LINE -> accumulating -> TERMINATED``. Termination happens when
    the input ends or a ``data: [DONE]`` line is seen; after the sentinel no
    further bytes are inspected and the underlying chunk iterator is closed.

Tolerance:
    A frame that fails to parse is skipped with a DEBUG log. One malformed
    vendor frame must never abort an otherwise successful stream, so the skip
    is an explicit ``continue`` in the loop, not an error path.

Ownership:
    A :class:`StreamAccumulator` is created per call and owned by the loop
    that feeds it; concurrent calls never share one.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional

from pydantic import ValidationError

from ..cancellation import CancellationToken
from ..dto.stream_frame import StreamFrame, ToolCallDelta
from ..logging import LogContext, get_logger, normalized_log_event
from .sse import frame_payload, is_done, iter_lines

# Upper bound on buffered non-SSE text used to recognize a plain JSON body.
_PLAIN_BODY_LIMIT = 64 * 1024
# Upper bound on the frame excerpt attached to decode-error logs.
_LOG_EXCERPT = 200


@dataclass
class _ToolCallState:
    """In-progress tool call assembled from fragments sharing one index."""

    id: Optional[str] = None
    name: Optional[str] = None
    arguments: List[str] = field(default_factory=list)

    def merge(self, fragment: ToolCallDelta) -> None:
        if fragment.id and not self.id:
            self.id = fragment.id
        fn = fragment.function
        if fn is None:
            return
        if fn.name and not self.name:
            self.name = fn.name
        if fn.arguments:
            self.arguments.append(fn.arguments)


@dataclass
class StreamAccumulator:
    """Mutable per-call state folded from parsed frames.

    Content and reasoning fragments are appended in arrival order and never
    reordered. Finish reason, usage and error are last-write-wins.
    """

    content: List[str] = field(default_factory=list)
    reasoning: List[str] = field(default_factory=list)
    tool_calls: Dict[int, _ToolCallState] = field(default_factory=dict)
    role: Optional[str] = None
    finish_reason: Optional[str] = None
    usage: Any = None
    error: Any = None
    response_id: Optional[str] = None
    model: Optional[str] = None
    frames: int = 0

    def add_frame(self, frame: StreamFrame) -> None:
        """Fold one parsed frame into the accumulator."""
        self.frames += 1
        if frame.id and not self.response_id:
            self.response_id = frame.id
        if frame.model and not self.model:
            self.model = frame.model
        if frame.usage is not None:
            self.usage = frame.usage
        if frame.error is not None:
            self.error = frame.error

        choice = frame.primary_choice()
        if choice is None:
            return
        if choice.finish_reason is not None:
            self.finish_reason = choice.finish_reason
        delta = choice.delta
        if delta is None:
            return
        if delta.role:
            self.role = delta.role
        if delta.content:
            self.content.append(delta.content)
        if delta.reasoning_content:
            self.reasoning.append(delta.reasoning_content)
        for fragment in delta.tool_calls or ():
            self.tool_calls.setdefault(fragment.index, _ToolCallState()).merge(fragment)

    def build_response(self) -> Dict[str, Any]:
        """Finalize into a chat-completion shaped mapping."""
        message: Dict[str, Any] = {
            "role": self.role or "assistant",
            "content": "".join(self.content),
        }
        if self.reasoning:
            message["reasoning_content"] = "".join(self.reasoning)
        if self.tool_calls:
            message["tool_calls"] = [
                {
                    "index": index,
                    "id": state.id or f"call_{index}",
                    "type": "function",
                    "function": {"name": state.name or "", "arguments": "".join(state.arguments)},
                }
                for index, state in sorted(self.tool_calls.items())
            ]
        response: Dict[str, Any] = {
            "id": self.response_id,
            "object": "chat.completion",
            "model": self.model,
            "choices": [{"index": 0, "message": message, "finish_reason": self.finish_reason}],
        }
        if self.usage is not None:
            response["usage"] = self.usage
        if self.error is not None:
            response["error"] = self.error
        return response


def _cancellable(chunks: Iterator[bytes], token: Optional[CancellationToken]) -> Iterator[bytes]:
    """Poll ``token`` before each chunk is handed to the line splitter."""
    for chunk in chunks:
        if token is not None:
            token.raise_if_cancelled()
        yield chunk


def _plain_json_body(lines: List[str]) -> Optional[Dict[str, Any]]:
    """Return the body as a JSON object when the vendor answered without SSE."""
    try:
        parsed = json.loads("\n".join(lines))
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def collect_stream(
    chunks: Iterable[bytes],
    *,
    cancellation_token: Optional[CancellationToken] = None,
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
) -> Dict[str, Any]:
    """Consume ``chunks`` and return the accumulated response mapping.

    Parameters:
        chunks: Raw body byte chunks, in arrival order.
        cancellation_token: Optional token polled between chunks.
        logger: Logger for dropped-frame and termination events.
        ctx: Log context of the owning call.

    Returns:
        A chat-completion shaped mapping (see
        :meth:`StreamAccumulator.build_response`). When the body carried no
        SSE frame but is a single JSON object (for example a vendor error
        body), that object is returned unchanged.

    Raises:
        CancelledError: When the token is cancelled mid-stream.
    """
    log = logger or get_logger("deepseek_providers.streaming")
    if cancellation_token is not None:
        cancellation_token.raise_if_cancelled()

    acc = StreamAccumulator()
    stray: List[str] = []
    stray_size = 0
    chunk_iter = iter(chunks)
    try:
        for line in iter_lines(_cancellable(chunk_iter, cancellation_token)):
            payload = frame_payload(line)
            if payload is None:
                if line and acc.frames == 0 and stray_size < _PLAIN_BODY_LIMIT:
                    stray.append(line)
                    stray_size += len(line)
                continue
            if is_done(payload):
                normalized_log_event(
                    log,
                    "stream.done",
                    ctx,
                    phase="finalize",
                    emitted=acc.frames,
                    level=logging.DEBUG,
                )
                break
            try:
                frame = StreamFrame.model_validate_json(payload)
            except ValidationError as e:
                normalized_log_event(
                    log,
                    "stream.decode_error",
                    ctx,
                    phase="mid_stream",
                    emitted=acc.frames,
                    level=logging.DEBUG,
                    error=str(e.errors(include_url=False)[:1]),
                    line=payload[:_LOG_EXCERPT],
                )
                continue
            acc.add_frame(frame)
    finally:
        close = getattr(chunk_iter, "close", None)
        if callable(close):
            close()

    if acc.frames == 0 and stray:
        plain = _plain_json_body(stray)
        if plain is not None:
            return plain
    return acc.build_response()


__all__ = ["StreamAccumulator", "collect_stream"]
