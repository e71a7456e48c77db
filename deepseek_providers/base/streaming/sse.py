"""Server-Sent-Events line handling.

Byte chunks from the network may split a line (or a multi-byte UTF-8
character) anywhere. :func:`iter_lines` decodes incrementally with
replacement, so malformed byte sequences become U+FFFD instead of aborting the
stream, and carries a trailing partial line over to the next chunk. A leading
UTF-8 byte order mark is dropped.

:func:`frame_payload` classifies a single trimmed line: only lines with the
literal ``"data: "`` prefix are candidate frames; comments, ``event:`` /
``id:`` fields and blank separators are ignored.
"""

from __future__ import annotations

import codecs
from typing import Iterable, Iterator, Optional

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


def iter_lines(chunks: Iterable[bytes]) -> Iterator[str]:
    """Yield trimmed text lines from an iterable of byte chunks.

    Lines are split on ``\\n`` only (a trailing ``\\r`` is removed by the
    trim); ``str.splitlines`` is avoided because it also breaks on U+2028 and
    friends, which may legally appear unescaped inside JSON strings.

    Lines are produced as soon as their newline arrives, so a consumer that
    stops iterating never causes later chunks to be read. A final line without
    a newline is yielded when the input ends.
    """
    decoder = codecs.getincrementaldecoder("utf-8-sig")(errors="replace")
    pending = ""
    for chunk in chunks:
        if not chunk:
            continue
        pending += decoder.decode(chunk)
        *complete, pending = pending.split("\n")
        for line in complete:
            yield line.strip()
    pending += decoder.decode(b"", final=True)
    if pending:
        yield pending.strip()


def frame_payload(line: str) -> Optional[str]:
    """Return the frame payload of a ``data:`` line, else ``None``."""
    if not line.startswith(DATA_PREFIX):
        return None
    return line[len(DATA_PREFIX):]


def is_done(payload: str) -> bool:
    """True when ``payload`` is the end-of-stream sentinel."""
    return payload == DONE_SENTINEL


__all__ = ["DATA_PREFIX", "DONE_SENTINEL", "frame_payload", "is_done", "iter_lines"]
