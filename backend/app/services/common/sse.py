"""
Server-sent events helpers.
- SSEDecoder: line-buffered decoder for OpenAI-style streamed completions.
- format_event: encode one `data:` frame.
"""
from __future__ import annotations

import codecs
import json
import logging
from typing import Any, Iterable, Iterator, Optional

logger = logging.getLogger("ai.sse")

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


def format_event(payload: Any, event: Optional[str] = None) -> str:
    data = payload if isinstance(payload, str) else json.dumps(payload, default=str)
    head = f"event: {event}\n" if event else ""
    return f"{head}data: {data}\n\n"


class SSEDecoder:
    """
    Feed raw chunks (bytes or str) in arrival order; get back content deltas.

    Partial lines are buffered until their newline arrives. Comment lines (":"),
    blank lines and lines without the "data: " prefix are skipped. A "[DONE]"
    frame ends the stream; later input is ignored. Frames whose JSON does not
    parse are skipped.
    """

    def __init__(self) -> None:
        self._buffer = ""
        # A multi-byte character may be split across chunks
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self.done = False

    def feed(self, chunk: bytes | str) -> list[str]:
        if self.done:
            return []
        if isinstance(chunk, bytes):
            chunk = self._utf8.decode(chunk)
        self._buffer += chunk

        out: list[str] = []
        while not self.done:
            idx = self._buffer.find("\n")
            if idx == -1:
                break
            line = self._buffer[:idx]
            self._buffer = self._buffer[idx + 1:]
            content = self._handle_line(line)
            if content:
                out.append(content)
        return out

    def _handle_line(self, line: str) -> Optional[str]:
        if line.endswith("\r"):
            line = line[:-1]
        if not line or line.startswith(":"):
            return None
        if not line.startswith(DATA_PREFIX):
            return None
        data = line[len(DATA_PREFIX):].strip()
        if data == DONE_SENTINEL:
            self.done = True
            return None
        try:
            parsed = json.loads(data)
        except json.JSONDecodeError:
            logger.debug("Skipping unparsable SSE frame: %s", data[:200])
            return None
        try:
            return parsed["choices"][0]["delta"].get("content")
        except (KeyError, IndexError, TypeError, AttributeError):
            return None

    def iter_content(self, chunks: Iterable[bytes | str]) -> Iterator[str]:
        for chunk in chunks:
            yield from self.feed(chunk)
            if self.done:
                return


def collect_text(chunks: Iterable[bytes | str]) -> str:
    """Concatenate every content delta in arrival order."""
    return "".join(SSEDecoder().iter_content(chunks))
