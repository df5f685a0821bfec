"""Server-sent-event decoding for streaming generation endpoints.

Turns raw transport chunks into plain text deltas.  Both Gemini
(``candidates[0].content.parts[0].text``) and OpenAI-compatible
(``choices[0].delta.content``) payload shapes are understood.
"""

from __future__ import annotations

import codecs
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

DONE_SENTINEL = "[DONE]"


def extract_delta_text(data: Any) -> str:
    """Return the text delta carried by one decoded SSE payload, or ``""``."""
    if not isinstance(data, dict):
        return ""

    candidates = data.get("candidates")
    if isinstance(candidates, list) and candidates:
        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if isinstance(parts, list) and parts and isinstance(parts[0], dict):
            text = parts[0].get("text")
            if isinstance(text, str) and text:
                return text

    choices = data.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        delta = choices[0].get("delta")
        if isinstance(delta, dict):
            text = delta.get("content")
            if isinstance(text, str):
                return text
    return ""


class SSEDecoder:
    """Incremental decoder from SSE transport chunks to text deltas.

    Lines may be split across chunks and multi-byte UTF-8 characters may be
    split across byte chunks; both are buffered until complete.  Lines other
    than ``data:`` lines (comments, ``event:``, ``id:``) are ignored.
    """

    __slots__ = ("_decoder", "_done", "_line_buffer", "_skipped")

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._line_buffer = ""
        self._done = False
        self._skipped = 0

    @property
    def done(self) -> bool:
        """Whether a ``data: [DONE]`` line has been seen."""
        return self._done

    @property
    def skipped(self) -> int:
        """Number of ``data:`` lines dropped because they were not valid JSON."""
        return self._skipped

    def feed(self, chunk: bytes | str) -> list[str]:
        """Consume one transport chunk and return the deltas it completed."""
        if isinstance(chunk, bytes):
            chunk = self._decoder.decode(chunk, final=False)
        self._line_buffer += chunk

        deltas: list[str] = []
        while "\n" in self._line_buffer:
            line, self._line_buffer = self._line_buffer.split("\n", 1)
            delta = self._process_line(line)
            if delta:
                deltas.append(delta)
        return deltas

    def flush(self) -> list[str]:
        """Process whatever is left once the transport signals end of stream."""
        tail = self._line_buffer + self._decoder.decode(b"", final=True)
        self._line_buffer = ""
        deltas: list[str] = []
        for line in tail.split("\n"):
            delta = self._process_line(line)
            if delta:
                deltas.append(delta)
        return deltas

    def _process_line(self, line: str) -> str:
        line = line.rstrip("\r").strip()
        if not line.startswith("data:"):
            return ""
        data_str = line[len("data:") :].strip()
        if not data_str:
            return ""
        if data_str == DONE_SENTINEL:
            self._done = True
            return ""
        try:
            data = json.loads(data_str)
        except (ValueError, RecursionError):
            self._skipped += 1
            logger.warning("Skipping undecodable SSE data line: %.80s", data_str)
            return ""
        return extract_delta_text(data)
