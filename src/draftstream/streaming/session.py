"""Drivers that consume a whole generation stream.

A driver owns the per-request state (an SSE decoder plus either a
:class:`StreamSegmenter` or a persona text accumulator) and is discarded
when the request ends.  Waiting for chunks is left to the caller's
iterable; the drivers themselves never block.
"""

from __future__ import annotations

import codecs
import logging
from collections.abc import AsyncIterable, Callable, Iterable, Sequence
from typing import Any

from pydantic import ValidationError

from draftstream.exceptions import SegmenterStateError
from draftstream.models.persona import PersonaAnalysis, fallback_persona
from draftstream.models.segments import FinalResult, PartialView

from .callbacks import StreamCallback, TokenFn, fire_callbacks, normalize_callbacks
from .extractor import extract_json_object
from .segmenter import StreamSegmenter
from .sse import SSEDecoder

logger = logging.getLogger(__name__)

Chunk = bytes | str


class _StreamDriver:
    """Shared chunk decoding for the concrete drivers.

    With ``sse=True`` chunks are raw server-sent-event transport data;
    otherwise they are the model's text itself (bytes are UTF-8 decoded).
    """

    __slots__ = ("_finished", "_raw_decoder", "_sse")

    def __init__(self, *, sse: bool = True) -> None:
        self._sse = SSEDecoder() if sse else None
        self._raw_decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._finished = False

    def _deltas(self, chunk: Chunk) -> list[str]:
        if self._finished:
            msg = f"{type(self).__name__} already finished; start a new one per stream"
            raise SegmenterStateError(msg)
        if self._sse is not None:
            return self._sse.feed(chunk)
        if isinstance(chunk, bytes):
            chunk = self._raw_decoder.decode(chunk, final=False)
        return [chunk] if chunk else []

    def _tail(self) -> list[str]:
        if self._finished:
            msg = f"{type(self).__name__} already finished; start a new one per stream"
            raise SegmenterStateError(msg)
        self._finished = True
        if self._sse is not None:
            return self._sse.flush()
        tail = self._raw_decoder.decode(b"", final=True)
        return [tail] if tail else []


class GenerationSession(_StreamDriver):
    """Runs one note-generation stream through a :class:`StreamSegmenter`.

    ``callbacks`` may be :class:`StreamCallback` objects or plain
    ``on_token(dialogue_text, thought_text)`` functions.  ``on_partial``
    fires once per text delta, ``on_complete`` once with the final result.

    Usage::

        session = GenerationSession(on_token)
        result = await session.arun(response.aiter_bytes())
        for note in result.records:
            ...
    """

    __slots__ = ("_callbacks", "_segmenter")

    def __init__(
        self,
        callbacks: Sequence[StreamCallback | TokenFn] | StreamCallback | TokenFn | None = None,
        *,
        sse: bool = True,
        records_key: str = "notes",
    ) -> None:
        super().__init__(sse=sse)
        self._callbacks = normalize_callbacks(callbacks)
        self._segmenter = StreamSegmenter(records_key=records_key)

    @property
    def segmenter(self) -> StreamSegmenter:
        return self._segmenter

    def feed(self, chunk: Chunk) -> PartialView | None:
        """Consume one transport chunk.

        Returns the latest live view, or ``None`` if the chunk completed no
        text (for example half of an SSE line).
        """
        view: PartialView | None = None
        for delta in self._deltas(chunk):
            view = self._ingest(delta)
        return view

    def finish(self) -> FinalResult:
        """Flush buffered transport data and finalize the segmenter."""
        for delta in self._tail():
            self._ingest(delta)
        result = self._segmenter.finalize()
        fire_callbacks(self._callbacks, "on_complete", result, logger=logger)
        return result

    def run(self, chunks: Iterable[Chunk]) -> FinalResult:
        for chunk in chunks:
            self.feed(chunk)
        return self.finish()

    async def arun(self, chunks: AsyncIterable[Chunk]) -> FinalResult:
        """Consume an async chunk source; cancellation simply propagates."""
        async for chunk in chunks:
            self.feed(chunk)
        return self.finish()

    def _ingest(self, delta: str) -> PartialView:
        view = self._segmenter.ingest(delta)
        fire_callbacks(self._callbacks, "on_partial", view, logger=logger)
        return view


class PersonaStream(_StreamDriver):
    """Accumulates a persona-analysis stream and parses it at the end.

    ``on_text`` receives the full text accumulated so far after each delta.
    """

    __slots__ = ("_on_text", "_text")

    def __init__(self, on_text: Callable[[str], Any] | None = None, *, sse: bool = True) -> None:
        super().__init__(sse=sse)
        self._on_text = on_text
        self._text = ""

    @property
    def text(self) -> str:
        return self._text

    def feed(self, chunk: Chunk) -> str:
        for delta in self._deltas(chunk):
            self._append(delta)
        return self._text

    def finish(self) -> PersonaAnalysis:
        """Parse the accumulated text, falling back to a raw-text persona."""
        for delta in self._tail():
            self._append(delta)
        return parse_persona(self._text)

    def run(self, chunks: Iterable[Chunk]) -> PersonaAnalysis:
        for chunk in chunks:
            self.feed(chunk)
        return self.finish()

    async def arun(self, chunks: AsyncIterable[Chunk]) -> PersonaAnalysis:
        async for chunk in chunks:
            self.feed(chunk)
        return self.finish()

    def _append(self, delta: str) -> None:
        self._text += delta
        if self._on_text is None:
            return
        try:
            self._on_text(self._text)
        except Exception:
            logger.warning("Persona text callback %r failed", self._on_text, exc_info=True)


def parse_persona(text: str) -> PersonaAnalysis:
    """Build a :class:`PersonaAnalysis` from model output.

    The output must hold a JSON object with a non-empty ``tone``; anything
    else yields :func:`~draftstream.models.persona.fallback_persona`.
    """
    result = extract_json_object(text)
    if not result.ok or result.value is None:
        logger.warning("No persona object recovered: %s", result.error)
        return fallback_persona(text)
    try:
        persona = PersonaAnalysis.model_validate(result.value)
    except ValidationError as exc:
        logger.warning("Persona payload failed validation: %s", exc)
        return fallback_persona(text)
    if not persona.tone:
        logger.warning("Persona payload has an empty tone")
        return fallback_persona(text)
    return persona
