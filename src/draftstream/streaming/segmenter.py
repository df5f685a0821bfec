"""Incremental segmentation of a marker-delimited LLM text stream.

The generator is instructed to answer in three phases::

    [[THOUGHT]] planning notes [[/THOUGHT]]
    user-facing prose
    ###MATRIX_DATA_START### {"notes": [{"title": "...", "content": "..."}]}

:class:`StreamSegmenter` consumes that stream one chunk at a time and keeps
a live view of the thought and dialogue channels for progressive rendering.
All marker detection runs against the cumulative buffer, so a marker split
across two chunks is still found once its second half arrives.
"""

from __future__ import annotations

import logging
import re

from draftstream.exceptions import SegmenterStateError
from draftstream.models.segments import FinalResult, Note, PartialView, SegmentMode

from .extractor import extract_records

logger = logging.getLogger(__name__)

THOUGHT_START = "[[THOUGHT]]"
THOUGHT_END = "[[/THOUGHT]]"
DATA_MARKER = "###MATRIX_DATA_START###"

_THOUGHT_SPAN_RE = re.compile(re.escape(THOUGHT_START) + r".*?" + re.escape(THOUGHT_END), re.DOTALL)


def strip_thought_spans(text: str) -> str:
    """Remove every complete ``[[THOUGHT]]...[[/THOUGHT]]`` span from ``text``."""
    return _THOUGHT_SPAN_RE.sub("", text)


class StreamSegmenter:
    """Splits one generation stream into thought, dialogue and data channels.

    One instance serves exactly one generation request: call :meth:`ingest`
    once per chunk in arrival order, then :meth:`finalize` once.  The
    instance owns no external resources, so an aborted stream is handled by
    simply dropping it.

    Live views are not buffered: while a marker is only half received its
    characters can briefly show up in the dialogue channel, and they drop
    out again on the next chunk.

    Usage::

        segmenter = StreamSegmenter()
        for chunk in chunks:
            view = segmenter.ingest(chunk)
            render(view.dialogue_text, view.thought_text)
        result = segmenter.finalize()
    """

    __slots__ = (
        "_data_payload_raw",
        "_dialogue_text",
        "_finalized",
        "_mode",
        "_parsed_records",
        "_raw_buffer",
        "_records_key",
        "_thought_text",
    )

    def __init__(self, records_key: str = "notes") -> None:
        self._records_key = records_key
        self._raw_buffer = ""
        self._mode = SegmentMode.PRE_THOUGHT
        self._thought_text = ""
        self._dialogue_text = ""
        self._data_payload_raw: str | None = None
        self._parsed_records: list[Note] | None = None
        self._finalized = False

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def mode(self) -> SegmentMode:
        return self._mode

    @property
    def raw_buffer(self) -> str:
        return self._raw_buffer

    @property
    def thought_text(self) -> str:
        return self._thought_text

    @property
    def dialogue_text(self) -> str:
        return self._dialogue_text

    @property
    def data_payload_raw(self) -> str | None:
        return self._data_payload_raw

    @property
    def parsed_records(self) -> list[Note] | None:
        """Extracted notes, or ``None`` until :meth:`finalize` has run."""
        return None if self._parsed_records is None else list(self._parsed_records)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    # ------------------------------------------------------------------
    # Streaming
    # ------------------------------------------------------------------

    def ingest(self, chunk: str) -> PartialView:
        """Append ``chunk`` and return the current live view.

        Never fails for any input text.

        Raises:
            SegmenterStateError: If called after :meth:`finalize`.
        """
        if self._finalized:
            msg = "ingest() called after finalize(); start a new StreamSegmenter"
            raise SegmenterStateError(msg)

        self._raw_buffer += chunk
        buffer = self._raw_buffer

        if self._mode == SegmentMode.IN_DATA:
            data_index = buffer.find(DATA_MARKER)
            self._data_payload_raw = buffer[data_index + len(DATA_MARKER) :]
            return self._view()

        data_index = buffer.find(DATA_MARKER)
        prose = buffer if data_index == -1 else buffer[:data_index]

        if self._mode == SegmentMode.PRE_THOUGHT and THOUGHT_START in prose:
            self._transition(SegmentMode.IN_THOUGHT)

        if self._mode == SegmentMode.IN_THOUGHT:
            start = prose.find(THOUGHT_START)
            body_start = start + len(THOUGHT_START)
            end = prose.find(THOUGHT_END, body_start)
            if end == -1:
                self._thought_text = prose[body_start:].replace(THOUGHT_START, "")
                self._dialogue_text = prose[:start]
            else:
                self._thought_text = prose[body_start:end].replace(THOUGHT_START, "")
                self._transition(SegmentMode.POST_THOUGHT)

        if self._mode in (SegmentMode.PRE_THOUGHT, SegmentMode.POST_THOUGHT):
            self._dialogue_text = strip_thought_spans(prose)

        if data_index != -1:
            self._data_payload_raw = buffer[data_index + len(DATA_MARKER) :]
            self._transition(SegmentMode.IN_DATA)

        return self._view()

    def finalize(self) -> FinalResult:
        """Recompute all channels from the complete buffer and extract notes.

        A missing or unrecoverable data block yields an empty ``records``
        list; nothing is raised for the shape of the model output.

        Raises:
            SegmenterStateError: If called more than once.
        """
        if self._finalized:
            msg = "finalize() may only be called once per StreamSegmenter"
            raise SegmenterStateError(msg)
        self._finalized = True

        buffer = self._raw_buffer
        data_index = buffer.find(DATA_MARKER)
        if data_index == -1:
            prose, payload = buffer, None
        else:
            prose = buffer[:data_index]
            payload = buffer[data_index + len(DATA_MARKER) :]

        thought = ""
        start = prose.find(THOUGHT_START)
        if start != -1:
            end = prose.find(THOUGHT_END, start + len(THOUGHT_START))
            if end != -1:
                thought = prose[start + len(THOUGHT_START) : end].replace(THOUGHT_START, "")

        self._thought_text = thought.strip()
        self._dialogue_text = strip_thought_spans(prose).strip()
        self._data_payload_raw = payload

        if payload is None:
            records: list[Note] = []
        else:
            records = extract_records(payload.strip(), key=self._records_key)
        self._parsed_records = records

        logger.debug(
            "Finalized stream: %d chars, %d record(s), data marker %s",
            len(buffer),
            len(records),
            "present" if payload is not None else "absent",
        )
        return FinalResult(
            dialogue_text=self._dialogue_text,
            thought_text=self._thought_text,
            records=records,
            data_payload_raw=payload,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _transition(self, mode: SegmentMode) -> None:
        logger.debug("Segmenter phase %s -> %s", self._mode, mode)
        self._mode = mode

    def _view(self) -> PartialView:
        return PartialView(dialogue_text=self._dialogue_text, thought_text=self._thought_text)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(mode={self._mode.value!r}, "
            f"buffered={len(self._raw_buffer)}, finalized={self._finalized})"
        )
