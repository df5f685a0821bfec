"""Segmentation models for streamed note generation."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class SegmentMode(StrEnum):
    """Parse phase of a stream segmenter.

    Phases only move forward.  ``POST_THOUGHT`` is the last non-data phase
    and never regresses to ``IN_THOUGHT``.
    """

    PRE_THOUGHT = "pre_thought"
    IN_THOUGHT = "in_thought"
    POST_THOUGHT = "post_thought"
    IN_DATA = "in_data"


class Note(BaseModel):
    """One generated note candidate recovered from the data payload."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = ""
    content: str = ""


class PartialView(BaseModel):
    """Snapshot of the visible channels after a single ``ingest`` call."""

    model_config = ConfigDict(frozen=True)

    dialogue_text: str = ""
    thought_text: str = ""


class FinalResult(BaseModel):
    """Definitive segmentation of a completed stream.

    An empty ``records`` list means nothing usable was extracted, not that
    zero notes were intended.  ``data_payload_raw`` is ``None`` when the
    stream never contained the data marker.
    """

    model_config = ConfigDict(frozen=True)

    dialogue_text: str = ""
    thought_text: str = ""
    records: list[Note] = Field(default_factory=list)
    data_payload_raw: str | None = None
