"""Core data models for draftstream."""

from .persona import PersonaAnalysis, clean_markdown, fallback_persona
from .request import GenerationRequest, InlineDataPart, Part, ProviderRequest, TextPart
from .segments import FinalResult, Note, PartialView, SegmentMode

__all__ = [
    "FinalResult",
    "GenerationRequest",
    "InlineDataPart",
    "Note",
    "Part",
    "PartialView",
    "PersonaAnalysis",
    "ProviderRequest",
    "SegmentMode",
    "TextPart",
    "clean_markdown",
    "fallback_persona",
]
