"""Streaming segmentation, payload extraction and SSE decoding."""

from .callbacks import StreamCallback, TokenCallback
from .extractor import ExtractionResult, extract_json_object, extract_records, strip_code_fences
from .segmenter import DATA_MARKER, THOUGHT_END, THOUGHT_START, StreamSegmenter
from .session import GenerationSession, PersonaStream, parse_persona
from .sse import SSEDecoder, extract_delta_text

__all__ = [
    "DATA_MARKER",
    "THOUGHT_END",
    "THOUGHT_START",
    "ExtractionResult",
    "GenerationSession",
    "PersonaStream",
    "SSEDecoder",
    "StreamCallback",
    "StreamSegmenter",
    "TokenCallback",
    "extract_delta_text",
    "extract_json_object",
    "extract_records",
    "parse_persona",
    "strip_code_fences",
]
