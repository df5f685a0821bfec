"""draftstream: streaming segmentation toolkit for LLM-drafted social notes.

Streaming:
    StreamSegmenter, GenerationSession, PersonaStream, SSEDecoder,
    StreamCallback, TokenCallback, THOUGHT_START, THOUGHT_END, DATA_MARKER

Extraction:
    extract_json_object, extract_records, parse_persona, ExtractionResult

Requests & Prompts:
    build_request, GeminiFormatter, OpenAIFormatter, build_generation_request,
    build_persona_request, build_generation_instruction, DEFAULT_PERSONA

Configuration:
    ProviderConfig, GenerationSettings, FidelityMode

Models & Types:
    Note, PartialView, FinalResult, SegmentMode, PersonaAnalysis,
    GenerationRequest, ProviderRequest, TextPart, InlineDataPart

Exceptions:
    DraftStreamError, SegmenterStateError, ConfigurationError, FormatterError
"""

from importlib.metadata import PackageNotFoundError, version

from draftstream.config import FidelityMode, GenerationSettings, ProviderConfig
from draftstream.exceptions import (
    ConfigurationError,
    DraftStreamError,
    FormatterError,
    SegmenterStateError,
)
from draftstream.formatters import GeminiFormatter, OpenAIFormatter, build_request
from draftstream.models import (
    FinalResult,
    GenerationRequest,
    InlineDataPart,
    Note,
    PartialView,
    PersonaAnalysis,
    ProviderRequest,
    SegmentMode,
    TextPart,
)
from draftstream.prompts import (
    DEFAULT_PERSONA,
    build_generation_instruction,
    build_generation_request,
    build_persona_request,
)
from draftstream.streaming import (
    DATA_MARKER,
    THOUGHT_END,
    THOUGHT_START,
    ExtractionResult,
    GenerationSession,
    PersonaStream,
    SSEDecoder,
    StreamCallback,
    StreamSegmenter,
    TokenCallback,
    extract_json_object,
    extract_records,
    parse_persona,
)

try:
    __version__ = version("draftstream")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "DATA_MARKER",
    "DEFAULT_PERSONA",
    "THOUGHT_END",
    "THOUGHT_START",
    "ConfigurationError",
    "DraftStreamError",
    "ExtractionResult",
    "FidelityMode",
    "FinalResult",
    "FormatterError",
    "GeminiFormatter",
    "GenerationRequest",
    "GenerationSession",
    "GenerationSettings",
    "InlineDataPart",
    "Note",
    "OpenAIFormatter",
    "PartialView",
    "PersonaAnalysis",
    "PersonaStream",
    "ProviderConfig",
    "ProviderRequest",
    "SSEDecoder",
    "SegmentMode",
    "SegmenterStateError",
    "StreamCallback",
    "StreamSegmenter",
    "TextPart",
    "TokenCallback",
    "build_generation_instruction",
    "build_generation_request",
    "build_persona_request",
    "build_request",
    "extract_json_object",
    "extract_records",
    "parse_persona",
]
