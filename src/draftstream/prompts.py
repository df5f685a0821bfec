"""System instructions that make the model emit the stream protocol.

The generation instruction names the exact markers the
:class:`~draftstream.streaming.segmenter.StreamSegmenter` looks for, so the
two must change together.
"""

from __future__ import annotations

from collections.abc import Sequence

from draftstream.config import FidelityMode, GenerationSettings
from draftstream.models.persona import PersonaAnalysis
from draftstream.models.request import GenerationRequest, Part, TextPart
from draftstream.streaming.segmenter import DATA_MARKER, THOUGHT_END, THOUGHT_START

PERSONA_ANALYSIS_PROMPT = """\
You are a senior language analyst who specialises in social media content, in
particular the style of viral lifestyle notes.
Your task is to analyse the provided samples and extract a "Writer Persona".

Analyse along these dimensions:
1. **Tone and persona**: (e.g. aloof expert, friendly neighbour, witty critic, energetic founder).
2. **Catchphrases and frequent words**: recurring expressions and sentence-final particles.
3. **Punctuation and emoji density**: frequency, position (start/end of sentence) and preferred emoji.
4. **Structure**: paragraph length, line-break habits, separators (such as ------), list style.
5. **Emotional arc**: (e.g. anxiety -> relief, or high energy throughout).
6. **Title style**: (e.g. alarmist, numbered, emotional).

**Output format**:
Return one JSON object with this structure:
{
  "tone": "short summary",
  "keywords": ["tag1", "tag2"],
  "emojiDensity": "short summary",
  "structure": "short summary",
  "writerPersonaPrompt": "A detailed second-person instruction ('You are a ...') that tells an AI \
how to imitate this style exactly. It will be used as the system instruction for future generations."
}
"""

_PERSONA_JSON_SUFFIX = (
    "\n\nIMPORTANT: Return ONLY valid JSON. "
    "The 'tone' field MUST be concise (max 8 words). No Markdown."
)

_FIDELITY_CLAUSES = {
    FidelityMode.STRICT: (
        "[Professional / strict mode] Stay absolutely faithful to the reference material. "
        "Do not invent facts."
    ),
    FidelityMode.CREATIVE: (
        "[Creative / casual mode] Be inventive, make reasonable associations, "
        "add emotional colour and write conversationally."
    ),
}

DEFAULT_PERSONA = PersonaAnalysis(
    tone="Friendly, professional, internet-savvy",
    keywords=["game changer", "tried and tested", "save this"],
    emoji_density="Moderate, at the end of each paragraph",
    structure="Catchy title + practical body + closing hashtags",
    writer_persona_prompt=(
        "You are a professional lifestyle blogger.\n"
        "1. Tone: natural and warm, like chatting with a close friend.\n"
        "2. Layout: clear paragraphs decorated with emoji.\n"
        '3. Focus: stress "personal experience" and "honest impressions".\n'
        '4. Ending: invite interaction, e.g. "What would you like to see next?"'
    ),
)


def build_persona_instruction() -> str:
    """System instruction for a persona-analysis request."""
    return PERSONA_ANALYSIS_PROMPT + _PERSONA_JSON_SUFFIX


def build_persona_request_text(samples: str) -> str:
    """User message wrapping the writing samples to analyse."""
    return f"Here are my samples. Analyse the style and return JSON:\n\n{samples}"


def build_generation_instruction(persona_prompt: str, settings: GenerationSettings) -> str:
    """System instruction for note generation using the three-phase protocol.

    Parameters:
        persona_prompt: The persona's ``writer_persona_prompt``.
        settings: Fidelity mode, note count and per-note word limit.
    """
    limit = settings.word_count_limit
    return f"""\
You are a top-tier social media content expert.
Writer persona: {persona_prompt}
{_FIDELITY_CLAUSES[settings.fidelity]}

[Absolute rules - must be followed]
1. Language: match the language of the reference material.
2. **Length limit**: the body of each note (excluding title and tags) must stay \
within **{limit} words**.
   - Plan the length before writing.
   - If there is too much material, cut filler and keep only the essentials.
   - Any output longer than {limit} words counts as a failure.
3. Process:
   - First output your reasoning as {THOUGHT_START}...{THOUGHT_END} \
(plan how to keep the content within {limit} words)
   - Then output the body (plain text)
   - Finally output the data separator {DATA_MARKER} followed by JSON: \
{{ "notes": [ {{ "title": "...", "content": "..." }} ] }}

Number of notes: {settings.count}."""


def build_generation_request(
    context: str,
    persona_prompt: str,
    settings: GenerationSettings,
    references: Sequence[Part] = (),
) -> GenerationRequest:
    """Streaming note-generation request: the brief plus reference parts."""
    return GenerationRequest(
        system_instruction=build_generation_instruction(persona_prompt, settings),
        parts=[TextPart(text=context), *references],
        temperature=settings.temperature,
    )


def build_persona_request(samples: str) -> GenerationRequest:
    """Streaming persona-analysis request for the given writing samples."""
    return GenerationRequest(
        system_instruction=build_persona_instruction(),
        parts=[TextPart(text=build_persona_request_text(samples))],
        temperature=0.4,
        max_output_tokens=8192,
        response_mime_type="application/json",
    )


def build_ping_request() -> GenerationRequest:
    """Minimal request used to check that a provider configuration works."""
    return GenerationRequest(parts=[TextPart(text="ping")], max_output_tokens=5)
