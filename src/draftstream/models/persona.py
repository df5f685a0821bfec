"""Writer persona models."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

_HEADING_RE = re.compile(r"^#+\s*", re.MULTILINE)

FALLBACK_PROMPT_CHARS = 2000


def clean_markdown(text: str) -> str:
    """Strip bold/italic asterisks, backticks and heading marks, then trim."""
    if not text:
        return ""
    text = text.replace("**", "").replace("*", "").replace("`", "")
    return _HEADING_RE.sub("", text).strip()


class PersonaAnalysis(BaseModel):
    """A reusable writing style extracted from sample posts.

    Accepts the camelCase keys the analysis prompt asks the model for
    (``emojiDensity``, ``writerPersonaPrompt``) as well as the snake_case
    field names.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    tone: str
    keywords: list[str] = Field(default_factory=list)
    emoji_density: str = Field(default="", alias="emojiDensity")
    structure: str = ""
    writer_persona_prompt: str = Field(default="", alias="writerPersonaPrompt")
    tags: list[str] = Field(default_factory=list)
    category: str | None = None
    description: str | None = None

    @field_validator("tone", "structure", "emoji_density", mode="before")
    @classmethod
    def _clean_summary_fields(cls, value: object) -> object:
        if isinstance(value, str):
            return clean_markdown(value)
        return value

    @field_validator("keywords", "tags", mode="before")
    @classmethod
    def _coerce_string_list(cls, value: object) -> object:
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [str(v) for v in value if v is not None]
        return value


def fallback_persona(raw_text: str) -> PersonaAnalysis:
    """Persona used when the analysis stream yields no usable JSON.

    The raw model output is kept (truncated) as the writer prompt so the
    user still has something to edit.
    """
    return PersonaAnalysis(
        tone="Custom style (auto-extracted)",
        keywords=["extracted"],
        emoji_density="unrecognized",
        structure="unrecognized",
        writer_persona_prompt=raw_text[:FALLBACK_PROMPT_CHARS] or "Extraction failed, please retry.",
    )
