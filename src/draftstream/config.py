"""Explicit configuration values for providers and generation runs."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FidelityMode(StrEnum):
    """How closely generated notes must stick to the reference material."""

    STRICT = "strict"
    CREATIVE = "creative"


class ProviderConfig(BaseModel):
    """Credentials and endpoint for the hosted LLM.

    Passed explicitly to whatever builds a request; nothing in draftstream
    reads credentials from the environment.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    base_url: str = "https://generativelanguage.googleapis.com"
    model: str = "gemini-2.0-flash"

    @field_validator("api_key", "base_url", "model")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    def __repr__(self) -> str:
        masked = f"{self.api_key[:4]}***" if self.api_key else ""
        return (
            f"{type(self).__name__}(api_key={masked!r}, "
            f"base_url={self.base_url!r}, model={self.model!r})"
        )


class GenerationSettings(BaseModel):
    """Per-request knobs for note generation."""

    model_config = ConfigDict(frozen=True)

    fidelity: FidelityMode = FidelityMode.CREATIVE
    count: int = Field(default=1, ge=1)
    word_count_limit: int = Field(default=400, ge=1)

    @property
    def temperature(self) -> float:
        return 0.2 if self.fidelity == FidelityMode.STRICT else 0.9
