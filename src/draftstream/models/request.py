"""Provider-neutral request models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class TextPart(BaseModel):
    """A text segment of a user message."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str

    @classmethod
    def reference(cls, name: str, text: str) -> TextPart:
        """Wrap a reference document so the model sees its name."""
        return cls(text=f"Reference [{name}]:\n{text}")


class InlineDataPart(BaseModel):
    """Base64 inline binary data, typically an image."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["inline_data"] = "inline_data"
    mime_type: str
    data: str

    @classmethod
    def from_data_url(cls, url: str, default_mime_type: str = "image/png") -> InlineDataPart:
        """Build a part from a ``data:<mime>;base64,<payload>`` URL or a bare payload."""
        if url.startswith("data:") and "," in url:
            header, payload = url.split(",", 1)
            mime_type = header[len("data:") :].split(";", 1)[0] or default_mime_type
            return cls(mime_type=mime_type, data=payload)
        return cls(mime_type=default_mime_type, data=url)

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


Part = TextPart | InlineDataPart


class GenerationRequest(BaseModel):
    """A single-turn generation request before provider formatting."""

    system_instruction: str | None = None
    parts: list[Part] = Field(default_factory=list)
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_output_tokens: int | None = Field(default=None, ge=1)
    response_mime_type: str | None = None


class ProviderRequest(BaseModel):
    """A fully rendered HTTP request ready for any HTTP client."""

    model_config = ConfigDict(frozen=True)

    method: Literal["POST"] = "POST"
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: dict[str, Any] = Field(default_factory=dict)
    stream: bool = False

    def __repr__(self) -> str:
        # URLs may carry the API key as a query parameter.
        base = self.url.split("?", 1)[0]
        return f"{type(self).__name__}(url={base!r}, stream={self.stream})"
