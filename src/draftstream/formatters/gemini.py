"""Gemini ``generateContent`` API formatter."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from draftstream.config import ProviderConfig
from draftstream.models.request import GenerationRequest, InlineDataPart, ProviderRequest

from .utils import require_api_key

STREAM_ENDPOINT = "streamGenerateContent?alt=sse"
UNARY_ENDPOINT = "generateContent"


class GeminiFormatter:
    """Formats requests for the Gemini REST API.

    The API key travels as a ``key`` query parameter.  A ``base_url`` that
    already points at a specific model (contains ``/models/``) is used as
    is; otherwise the versioned model endpoint is appended.
    """

    @property
    def provider(self) -> str:
        return "gemini"

    def format(
        self, config: ProviderConfig, request: GenerationRequest, *, stream: bool = False
    ) -> ProviderRequest:
        api_key = require_api_key(config)
        base = config.base_url.rstrip("/")
        if "/models/" in base:
            url = base
        else:
            endpoint = STREAM_ENDPOINT if stream else UNARY_ENDPOINT
            url = f"{base}/v1beta/models/{config.model}:{endpoint}"
        separator = "&" if "?" in url else "?"
        url = f"{url}{separator}key={quote(api_key, safe='')}"

        return ProviderRequest(
            url=url,
            headers={"Content-Type": "application/json"},
            body=self.build_body(request),
            stream=stream,
        )

    def build_body(self, request: GenerationRequest) -> dict[str, Any]:
        """Render the JSON body in Gemini ``contents`` form."""
        parts: list[dict[str, Any]] = []
        for part in request.parts:
            if isinstance(part, InlineDataPart):
                parts.append({"inlineData": {"mimeType": part.mime_type, "data": part.data}})
            else:
                parts.append({"text": part.text})

        body: dict[str, Any] = {"contents": [{"role": "user", "parts": parts}]}
        if request.system_instruction:
            body["systemInstruction"] = {"parts": [{"text": request.system_instruction}]}

        generation_config: dict[str, Any] = {}
        if request.temperature is not None:
            generation_config["temperature"] = request.temperature
        if request.max_output_tokens is not None:
            generation_config["maxOutputTokens"] = request.max_output_tokens
        if request.response_mime_type:
            generation_config["responseMimeType"] = request.response_mime_type
        if generation_config:
            body["generationConfig"] = generation_config
        return body
