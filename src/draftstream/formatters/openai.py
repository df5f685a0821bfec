"""OpenAI-compatible Chat Completions API formatter."""

from __future__ import annotations

from typing import Any

from draftstream.config import ProviderConfig
from draftstream.models.request import GenerationRequest, InlineDataPart, ProviderRequest

from .utils import require_api_key

CHAT_COMPLETIONS_PATH = "/v1/chat/completions"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 4096


def chat_completions_url(base_url: str) -> str:
    """Normalize ``base_url`` so it ends in ``/v1/chat/completions``."""
    url = base_url.rstrip("/")
    if url.endswith(CHAT_COMPLETIONS_PATH):
        return url
    if url.endswith("/v1"):
        return url + "/chat/completions"
    return url + CHAT_COMPLETIONS_PATH


class OpenAIFormatter:
    """Formats requests for OpenAI-compatible gateways.

    Produces a body with:
    - "messages": an optional system message followed by one user message
    - "model", "stream", "temperature", "max_tokens"

    A user message made of a single text part is sent as a plain string;
    otherwise it becomes a list of ``text`` / ``image_url`` content parts.
    """

    @property
    def provider(self) -> str:
        return "openai"

    def format(
        self, config: ProviderConfig, request: GenerationRequest, *, stream: bool = False
    ) -> ProviderRequest:
        api_key = require_api_key(config)
        body = self.build_body(request)
        body["model"] = config.model
        body["stream"] = stream
        return ProviderRequest(
            url=chat_completions_url(config.base_url),
            headers={"Content-Type": "application/json", "Authorization": f"Bearer {api_key}"},
            body=body,
            stream=stream,
        )

    def build_body(self, request: GenerationRequest) -> dict[str, Any]:
        messages: list[dict[str, Any]] = []
        if request.system_instruction:
            messages.append({"role": "system", "content": request.system_instruction})

        content_parts: list[dict[str, Any]] = []
        for part in request.parts:
            if isinstance(part, InlineDataPart):
                content_parts.append({"type": "image_url", "image_url": {"url": part.data_url}})
            else:
                content_parts.append({"type": "text", "text": part.text})

        content: str | list[dict[str, Any]] = content_parts
        if len(content_parts) == 1 and content_parts[0]["type"] == "text":
            content = content_parts[0]["text"]
        messages.append({"role": "user", "content": content})

        return {
            "messages": messages,
            "temperature": (
                DEFAULT_TEMPERATURE if request.temperature is None else request.temperature
            ),
            "max_tokens": request.max_output_tokens or DEFAULT_MAX_TOKENS,
        }
