"""Request formatters for the supported LLM providers."""

from __future__ import annotations

from draftstream.config import ProviderConfig
from draftstream.exceptions import FormatterError
from draftstream.models.request import GenerationRequest, ProviderRequest

from .base import Formatter
from .gemini import GeminiFormatter
from .openai import OpenAIFormatter, chat_completions_url
from .utils import is_openai_compatible

_FORMATTERS: dict[str, type[GeminiFormatter] | type[OpenAIFormatter]] = {
    "gemini": GeminiFormatter,
    "openai": OpenAIFormatter,
}


def get_formatter(config: ProviderConfig, provider: str | None = None) -> Formatter:
    """Return the formatter for ``provider``, or detect it from ``config``.

    Raises:
        FormatterError: If ``provider`` names an unknown API.
    """
    if provider is None:
        provider = "openai" if is_openai_compatible(config) else "gemini"
    try:
        return _FORMATTERS[provider]()
    except KeyError:
        msg = f"Unknown provider {provider!r}; expected one of {sorted(_FORMATTERS)}"
        raise FormatterError(msg) from None


def build_request(
    config: ProviderConfig,
    request: GenerationRequest,
    *,
    stream: bool = False,
    provider: str | None = None,
) -> ProviderRequest:
    """Render ``request`` for the provider ``config`` points at.

    Raises:
        ConfigurationError: If ``config`` has no API key.
        FormatterError: If ``provider`` names an unknown API.
    """
    return get_formatter(config, provider).format(config, request, stream=stream)


__all__ = [
    "Formatter",
    "GeminiFormatter",
    "OpenAIFormatter",
    "build_request",
    "chat_completions_url",
    "get_formatter",
    "is_openai_compatible",
]
