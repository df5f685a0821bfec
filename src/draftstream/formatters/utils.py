"""Internal utilities shared across formatter implementations.

These helpers are *not* part of the public API and should not be imported
outside this package.
"""

from __future__ import annotations

from draftstream.config import ProviderConfig
from draftstream.exceptions import ConfigurationError

_OPENAI_URL_HINTS: tuple[str, ...] = ("vectorengine", "openai")
"""Base-URL fragments that identify an OpenAI-compatible gateway."""


def require_api_key(config: ProviderConfig) -> str:
    if not config.api_key:
        msg = "AI API key is not configured; ask an administrator to set it"
        raise ConfigurationError(msg)
    return config.api_key


def is_openai_compatible(config: ProviderConfig) -> bool:
    """Whether ``config`` targets an OpenAI-style gateway rather than Gemini.

    ``sk-`` keys and base URLs mentioning a known gateway select the
    OpenAI wire format.
    """
    if config.api_key.startswith("sk-"):
        return True
    base_url = config.base_url.lower()
    return any(hint in base_url for hint in _OPENAI_URL_HINTS)
