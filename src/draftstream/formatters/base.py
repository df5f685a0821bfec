"""Formatter protocol definition.

Any object with ``provider`` and ``format()`` matching this interface can
be used as a formatter -- no inheritance required (PEP 544 structural
subtyping).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from draftstream.config import ProviderConfig
from draftstream.models.request import GenerationRequest, ProviderRequest


@runtime_checkable
class Formatter(Protocol):
    """Protocol for provider request formatters.

    Formatters render a :class:`GenerationRequest` into the URL, headers
    and JSON body a specific LLM API expects.  They never send anything.
    """

    @property
    def provider(self) -> str:
        """Identifier for the target API (e.g., 'gemini', 'openai')."""
        ...

    def format(
        self, config: ProviderConfig, request: GenerationRequest, *, stream: bool = False
    ) -> ProviderRequest:
        """Render ``request`` for this provider."""
        ...
