"""Custom exceptions for draftstream."""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "DraftStreamError",
    "FormatterError",
    "SegmenterStateError",
]


class DraftStreamError(Exception):
    """Base exception for all draftstream errors."""


class SegmenterStateError(DraftStreamError, RuntimeError):
    """Raised when a segmenter is used after it has been finalized."""


class ConfigurationError(DraftStreamError, ValueError):
    """Raised when a provider configuration is missing or invalid."""


class FormatterError(DraftStreamError):
    """Raised when a request cannot be rendered for a provider."""
