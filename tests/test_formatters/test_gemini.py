"""Tests for draftstream.formatters.gemini."""

from __future__ import annotations

import pytest

from draftstream.config import ProviderConfig
from draftstream.exceptions import ConfigurationError
from draftstream.formatters.gemini import GeminiFormatter
from draftstream.models.request import GenerationRequest, InlineDataPart, TextPart


class TestGeminiUrl:
    """URL construction for versioned and model-pinned base URLs."""

    def test_stream_url(self, gemini_config: ProviderConfig) -> None:
        request = GeminiFormatter().format(gemini_config, GenerationRequest(), stream=True)
        assert request.url == (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "gemini-2.0-flash:streamGenerateContent?alt=sse&key=AIza-test-key"
        )
        assert request.stream is True

    def test_unary_url(self, gemini_config: ProviderConfig) -> None:
        request = GeminiFormatter().format(gemini_config, GenerationRequest())
        assert request.url.endswith("gemini-2.0-flash:generateContent?key=AIza-test-key")

    def test_model_pinned_base_url_used_as_is(self) -> None:
        config = ProviderConfig(
            api_key="k",
            base_url="https://proxy.example.com/v1beta/models/gemini-pro:streamGenerateContent?alt=sse",
        )
        request = GeminiFormatter().format(config, GenerationRequest(), stream=True)
        assert request.url == (
            "https://proxy.example.com/v1beta/models/gemini-pro:streamGenerateContent"
            "?alt=sse&key=k"
        )

    def test_key_is_url_encoded(self) -> None:
        config = ProviderConfig(api_key="a/b+c")
        request = GeminiFormatter().format(config, GenerationRequest())
        assert request.url.endswith("key=a%2Fb%2Bc")

    def test_no_authorization_header(self, gemini_config: ProviderConfig) -> None:
        request = GeminiFormatter().format(gemini_config, GenerationRequest())
        assert request.headers == {"Content-Type": "application/json"}

    def test_missing_key_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            GeminiFormatter().format(ProviderConfig(), GenerationRequest())


class TestGeminiBody:
    def test_full_body(self) -> None:
        request = GenerationRequest(
            system_instruction="Be brief.",
            parts=[TextPart(text="hello"), InlineDataPart(mime_type="image/png", data="AA==")],
            temperature=0.4,
            max_output_tokens=100,
            response_mime_type="application/json",
        )
        assert GeminiFormatter().build_body(request) == {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": "hello"},
                        {"inlineData": {"mimeType": "image/png", "data": "AA=="}},
                    ],
                }
            ],
            "systemInstruction": {"parts": [{"text": "Be brief."}]},
            "generationConfig": {
                "temperature": 0.4,
                "maxOutputTokens": 100,
                "responseMimeType": "application/json",
            },
        }

    def test_optional_sections_omitted(self) -> None:
        body = GeminiFormatter().build_body(GenerationRequest(parts=[TextPart(text="x")]))
        assert set(body) == {"contents"}

    def test_provider_name(self) -> None:
        assert GeminiFormatter().provider == "gemini"
