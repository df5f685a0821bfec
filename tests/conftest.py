"""Shared fixtures for draftstream tests."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Iterable
from pathlib import Path

import pytest

from draftstream.config import ProviderConfig

THREE_CHUNK_STREAM: list[str] = [
    "[[THOUGHT]]plan the post[[/THOUGHT]]",
    "Great title here.\n\nBody text.",
    '###MATRIX_DATA_START###{"notes":[{"title":"Great title here","content":"Body text."}]}',
]
"""The canonical thought/dialogue/data stream, one phase per chunk."""


def sse_line(text: str, flavor: str = "gemini") -> str:
    """Render one text delta as an SSE ``data:`` frame (terminated by a blank line)."""
    if flavor == "gemini":
        payload = {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}
    else:
        payload = {"choices": [{"index": 0, "delta": {"content": text}}]}
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


def sse_stream(deltas: Iterable[str], flavor: str = "gemini", done: bool = True) -> str:
    """Render a whole SSE transcript for ``deltas``."""
    body = "".join(sse_line(d, flavor) for d in deltas)
    if done:
        body += "data: [DONE]\n\n"
    return body


def split_every(text: str | bytes, size: int) -> list:
    """Split ``text`` into consecutive pieces of at most ``size`` items."""
    return [text[i : i + size] for i in range(0, len(text), size)]


async def aiter_chunks(chunks: Iterable[str | bytes]) -> AsyncIterator[str | bytes]:
    """Async iterator over ``chunks`` for exercising the async drivers."""
    for chunk in chunks:
        yield chunk


@pytest.fixture
def full_stream_text() -> str:
    return "".join(THREE_CHUNK_STREAM)


@pytest.fixture
def gemini_config() -> ProviderConfig:
    return ProviderConfig(
        api_key="AIza-test-key",
        base_url="https://generativelanguage.googleapis.com/",
        model="gemini-2.0-flash",
    )


@pytest.fixture
def openai_config() -> ProviderConfig:
    return ProviderConfig(
        api_key="sk-test-key",
        base_url="https://api.example.com",
        model="gpt-4o-mini",
    )


@pytest.fixture
def recorded_stream(tmp_path: Path, full_stream_text: str) -> Path:
    path = tmp_path / "stream.txt"
    path.write_text(full_stream_text, encoding="utf-8")
    return path


@pytest.fixture
def recorded_sse_stream(tmp_path: Path) -> Path:
    path = tmp_path / "stream.sse"
    path.write_text(sse_stream(THREE_CHUNK_STREAM), encoding="utf-8")
    return path
