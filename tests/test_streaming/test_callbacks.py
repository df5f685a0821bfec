"""Tests for draftstream.streaming.callbacks."""

from __future__ import annotations

import logging

import pytest

from draftstream.models.segments import FinalResult, PartialView
from draftstream.streaming.callbacks import (
    StreamCallback,
    TokenCallback,
    fire_callbacks,
    normalize_callbacks,
)


class PartialOnly:
    def __init__(self) -> None:
        self.views: list[PartialView] = []

    def on_partial(self, view: PartialView) -> None:
        self.views.append(view)


class TestNormalizeCallbacks:
    def test_none(self) -> None:
        assert normalize_callbacks(None) == []

    def test_plain_function_is_wrapped(self) -> None:
        [cb] = normalize_callbacks(lambda d, t: None)
        assert isinstance(cb, TokenCallback)
        assert isinstance(cb, StreamCallback)

    def test_object_with_some_methods_is_kept(self) -> None:
        partial_only = PartialOnly()
        assert normalize_callbacks(partial_only) == [partial_only]

    def test_sequence_of_mixed_callbacks(self) -> None:
        partial_only = PartialOnly()
        result = normalize_callbacks([partial_only, lambda d, t: None])
        assert result[0] is partial_only
        assert isinstance(result[1], TokenCallback)


class TestFireCallbacks:
    def test_missing_methods_are_skipped(self) -> None:
        partial_only = PartialOnly()
        fire_callbacks([partial_only], "on_complete", FinalResult())
        fire_callbacks([partial_only], "on_partial", PartialView(dialogue_text="x"))
        assert partial_only.views == [PartialView(dialogue_text="x")]

    def test_exceptions_are_logged_not_raised(self, caplog: pytest.LogCaptureFixture) -> None:
        def boom(dialogue: str, thought: str) -> None:
            raise ValueError("boom")

        logger = logging.getLogger("test.callbacks")
        with caplog.at_level(logging.WARNING, logger="test.callbacks"):
            fire_callbacks([TokenCallback(boom)], "on_partial", PartialView(), logger=logger)
        assert "on_partial failed" in caplog.text

    def test_token_callback_forwards_channels(self) -> None:
        frames: list[tuple[str, str]] = []
        cb = TokenCallback(lambda d, t: frames.append((d, t)))
        cb.on_partial(PartialView(dialogue_text="d", thought_text="t"))
        cb.on_complete(FinalResult(dialogue_text="D", thought_text="T"))
        assert frames == [("d", "t"), ("D", "T")]
