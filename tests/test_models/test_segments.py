"""Tests for draftstream.models.segments."""

from __future__ import annotations

import pydantic
import pytest

from draftstream.models.segments import FinalResult, Note, PartialView, SegmentMode


class TestSegmentMode:
    def test_values(self) -> None:
        assert [m.value for m in SegmentMode] == [
            "pre_thought",
            "in_thought",
            "post_thought",
            "in_data",
        ]

    def test_is_str(self) -> None:
        assert SegmentMode.IN_DATA == "in_data"


class TestNote:
    def test_defaults(self) -> None:
        note = Note()
        assert note.title == ""
        assert note.content == ""

    def test_extra_keys_ignored(self) -> None:
        note = Note.model_validate({"title": "a", "content": "b", "score": 3})
        assert note.model_dump() == {"title": "a", "content": "b"}

    def test_frozen(self) -> None:
        note = Note(title="a")
        with pytest.raises(pydantic.ValidationError):
            note.title = "b"  # type: ignore[misc]


class TestPartialView:
    def test_default_construction(self) -> None:
        view = PartialView()
        assert view.dialogue_text == ""
        assert view.thought_text == ""

    def test_equality_by_value(self) -> None:
        assert PartialView(dialogue_text="x") == PartialView(dialogue_text="x", thought_text="")


class TestFinalResult:
    def test_default_construction(self) -> None:
        result = FinalResult()
        assert result.records == []
        assert result.data_payload_raw is None

    def test_serialization_roundtrip(self) -> None:
        result = FinalResult(
            dialogue_text="d",
            thought_text="t",
            records=[Note(title="a", content="b")],
            data_payload_raw="{}",
        )
        restored = FinalResult.model_validate_json(result.model_dump_json())
        assert restored == result

    def test_model_dump_keys(self) -> None:
        assert set(FinalResult().model_dump()) == {
            "dialogue_text",
            "thought_text",
            "records",
            "data_payload_raw",
        }
