"""Best-effort recovery of a JSON object from untrusted model output.

The generator is asked to emit a single JSON object after the data marker,
but in practice it may wrap it in code fences or surround it with prose.
:func:`extract_json_object` runs an ordered fallback ladder and reports
which stage succeeded instead of raising.

Known limitation: the ``brace_scan`` stage slices from the first ``{`` to
the last ``}``.  Trailing prose that itself contains braces makes that
slice invalid JSON and the payload is reported as unrecoverable.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict

from draftstream.models.segments import Note

logger = logging.getLogger(__name__)

ExtractionStage: TypeAlias = Literal["direct", "fenced", "brace_scan"]

_FENCE_LANG_RE = re.compile(r"```json", re.IGNORECASE)


class ExtractionResult(BaseModel):
    """Tagged outcome of :func:`extract_json_object`.

    ``value`` is set only when ``ok`` is true; ``error`` carries the last
    parse failure otherwise and is intended for logging.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    stage: ExtractionStage | None = None
    value: dict[str, Any] | None = None
    error: str | None = None


def _try_parse(text: str) -> tuple[dict[str, Any] | None, str | None]:
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError) as exc:
        return None, str(exc)
    if not isinstance(parsed, dict):
        return None, f"expected a JSON object, got {type(parsed).__name__}"
    return parsed, None


def strip_code_fences(text: str) -> str:
    """Remove ```` ```json ```` and ```` ``` ```` tokens and trim."""
    return _FENCE_LANG_RE.sub("", text).replace("```", "").strip()


def extract_json_object(text: str | None) -> ExtractionResult:
    """Recover one JSON object from ``text``.

    Stages, each tried only if the previous one failed:

    1. ``direct`` -- parse the trimmed text.
    2. ``fenced`` -- strip code-fence tokens, trim, parse.
    3. ``brace_scan`` -- parse the slice from the first ``{`` to the last
       ``}`` inclusive.

    Never raises; an unrecoverable payload yields ``ok=False``.
    """
    if not text or not text.strip():
        return ExtractionResult(ok=False, error="empty payload")

    candidates: list[tuple[ExtractionStage, str]] = [
        ("direct", text.strip()),
        ("fenced", strip_code_fences(text)),
    ]
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        candidates.append(("brace_scan", text[start : end + 1]))

    error: str | None = None
    for stage, candidate in candidates:
        value, error = _try_parse(candidate)
        if value is not None:
            logger.debug("Recovered JSON object via %s stage", stage)
            return ExtractionResult(ok=True, stage=stage, value=value)

    return ExtractionResult(ok=False, error=error)


def records_from_object(obj: dict[str, Any], key: str = "notes") -> list[Note]:
    """Build notes from ``obj[key]``, skipping entries that are not note-shaped."""
    raw = obj.get(key)
    if not isinstance(raw, list):
        logger.warning("Data payload has no %r list (got %s)", key, type(raw).__name__)
        return []

    notes: list[Note] = []
    for entry in raw:
        if not isinstance(entry, dict) or not ("title" in entry or "content" in entry):
            logger.debug("Skipping non-note entry in data payload: %r", entry)
            continue
        notes.append(
            Note(
                title=str(entry.get("title") or ""),
                content=str(entry.get("content") or ""),
            )
        )
    return notes


def extract_records(payload: str | None, key: str = "notes") -> list[Note]:
    """Extract the note list from a raw data payload.

    Every failure collapses to an empty list; the detail is logged only.
    """
    result = extract_json_object(payload)
    if not result.ok or result.value is None:
        logger.warning("Could not recover data payload: %s", result.error)
        return []
    return records_from_object(result.value, key=key)
