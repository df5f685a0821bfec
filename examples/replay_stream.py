"""Replay a simulated SSE generation stream with live rendering.

Shows the full request/stream cycle without touching the network:

1. Build a provider request for an OpenAI-compatible gateway.
2. Feed a fake SSE byte stream through a GenerationSession.
3. Print live dialogue/thought frames and the final notes.

Run with: python examples/replay_stream.py
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator

from draftstream import (
    DATA_MARKER,
    DEFAULT_PERSONA,
    GenerationSession,
    GenerationSettings,
    ProviderConfig,
    build_generation_request,
    build_request,
)

DELTAS = [
    "[[THOUGHT]]Keep it under 120 words,",
    " lead with the hook.[[/THOUGHT]]",
    "3 sunscreen mistakes you are probably making\n\n",
    "1. Not reapplying after swimming...",
    DATA_MARKER[:10],
    DATA_MARKER[10:],
    json.dumps(
        {"notes": [{"title": "3 sunscreen mistakes", "content": "1. Not reapplying..."}]}
    ),
]


async def fake_transport() -> AsyncIterator[bytes]:
    for delta in DELTAS:
        frame = {"choices": [{"delta": {"content": delta}}]}
        yield f"data: {json.dumps(frame)}\n\n".encode()
        await asyncio.sleep(0.05)
    yield b"data: [DONE]\n\n"


def render(dialogue: str, thought: str) -> None:
    print(f"\r[thinking: {thought[-40:]!r}] [draft: {dialogue[-40:]!r}]", flush=True)


async def main() -> None:
    config = ProviderConfig(api_key="sk-demo", base_url="https://gateway.example.com/v1", model="demo")
    settings = GenerationSettings(word_count_limit=120)
    request = build_generation_request(
        "Write about sunscreen habits", DEFAULT_PERSONA.writer_persona_prompt, settings
    )
    provider_request = build_request(config, request, stream=True)
    print(f"Would POST to {provider_request.url}")

    result = await GenerationSession(render).arun(fake_transport())

    print("\n=== THOUGHT ===")
    print(result.thought_text)
    print("\n=== DIALOGUE ===")
    print(result.dialogue_text)
    print(f"\n=== NOTES ({len(result.records)}) ===")
    for note in result.records:
        print(f"- {note.title}: {note.content}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
