"""Stream callback protocol and notification helpers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

from draftstream.models.segments import FinalResult, PartialView

TokenFn = Callable[[str, str], Any]
"""Plain ``on_token(dialogue_text, thought_text)`` render hook."""

_EVENT_METHODS = ("on_partial", "on_complete")


@runtime_checkable
class StreamCallback(Protocol):
    """Receives events while a generation stream is consumed.

    Implementations may define only the methods they care about; missing
    methods are skipped when events are fired.
    """

    def on_partial(self, view: PartialView) -> None: ...
    def on_complete(self, result: FinalResult) -> None: ...


class TokenCallback:
    """Adapts a plain ``on_token(dialogue, thought)`` function to :class:`StreamCallback`."""

    __slots__ = ("_fn",)

    def __init__(self, fn: TokenFn) -> None:
        self._fn = fn

    def on_partial(self, view: PartialView) -> None:
        self._fn(view.dialogue_text, view.thought_text)

    def on_complete(self, result: FinalResult) -> None:
        self._fn(result.dialogue_text, result.thought_text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._fn!r})"


def normalize_callbacks(
    callbacks: Sequence[StreamCallback | TokenFn] | StreamCallback | TokenFn | None,
) -> list[StreamCallback]:
    """Accept a single callback, a plain function or a sequence of either."""
    if callbacks is None:
        return []
    if isinstance(callbacks, Sequence):
        items = list(callbacks)
    else:
        items = [callbacks]
    return [TokenCallback(cb) if _is_token_fn(cb) else cb for cb in items]


def _is_token_fn(cb: object) -> bool:
    return callable(cb) and not any(hasattr(cb, m) for m in _EVENT_METHODS)


def fire_callbacks(
    callbacks: Sequence[Any],
    method: str,
    *args: Any,
    logger: logging.Logger | None = None,
) -> None:
    """Call ``method`` on every callback that defines it.

    A failing render hook must not abort the stream, so exceptions are
    logged at ``WARNING`` and otherwise dropped.
    """
    for cb in callbacks:
        fn = getattr(cb, method, None)
        if fn is None or not callable(fn):
            continue
        try:
            fn(*args)
        except Exception:
            if logger:
                logger.warning("Callback %r.%s failed", cb, method, exc_info=True)
