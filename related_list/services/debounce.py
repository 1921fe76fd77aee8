"""Cancelable one-shot timers and the debounced search term."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class CancelableTimer:
    """One-shot timer on the running event loop.

    ``start`` replaces any pending fire, ``cancel`` drops it, and the callback runs
    at most once per ``start``. Callback failures are logged here so they never reach
    the loop's default exception handler.
    """

    def __init__(self, name: str = "timer") -> None:
        self._name = name
        self._handle: asyncio.TimerHandle | None = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def start(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        self.cancel()
        self._generation += 1
        generation = self._generation
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(max(delay_seconds, 0.0), self._fire, generation, callback)

    def cancel(self) -> bool:
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _fire(self, generation: int, callback: Callable[[], None]) -> None:
        # Drop stale fires.
        if generation != self._generation or self._handle is None:
            return
        self._handle = None
        try:
            callback()
        except Exception:
            logger.exception("related_list.timer_callback_failed timer=%s", self._name)


@dataclass(slots=True)
class SearchState:
    """Raw keystroke value and the debounce-settled committed term."""

    raw_term: str = ""
    committed_term: str = ""


class SearchDebouncer:
    """Turns keystrokes into a rate-limited committed search term (last keystroke wins)."""

    def __init__(self, on_commit: Callable[[str], None], *, delay_ms: int = 300) -> None:
        self._on_commit = on_commit
        self._delay_seconds = delay_ms / 1000.0
        self._timer = CancelableTimer("search_debounce")
        self._closed = False
        self.state = SearchState()

    @property
    def pending(self) -> bool:
        return self._timer.pending

    def on_keystroke(self, raw_value: str) -> None:
        if self._closed:
            return
        self.state.raw_term = raw_value
        self._timer.start(self._delay_seconds, lambda: self._commit(raw_value))

    def close(self) -> None:
        self._closed = True
        self._timer.cancel()

    def _commit(self, raw_value: str) -> None:
        if self._closed:
            return
        self.state.committed_term = raw_value
        self._on_commit(raw_value)
