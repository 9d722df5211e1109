"""
Timers for the wizard's delayed side effects.

Everything runs on one asyncio event loop; a timer callback is just another
event on that loop, so no locking is needed around the wizard state.
"""
from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

from selami.observability.logging import log


class LoopScheduler:
    """Thin adapter over `loop.call_later` taking milliseconds."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        # Resolved lazily: the app is built before uvicorn starts its loop.
        return asyncio.get_running_loop()

    def call_later(self, delay_ms: int, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        return self._get_loop().call_later(max(0, delay_ms) / 1000.0, callback)


class Timer:
    """
    Single-shot timer that can be restarted or cancelled.

    `start()` always cancels the pending run first, so only the most recent
    start governs when the callback fires.
    """

    def __init__(self, scheduler, delay_ms: int, callback: Callable[[], Any], name: str = "timer"):
        self._scheduler = scheduler
        self.delay_ms = int(delay_ms)
        self._callback = callback
        self.name = name
        self._handle = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        self.cancel()
        self._handle = self._scheduler.call_later(self.delay_ms, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        try:
            self._callback()
        except Exception as e:
            log(event="timer_callback_failed", timer=self.name, error=str(e))
            raise
