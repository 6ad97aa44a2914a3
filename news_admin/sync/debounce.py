"""
Sync - Debounce Controller

Delays a lookup until typing has been quiet for a fixed interval.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional, Set

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Runs ``callback(text)`` once per uninterrupted burst of ``notify`` calls.

    Every ``notify`` supersedes the pending timer. Blank text clears
    immediately through ``on_clear`` and schedules nothing. Coroutine
    callbacks are run as fire-and-forget tasks.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[str], Any],
        on_clear: Optional[Callable[[], None]] = None,
    ):
        self.delay = delay
        self.callback = callback
        self.on_clear = on_clear
        self._timer: Optional[asyncio.TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def notify(self, text: str) -> None:
        """Record a keystroke. Must be called from the running event loop."""
        self.cancel()

        if not text.strip():
            if self.on_clear is not None:
                self.on_clear()
            return

        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.delay, self._fire, text)

    def cancel(self) -> None:
        """Drop the pending callback, if any. Lookups already started keep running."""
        timer = self._timer
        self._timer = None
        if timer is not None:
            timer.cancel()

    def _fire(self, text: str) -> None:
        self._timer = None
        result = self.callback(text)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait for callbacks that have already fired."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
