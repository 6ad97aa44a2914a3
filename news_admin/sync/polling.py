"""
Sync - Status Polling

Bounded background polling of a newly created article until the backend
reports a terminal status.

Each session ticks every ``interval`` seconds for at most ``max_attempts``
ticks. A tick that observes a non-pending status hands the fresh item to
``on_update`` and ends the session. When the budget runs out the item is
left pending; nothing re-checks it later.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Set

from news_admin.client.errors import BackendError
from news_admin.schemas.news import NewsItem, NewsStatus

logger = logging.getLogger(__name__)


StatusLookup = Callable[[str], Awaitable[Optional[NewsItem]]]


class PollState(str, Enum):
    IDLE = "idle"
    POLLING = "polling"
    TERMINATED = "terminated"


class PollSession:
    """One bounded polling loop for one item."""

    def __init__(
        self,
        item_id: str,
        lookup: StatusLookup,
        on_update: Callable[[NewsItem], None],
        interval: float = 5.0,
        max_attempts: int = 12,
    ):
        self.item_id = item_id
        self.lookup = lookup
        self.on_update = on_update
        self.interval = interval
        self.max_attempts = max_attempts

        self.state = PollState.IDLE
        self.attempt = 0
        self.final_status: Optional[NewsStatus] = None

        self._timer: Optional[asyncio.TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()
        self._finished = asyncio.Event()

    @property
    def active(self) -> bool:
        return self.state is PollState.POLLING

    @property
    def exhausted(self) -> bool:
        """Ended by the attempt budget rather than a terminal status."""
        return self.state is PollState.TERMINATED and self.final_status is None

    def start(self) -> None:
        if self.state is not PollState.IDLE:
            raise RuntimeError(f"Poll session for {self.item_id} already started")
        self.state = PollState.POLLING
        self._schedule()
        logger.info(f"Polling status of {self.item_id} every {self.interval}s")

    def cancel(self) -> None:
        """Stop ticking. A lookup already in flight finishes but is ignored."""
        if self.state is PollState.TERMINATED:
            return
        logger.info(f"Poll session for {self.item_id} cancelled after {self.attempt} attempts")
        self._terminate()

    async def wait(self) -> None:
        """Block until the session terminates."""
        await self._finished.wait()

    def _schedule(self) -> None:
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.interval, self._tick)

    def _tick(self) -> None:
        self._timer = None
        if self.state is not PollState.POLLING:
            return

        self.attempt += 1
        if self.attempt < self.max_attempts:
            self._schedule()

        task = asyncio.ensure_future(self._check(self.attempt))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _check(self, attempt: int) -> None:
        try:
            item = await self.lookup(self.item_id)
        except BackendError as e:
            logger.warning(f"Status check {attempt} for {self.item_id} failed: {e}")
            item = None

        if self.state is not PollState.POLLING:
            return

        if item is not None and item.status.is_terminal:
            logger.info(f"{self.item_id} reached status {item.status.value} on attempt {attempt}")
            self.final_status = item.status
            self.on_update(item)
            self._terminate()
        elif attempt >= self.max_attempts:
            logger.info(
                f"{self.item_id} still pending after {attempt} attempts, giving up"
            )
            self._terminate()

    def _terminate(self) -> None:
        self.state = PollState.TERMINATED
        timer = self._timer
        self._timer = None
        if timer is not None:
            timer.cancel()
        self._finished.set()


class StatusPoller:
    """Owns at most one live PollSession; starting a new one cancels the old."""

    def __init__(
        self,
        lookup: StatusLookup,
        on_update: Callable[[NewsItem], None],
        interval: float = 5.0,
        max_attempts: int = 12,
    ):
        self.lookup = lookup
        self.on_update = on_update
        self.interval = interval
        self.max_attempts = max_attempts
        self.session: Optional[PollSession] = None

    @property
    def active(self) -> bool:
        return self.session is not None and self.session.active

    def start(self, item_id: str) -> PollSession:
        self.cancel()
        self.session = PollSession(
            item_id,
            self.lookup,
            self.on_update,
            interval=self.interval,
            max_attempts=self.max_attempts,
        )
        self.session.start()
        return self.session

    def cancel(self) -> None:
        if self.session is not None:
            self.session.cancel()
