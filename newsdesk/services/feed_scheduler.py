"""Background scheduler that runs the ingestion pipeline on a fixed interval."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from newsdesk.services.feed_ingestion_service import run_ingestion_cycle

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = timedelta(minutes=10)

CycleRunner = Callable[[AsyncSession], Awaitable[Any]]


class FeedScheduler:
    """Single repeating timer around `run_ingestion_cycle`.

    Ticks land on `start + k * interval`. The first cycle runs one interval
    after `start()`. A cycle that outlasts the interval swallows the ticks it
    overlapped, so at most one cycle is ever in flight and missed ticks are
    never replayed.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        interval: timedelta = DEFAULT_INTERVAL,
        run_cycle: CycleRunner = run_ingestion_cycle,
    ) -> None:
        if interval.total_seconds() <= 0:
            raise ValueError("scheduler interval must be positive")
        self._session_factory = session_factory
        self._interval = interval.total_seconds()
        self._run_cycle = run_cycle
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the timer task. Calling it again while running is a no-op."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name="feed-scheduler")
        logger.info("Feed scheduler started (interval %.0fs)", self._interval)

    async def stop(self, timeout: float = 10.0) -> None:
        """Cancel the timer and wait up to `timeout` seconds for it to exit."""
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        task.cancel()
        done, _ = await asyncio.wait({task}, timeout=timeout)
        if not done:
            logger.warning(
                "Feed scheduler did not stop within %.1fs; abandoning in-flight cycle",
                timeout,
            )
            return
        logger.info("Feed scheduler stopped")

    async def run_once(self) -> Any:
        """Run one ingestion cycle in a fresh session.

        Exceptions are logged and swallowed so one bad cycle never ends the loop.
        """
        try:
            async with self._session_factory() as db:
                return await self._run_cycle(db)
        except Exception:
            logger.exception("Feed ingestion cycle failed")
            return None

    async def _loop(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + self._interval
        while True:
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            await self.run_once()

            next_tick += self._interval
            now = loop.time()
            if next_tick <= now:
                skipped = int((now - next_tick) // self._interval) + 1
                next_tick += skipped * self._interval
                logger.warning(
                    "Ingestion cycle overran the interval; skipped %d tick(s)",
                    skipped,
                )
