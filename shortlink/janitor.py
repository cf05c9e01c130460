"""Background removal of expired URL mappings."""

import asyncio
import logging
from typing import Callable, Optional
from datetime import datetime

from .database.base import URLStoreBase
from .database.models import utcnow


class ExpiredURLJanitor:
    """Periodically deletes mappings whose expiration date has passed.

    The first cycle runs as soon as the janitor starts, then once every
    ``interval_seconds``. A failed cycle is logged and the loop carries on;
    only the stop event or task cancellation ends it.
    """

    def __init__(
        self,
        store: URLStoreBase,
        interval_seconds: float = 24 * 60 * 60,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        self.store = store
        self.interval_seconds = interval_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock
        self._stop_event: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        """Delete expired mappings once.

        Returns:
            Number of mappings removed
        """
        deleted = await self.store.delete_expired(self.clock())
        self.logger.info(f"Deleted {deleted} expired URLs")
        return deleted

    async def run(self, stop_event: asyncio.Event) -> None:
        """Run cleanup cycles until ``stop_event`` is set."""
        while not stop_event.is_set():
            try:
                await self.run_once()
            except Exception:
                self.logger.exception("Error deleting expired URLs")

            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass

    def start(self) -> asyncio.Task:
        """Start the cleanup loop as a background task on the running loop."""
        if self.running:
            return self._task

        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self.run(self._stop_event), name="expired-url-janitor")
        self.logger.info(f"Janitor started (interval={self.interval_seconds}s)")
        return self._task

    async def stop(self) -> None:
        """Signal the loop to stop and wait for the current cycle to finish."""
        if self._task is None:
            return

        self._stop_event.set()
        try:
            await self._task
        finally:
            self._task = None
            self.logger.info("Janitor stopped")
