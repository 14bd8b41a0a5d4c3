"""
Refresh scheduler: runs the refresh pipeline on a fixed interval.

The first cycle starts as soon as the scheduler starts, alongside the HTTP
listener rather than before it; until it succeeds the store is empty and
every lookup is a 404.
"""

import asyncio
import enum
import logging

from currency_api.config import settings
from currency_api.services.refresh_service import RefreshService

logger = logging.getLogger(__name__)


class SchedulerState(str, enum.Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"


class RefreshScheduler:
    """Background task that refreshes the rate store forever."""

    def __init__(self, service: RefreshService | None = None, interval: float | None = None):
        self.service = service or RefreshService()
        self.interval = interval if interval is not None else settings.REFRESH_INTERVAL_SECONDS
        self.state = SchedulerState.IDLE
        self.last_report: dict | None = None
        self._stop = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> dict | None:
        """
        Run a single cycle: IDLE → REFRESHING → IDLE.

        Returns the cycle report, or None if the cycle crashed unexpectedly.
        """
        self.state = SchedulerState.REFRESHING
        try:
            self.last_report = await self.service.run_cycle()
            return self.last_report
        except Exception:
            logger.exception("Refresh cycle failed unexpectedly")
            return None
        finally:
            self.state = SchedulerState.IDLE

    async def _loop(self) -> None:
        while not self._stop.is_set():
            await self.run_once()
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                continue

    def start(self) -> None:
        """Launch the background loop on the running event loop."""
        if self.running:
            return
        self._stop = asyncio.Event()
        self._task = asyncio.create_task(self._loop(), name="rate-refresh")
        logger.info("Refresh scheduler started (interval=%ss)", self.interval)

    async def stop(self) -> None:
        """Signal the loop to exit and wait for it."""
        if self._task is None:
            return
        self._stop.set()
        try:
            await self._task
        finally:
            self._task = None
        logger.info("Refresh scheduler stopped")
