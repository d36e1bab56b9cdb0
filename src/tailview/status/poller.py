import asyncio
from datetime import datetime
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
import logging
from typing import Optional

from tailview.status.models import StatusView

logger = logging.getLogger(__name__)

JOB_ID = "tailview-refresh"


class StatusPoller:
    """
    Refreshes a status view on a fixed interval and keeps the latest result.
    `max_instances=1` keeps at most one refresh in flight.
    """

    def __init__(self, view, interval: int = 5):
        self.view = view
        self.interval = interval
        self.scheduler = AsyncIOScheduler()
        self.latest: Optional[StatusView] = None
        self._inflight: Optional[asyncio.Future] = None

    @property
    def running(self) -> bool:
        return self.scheduler.running

    async def refresh(self) -> StatusView:
        """Load a fresh view; callers arriving mid-refresh share its result."""
        if self._inflight is not None:
            return await self._inflight

        self._inflight = asyncio.ensure_future(self.view.load())
        try:
            self.latest = await self._inflight
        finally:
            self._inflight = None
        return self.latest

    async def ensure_latest(self) -> StatusView:
        if self.latest is not None:
            return self.latest
        return await self.refresh()

    def start(self):
        if self.scheduler.running:
            return
        self.scheduler.add_job(
            self.refresh,
            trigger=IntervalTrigger(seconds=self.interval),
            id=JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            name="Refresh Tailscale status",
            next_run_time=datetime.now(),
        )
        self.scheduler.start()
        logger.info(f"Status poller started, interval={self.interval}s")

    def stop(self):
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Status poller stopped")
