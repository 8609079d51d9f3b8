"""One display session: scheduler, timers, rotation and polling wired together."""

from __future__ import annotations

import logging
import os
from typing import Callable, Optional

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from rateboard.core.logging import log_event
from rateboard.domain import defaults
from .poller import DisplayPoller
from .rotation import DisplaySnapshot, RotationScheduler
from .timers import APSchedulerTimers

logger = logging.getLogger(__name__)

POLL_JOB_ID = "display:poll"
DEFAULT_API_URL = "http://localhost:8080"


def _env_poll_seconds() -> float:
    raw = os.getenv("RATEBOARD_POLL_SECONDS", "")
    try:
        value = float(raw)
    except ValueError:
        return float(defaults.DEFAULT_REFRESH_INTERVAL_SECONDS)
    return value if value >= defaults.MIN_DURATION_SECONDS else float(defaults.DEFAULT_REFRESH_INTERVAL_SECONDS)


def create_scheduler() -> AsyncIOScheduler:
    return AsyncIOScheduler(
        timezone="UTC",
        job_defaults={
            "coalesce": True,
            "max_instances": 1,
        },
    )


class DisplaySession:
    """Lifecycle of one unattended display.

    `start()` must run inside the event loop. `close()` clears every pending
    rotation timer and the polling job so nothing leaks into the next session.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        scheduler: Optional[AsyncIOScheduler] = None,
        on_change: Optional[Callable[[DisplaySnapshot], None]] = None,
    ) -> None:
        self._owns_scheduler = scheduler is None
        self.scheduler = scheduler or create_scheduler()
        self.timers = APSchedulerTimers(self.scheduler)
        self.rotation = RotationScheduler(self.timers, on_change=on_change)
        self.poller = DisplayPoller(base_url or os.getenv("RATEBOARD_API_URL", DEFAULT_API_URL), self.rotation)
        self.poll_seconds: Optional[float] = None
        self._closed = False

    async def start(self) -> None:
        if not self.scheduler.running:
            self.scheduler.start()
        log_event("display_session_started", log=logger, base_url=self.poller.base_url)
        await self.poll()

    async def poll(self) -> None:
        if self._closed:
            return
        await self.poller.poll_once()
        settings = self.rotation.settings
        interval = settings.refresh_interval_seconds if settings is not None else _env_poll_seconds()
        self._schedule_polling(interval)

    def _schedule_polling(self, seconds: float) -> None:
        if self._closed or seconds == self.poll_seconds:
            return
        trigger = IntervalTrigger(seconds=seconds)
        if self.poll_seconds is None:
            self.scheduler.add_job(
                func=self.poll,
                trigger=trigger,
                id=POLL_JOB_ID,
                name="display poll",
                replace_existing=True,
            )
        else:
            self.scheduler.reschedule_job(POLL_JOB_ID, trigger=trigger)
        log_event("display_poll_scheduled", log=logger, seconds=seconds, previous=self.poll_seconds)
        self.poll_seconds = seconds

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.rotation.close()
        self.timers.cancel_all()
        try:
            self.scheduler.remove_job(POLL_JOB_ID)
        except JobLookupError:
            pass
        if self._owns_scheduler and self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        log_event("display_session_closed", log=logger)
