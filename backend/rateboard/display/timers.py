"""Re-armable one-shot timers, one per named slot.

Arming a slot replaces whatever was pending for it, so a slot never fires twice
for one arming. Two implementations:

- ``VirtualTimers``: explicit clock advanced by the caller (tests, simulations)
- ``APSchedulerTimers``: one-shot ``date`` jobs on an ``AsyncIOScheduler``
"""

from __future__ import annotations

import itertools
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Protocol, Tuple

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger

logger = logging.getLogger(__name__)

TimerCallback = Callable[[], None]


class TimerSlots(Protocol):
    def arm(self, slot: str, delay_seconds: float, callback: TimerCallback) -> None: ...

    def cancel(self, slot: str) -> None: ...

    def cancel_all(self) -> None: ...

    def is_armed(self, slot: str) -> bool: ...


class VirtualTimers:
    """Timers driven by a virtual clock; nothing fires until `advance` is called."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = float(start)
        self._seq = itertools.count()
        self._pending: Dict[str, Tuple[float, int, TimerCallback]] = {}

    def arm(self, slot: str, delay_seconds: float, callback: TimerCallback) -> None:
        self._pending[slot] = (self.now + float(delay_seconds), next(self._seq), callback)

    def cancel(self, slot: str) -> None:
        self._pending.pop(slot, None)

    def cancel_all(self) -> None:
        self._pending.clear()

    def is_armed(self, slot: str) -> bool:
        return slot in self._pending

    def deadline(self, slot: str) -> Optional[float]:
        entry = self._pending.get(slot)
        return entry[0] if entry else None

    def advance(self, seconds: float) -> None:
        self.advance_to(self.now + float(seconds))

    def advance_to(self, moment: float) -> None:
        """Fire every timer due up to `moment`, in deadline order, then park the clock there."""
        while True:
            due = [(deadline, seq, slot) for slot, (deadline, seq, _) in self._pending.items() if deadline <= moment]
            if not due:
                break
            deadline, _, slot = min(due)
            _, _, callback = self._pending.pop(slot)
            self.now = deadline
            callback()
        self.now = float(moment)


class APSchedulerTimers:
    """Slots backed by one-shot APScheduler jobs.

    Each arming gets its own job id so the scheduler's cleanup of a fired job
    can never remove the job armed from inside its callback.
    """

    def __init__(self, scheduler: BaseScheduler, *, prefix: str = "display") -> None:
        self._scheduler = scheduler
        self._prefix = prefix
        self._generation = itertools.count(1)
        self._armed: Dict[str, Tuple[str, TimerCallback]] = {}

    def arm(self, slot: str, delay_seconds: float, callback: TimerCallback) -> None:
        self.cancel(slot)
        job_id = f"{self._prefix}:{slot}:{next(self._generation)}"
        run_date = datetime.now(timezone.utc) + timedelta(seconds=float(delay_seconds))
        self._armed[slot] = (job_id, callback)
        self._scheduler.add_job(
            func=self._fire,
            trigger=DateTrigger(run_date=run_date),
            id=job_id,
            name=f"{self._prefix}:{slot}",
            replace_existing=True,
            kwargs={"slot": slot, "job_id": job_id},
            misfire_grace_time=None,
        )

    async def _fire(self, slot: str, job_id: str) -> None:
        # Runs on the event loop, so callbacks never race each other
        entry = self._armed.get(slot)
        if entry is None or entry[0] != job_id:
            return
        del self._armed[slot]
        entry[1]()

    def cancel(self, slot: str) -> None:
        entry = self._armed.pop(slot, None)
        if entry is None:
            return
        try:
            self._scheduler.remove_job(entry[0])
        except JobLookupError:
            pass

    def cancel_all(self) -> None:
        for slot in list(self._armed):
            self.cancel(slot)

    def is_armed(self, slot: str) -> bool:
        return slot in self._armed
