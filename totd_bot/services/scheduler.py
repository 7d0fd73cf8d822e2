"""Daily job scheduler: fires one job at a fixed wall-clock time."""

import asyncio
import sys
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from totd_bot.domain.schedule import DailyTrigger


def _log(msg: str):
    print(msg, file=sys.stderr)


class DailyJobScheduler:
    """Polls the clock and runs ``job`` once per day at the trigger time.

    Job failures are logged only; there is no user-facing surface to
    report them to.
    """

    def __init__(
        self,
        trigger: DailyTrigger,
        job: Callable[[], Awaitable[None]],
        name: str = "daily-job",
        poll_interval_seconds: float = 30.0,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._trigger = trigger
        self._job = job
        self._name = name
        self._poll_interval_seconds = poll_interval_seconds
        self._clock = clock
        self._next_run = trigger.next_after(clock())
        self._stop_event = asyncio.Event()

    @property
    def next_run(self) -> datetime:
        return self._next_run

    async def tick(self) -> bool:
        """Run the job if it is due. Returns True when it ran."""
        now = self._clock()
        if now < self._next_run:
            return False
        self._next_run = self._trigger.next_after(now)
        _log(f"[Scheduler:{self._name}] firing (next run {self._next_run.isoformat()})")
        try:
            await self._job()
        except Exception as e:
            _log(f"[Scheduler:{self._name}] job failed: {e}")
        return True

    async def run_forever(self) -> None:
        """Run scheduler loop until stop() is called."""
        _log(f"[Scheduler:{self._name}] started, cron={self._trigger.cron_expression!r} "
             f"tz={self._trigger.tz} next={self._next_run.isoformat()}")
        while not self._stop_event.is_set():
            await self.tick()
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._poll_interval_seconds)
            except asyncio.TimeoutError:
                pass

    def stop(self) -> None:
        """Signal the loop to stop."""
        self._stop_event.set()
