"""Scheduler backed by an asyncio event loop."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from sugar_meter.services.scheduling import Clock, Scheduler, SystemClock


@dataclass
class AsyncioScheduler(Scheduler):
    """Arms one-shot callbacks with `loop.call_later`.

    Without an explicit loop the running loop is used, so scheduling must
    happen from inside that loop.
    """

    loop: asyncio.AbstractEventLoop | None = None
    clock: Clock = field(default_factory=SystemClock)

    def schedule_at(
        self, when: datetime, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        """Run the callback once the wall clock reaches `when`.

        The delay is measured in absolute time so that DST transitions between
        now and `when` are accounted for.
        """
        loop = self.loop or asyncio.get_running_loop()
        delay = max(when.timestamp() - self.clock.now().timestamp(), 0.0)
        return loop.call_later(delay, callback)
