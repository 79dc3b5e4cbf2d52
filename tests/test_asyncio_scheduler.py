"""Tests for the asyncio scheduler adapter."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from sugar_meter.adapters.asyncio_scheduler import AsyncioScheduler
from sugar_meter.services.scheduling import next_midnight
from tests.conftest import FakeHandle, FixedClock

NEW_YORK = ZoneInfo("America/New_York")


def test_callback_fires_after_delay() -> None:
    clock = FixedClock()
    fired: list[str] = []

    async def run() -> None:
        scheduler = AsyncioScheduler(clock=clock)
        scheduler.schedule_at(
            clock.now() + timedelta(milliseconds=10), lambda: fired.append("reset")
        )
        await asyncio.sleep(0.1)

    asyncio.run(run())

    assert fired == ["reset"]


def test_cancelled_callback_does_not_fire() -> None:
    clock = FixedClock()
    fired: list[str] = []

    async def run() -> None:
        scheduler = AsyncioScheduler(clock=clock)
        handle = scheduler.schedule_at(
            clock.now() + timedelta(milliseconds=10), lambda: fired.append("reset")
        )
        handle.cancel()
        await asyncio.sleep(0.1)

    asyncio.run(run())

    assert fired == []


def test_past_instants_fire_immediately() -> None:
    clock = FixedClock()
    fired: list[str] = []

    async def run() -> None:
        scheduler = AsyncioScheduler(clock=clock)
        scheduler.schedule_at(
            clock.now() - timedelta(hours=1), lambda: fired.append("late")
        )
        await asyncio.sleep(0.05)

    asyncio.run(run())

    assert fired == ["late"]


@dataclass
class RecordingLoop:
    """Loop stand-in that records requested delays."""

    delays: list[float] = field(default_factory=list)

    def call_later(self, delay: float, _callback) -> FakeHandle:  # type: ignore[no-untyped-def]
        self.delays.append(delay)
        return FakeHandle()


def test_delay_spans_dst_fall_back_day() -> None:
    clock = FixedClock(datetime(2025, 11, 2, 0, 0, 1, tzinfo=NEW_YORK))
    loop = RecordingLoop()
    scheduler = AsyncioScheduler(loop=loop, clock=clock)  # type: ignore[arg-type]

    scheduler.schedule_at(next_midnight(clock.now()), lambda: None)

    assert loop.delays == [89999.0]


def test_delay_spans_dst_spring_forward_day() -> None:
    clock = FixedClock(datetime(2025, 3, 9, 0, 0, 1, tzinfo=NEW_YORK))
    loop = RecordingLoop()
    scheduler = AsyncioScheduler(loop=loop, clock=clock)  # type: ignore[arg-type]

    scheduler.schedule_at(next_midnight(clock.now()), lambda: None)

    assert loop.delays == [82799.0]
