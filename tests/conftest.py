"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from sugar_meter.adapters.memory_store import InMemoryKeyValueStore
from sugar_meter.config import Settings
from sugar_meter.domain.errors import StorageError
from sugar_meter.services.engine import SugarTrackerEngine
from sugar_meter.services.scheduling import CancelHandle, Clock, Scheduler
from sugar_meter.services.storage import KeyValueStore, SugarStore

NOON = datetime(2025, 3, 10, 12, 0, tzinfo=UTC)


@dataclass
class FixedClock(Clock):
    """Clock that only moves when told to."""

    current: datetime = NOON

    def now(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current = self.current + delta


@dataclass
class FakeHandle(CancelHandle):
    """Cancel handle that records cancellation."""

    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ScheduledCall:
    when: datetime
    callback: Callable[[], None]
    handle: FakeHandle


@dataclass
class FakeScheduler(Scheduler):
    """Scheduler that records calls and fires them on demand."""

    calls: list[ScheduledCall] = field(default_factory=list)

    def schedule_at(self, when: datetime, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle()
        self.calls.append(ScheduledCall(when=when, callback=callback, handle=handle))
        return handle

    @property
    def active(self) -> list[ScheduledCall]:
        return [call for call in self.calls if not call.handle.cancelled]

    def fire_next(self) -> None:
        call = self.active[0]
        call.handle.cancelled = True
        call.callback()


@dataclass
class FailingKeyValueStore(KeyValueStore):
    """Store whose reads and writes can be made to fail."""

    values: dict[str, object] = field(default_factory=dict)
    fail_reads: bool = False
    fail_writes: bool = False

    def get(self, key: str) -> object | None:
        if self.fail_reads:
            raise StorageError(f"read {key}")
        return self.values.get(key)

    def set(self, key: str, value: object) -> None:
        if self.fail_writes:
            raise StorageError(f"write {key}")
        self.values[key] = value


@pytest.fixture
def settings() -> Settings:
    return Settings(timezone="UTC", environment="test")


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def sugar_store(kv_store: InMemoryKeyValueStore) -> SugarStore:
    return SugarStore(kv_store)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def engine(
    sugar_store: SugarStore, clock: FixedClock, scheduler: FakeScheduler
) -> SugarTrackerEngine:
    return SugarTrackerEngine(store=sugar_store, clock=clock, scheduler=scheduler)
