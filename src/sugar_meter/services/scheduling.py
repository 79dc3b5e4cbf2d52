"""Clock and scheduler ports plus calendar-day helpers."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Protocol

DATE_KEY_FORMAT = "%Y-%m-%d"


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current timezone-aware time."""


class CancelHandle(Protocol):
    """Handle for a scheduled callback."""

    def cancel(self) -> None:
        """Cancel the callback if it has not fired yet."""


class Scheduler(Protocol):
    """Runs a callback once at a wall-clock instant."""

    def schedule_at(self, when: datetime, callback: Callable[[], None]) -> CancelHandle:
        """Arm a one-shot callback and return its cancel handle."""


@dataclass
class SystemClock(Clock):
    """Clock backed by the host time in a fixed timezone."""

    tz: tzinfo | None = None

    def now(self) -> datetime:
        """Return the current time, in local time when no timezone is set."""
        if self.tz is None:
            return datetime.now().astimezone()
        return datetime.now(tz=self.tz)


def start_of_day(moment: datetime) -> datetime:
    """Return local midnight at the start of the moment's calendar day."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def is_later_day(earlier: datetime, later: datetime) -> bool:
    """Return True when `later` falls on a later calendar day than `earlier`.

    Both moments are compared as calendar dates in the timezone of `later`,
    never by elapsed time.
    """
    if earlier.tzinfo is not None and later.tzinfo is not None:
        earlier = earlier.astimezone(later.tzinfo)
    return later.date() > earlier.date()


def next_midnight(moment: datetime) -> datetime:
    """Return the first local midnight strictly after the moment."""
    following = moment.date() + timedelta(days=1)
    return datetime.combine(following, datetime.min.time(), tzinfo=moment.tzinfo)


def date_key(day: date | datetime) -> str:
    """Return the `yyyy-MM-dd` key for a calendar day."""
    if isinstance(day, datetime):
        day = day.date()
    return day.strftime(DATE_KEY_FORMAT)
