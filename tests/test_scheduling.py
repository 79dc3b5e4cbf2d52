"""Tests for calendar helpers and the system clock."""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from sugar_meter.services.scheduling import (
    SystemClock,
    date_key,
    is_later_day,
    next_midnight,
    start_of_day,
)

NEW_YORK = ZoneInfo("America/New_York")


def test_next_midnight_is_strictly_after() -> None:
    midnight = datetime(2025, 3, 10, tzinfo=UTC)

    assert next_midnight(midnight) == datetime(2025, 3, 11, tzinfo=UTC)
    assert next_midnight(datetime(2025, 3, 10, 23, 59, tzinfo=UTC)) == datetime(
        2025, 3, 11, tzinfo=UTC
    )


def test_next_midnight_uses_local_calendar() -> None:
    moment = datetime(2025, 3, 9, 1, 30, tzinfo=NEW_YORK)

    assert next_midnight(moment) == datetime(2025, 3, 10, tzinfo=NEW_YORK)


def test_is_later_day_compares_calendar_dates_in_local_time() -> None:
    late_evening_utc = datetime(2025, 3, 10, 3, 0, tzinfo=UTC)
    same_local_day = datetime(2025, 3, 9, 23, 30, tzinfo=NEW_YORK)
    next_local_day = datetime(2025, 3, 10, 0, 5, tzinfo=NEW_YORK)

    assert not is_later_day(late_evening_utc, same_local_day)
    assert is_later_day(late_evening_utc, next_local_day)


def test_is_later_day_ignores_elapsed_time() -> None:
    just_before = datetime(2025, 3, 10, 23, 59, tzinfo=UTC)
    just_after = datetime(2025, 3, 11, 0, 1, tzinfo=UTC)

    assert is_later_day(just_before, just_after)
    assert not is_later_day(just_after, just_before)


def test_start_of_day_and_date_key() -> None:
    moment = datetime(2025, 1, 5, 17, 45, 12, tzinfo=UTC)

    assert start_of_day(moment) == datetime(2025, 1, 5, tzinfo=UTC)
    assert date_key(moment) == "2025-01-05"
    assert date_key(date(2024, 12, 31)) == "2024-12-31"


def test_system_clock_is_timezone_aware() -> None:
    assert SystemClock().now().tzinfo is not None
    assert SystemClock(NEW_YORK).now().tzinfo is NEW_YORK
