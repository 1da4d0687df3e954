from datetime import date, datetime, time, timedelta

import pytest

from clock import FixedClock
from deadline import ALWAYS, NEVER, Deadline
from errors import TodoParseError


def test_never_and_always(clock):
    assert not NEVER.due(clock)
    assert ALWAYS.due(clock)
    assert Deadline() == NEVER
    assert NEVER.is_none() and ALWAYS.is_some()


def test_day_boundaries(clock):
    today = clock.today()
    assert Deadline.day(today).due(clock)
    assert Deadline.day(today - timedelta(days=1)).due(clock)
    assert not Deadline.day(today + timedelta(days=1)).due(clock)


def test_day_ignores_time_of_day():
    late = FixedClock(datetime(2024, 5, 10, 0, 0, 1))
    assert Deadline.day(datetime(2024, 5, 10, 23, 59)).due(late)
    assert Deadline.day(datetime(2024, 5, 10, 23, 59)).value == date(2024, 5, 10)


def test_daily_truncates_now_to_the_minute(clock):
    # clock reads 12:30:45
    assert Deadline.daily(time(12, 30)).due(clock)
    assert Deadline.daily(time(0, 0)).due(clock)
    assert not Deadline.daily(time(12, 31)).due(clock)
    assert not Deadline.daily(time(23, 59, 59)).due(clock)


def test_instant(clock):
    now = clock.now()
    assert Deadline.instant(now).due(clock)
    assert Deadline.instant(datetime(1970, 1, 1)).due(clock)
    assert not Deadline.instant(now + timedelta(seconds=1)).due(clock)


def test_encode():
    assert NEVER.encode() == ""
    assert ALWAYS.encode() == "due:0000-00-00"
    assert Deadline.day(date(2053, 1, 1)).encode() == "due:2053-01-01"
    assert Deadline.day(date(987, 3, 4)).encode() == "due:0987-03-04"
    assert Deadline.daily(time(9, 5)).encode() == "due:daily-0905"
    assert Deadline.instant(datetime(2024, 6, 1, 7, 45)).encode() == "due:2024-06-01T0745"


def test_resolve_relative_offsets(clock):
    assert Deadline.resolve("3d", date(2023, 1, 7)) == Deadline.day(date(2023, 1, 10))
    assert Deadline.resolve("3d", date(2023, 12, 30)) == Deadline.day(date(2024, 1, 2))
    assert Deadline.resolve("0d", date(2023, 1, 7)) == Deadline.day(date(2023, 1, 7))
    assert Deadline.resolve("2d", None, clock) == Deadline.day(date(2024, 5, 12))


def test_resolve_today(clock):
    assert Deadline.resolve("today", date(2023, 1, 7), clock) == Deadline.day(date(2023, 1, 7))
    assert Deadline.resolve("today", None, clock) == Deadline.day(clock.today())


def test_resolve_encoded_forms():
    assert Deadline.resolve("0000-00-00") == ALWAYS
    assert Deadline.resolve("2053-01-01") == Deadline.day(date(2053, 1, 1))
    assert Deadline.resolve("daily-0930") == Deadline.daily(time(9, 30))
    assert Deadline.resolve("2024-06-01T0745") == Deadline.instant(datetime(2024, 6, 1, 7, 45))


@pytest.mark.parametrize("value", ["someday", "3rd", "22nd", "3xd", "2023-02-30", "daily-2561", "2024-06-01T2500", "tomorrow", "weekend"])
def test_resolve_unknown_forms_return_none(value):
    assert Deadline.resolve(value, date(2023, 1, 7)) is None


@pytest.mark.parametrize("value", ["3.5d", "-2d", "+4d", "+1.5d"])
def test_resolve_malformed_offset_is_bad_date(value):
    with pytest.raises(TodoParseError) as exc:
        Deadline.resolve(value, date(2023, 1, 7))
    assert exc.value.kind == TodoParseError.BAD_DATE
