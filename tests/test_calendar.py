"""Tests for the trading calendar."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from forecastctx.calendar import (
    first_trading_day,
    is_trading_day,
    iter_trading_days,
    next_trading_days,
    roll_to_weekday,
    to_exchange_time,
)

ET = ZoneInfo("America/New_York")


def _et(*args) -> datetime:
    return datetime(*args, tzinfo=ET)


class TestDayArithmetic:
    def test_weekdays_are_trading_days(self):
        assert is_trading_day(date(2024, 1, 16))  # Tuesday
        assert is_trading_day(date(2024, 1, 19))  # Friday

    def test_weekend(self):
        assert not is_trading_day(date(2024, 1, 13))  # Saturday
        assert not is_trading_day(date(2024, 1, 14))  # Sunday

    def test_holidays_not_modeled(self):
        assert is_trading_day(date(2024, 1, 15))  # MLK Day
        assert is_trading_day(date(2024, 12, 25))  # Christmas (Wednesday)

    def test_roll_to_weekday(self):
        assert roll_to_weekday(date(2024, 1, 16)) == date(2024, 1, 16)
        assert roll_to_weekday(date(2024, 1, 20)) == date(2024, 1, 22)
        assert roll_to_weekday(date(2024, 1, 21)) == date(2024, 1, 22)

    def test_iter_trading_days_includes_start(self):
        it = iter_trading_days(date(2024, 1, 19))
        assert [next(it) for _ in range(3)] == [
            date(2024, 1, 19), date(2024, 1, 22), date(2024, 1, 23),
        ]


class TestExchangeTime:
    def test_aware_is_converted(self):
        local = to_exchange_time(datetime(2024, 1, 16, 21, 0, tzinfo=timezone.utc), "America/New_York")
        assert (local.hour, local.date()) == (16, date(2024, 1, 16))

    def test_dst_offset(self):
        local = to_exchange_time(datetime(2024, 7, 16, 20, 0, tzinfo=timezone.utc), "America/New_York")
        assert local.hour == 16

    def test_naive_is_local_wall_time(self):
        local = to_exchange_time(datetime(2024, 1, 16, 10, 0), "America/New_York")
        assert local.hour == 10
        assert local.tzinfo is not None

    def test_accepts_tzinfo(self):
        local = to_exchange_time(datetime(2024, 1, 16, 21, 0, tzinfo=timezone.utc), ET)
        assert local.hour == 16

    def test_unknown_timezone(self):
        with pytest.raises(ZoneInfoNotFoundError):
            to_exchange_time(datetime(2024, 1, 16, 10, 0), "Mars/Olympus_Mons")


class TestFirstTradingDay:
    def test_close_is_inclusive(self):
        assert first_trading_day(_et(2024, 1, 16, 16, 0, 0)) == date(2024, 1, 17)

    def test_one_second_before_close(self):
        assert first_trading_day(_et(2024, 1, 16, 15, 59, 59)) == date(2024, 1, 16)

    def test_early_morning_is_same_day(self):
        assert first_trading_day(_et(2024, 1, 16, 0, 5)) == date(2024, 1, 16)

    def test_friday_after_close(self):
        assert first_trading_day(_et(2024, 1, 19, 16, 0)) == date(2024, 1, 22)

    @pytest.mark.parametrize("hour", [0, 9, 16, 23])
    def test_saturday(self, hour):
        assert first_trading_day(_et(2024, 1, 20, hour, 0)) == date(2024, 1, 22)

    def test_sunday(self):
        assert first_trading_day(_et(2024, 1, 21, 23, 59)) == date(2024, 1, 22)

    def test_utc_instant_during_dst(self):
        # 19:30 UTC is 15:30 EDT, 20:30 UTC is 16:30 EDT.
        before = datetime(2024, 7, 16, 19, 30, tzinfo=timezone.utc)
        after = datetime(2024, 7, 16, 20, 30, tzinfo=timezone.utc)
        assert first_trading_day(before) == date(2024, 7, 16)
        assert first_trading_day(after) == date(2024, 7, 17)

    def test_utc_date_differs_from_local_date(self):
        # Saturday 01:00 UTC is still Friday 20:00 in New York.
        ref = datetime(2024, 1, 20, 1, 0, tzinfo=timezone.utc)
        assert first_trading_day(ref) == date(2024, 1, 22)

    def test_custom_close_hour(self):
        ref = _et(2024, 1, 16, 13, 30)
        assert first_trading_day(ref, close_hour=13) == date(2024, 1, 17)

    def test_other_exchange(self):
        # 07:30 UTC is 16:30 in Tokyo.
        ref = datetime(2024, 1, 16, 7, 30, tzinfo=timezone.utc)
        assert first_trading_day(ref, "Asia/Tokyo") == date(2024, 1, 17)
        assert first_trading_day(ref, "America/New_York") == date(2024, 1, 16)


class TestNextTradingDays:
    def test_tuesday_before_close(self):
        assert next_trading_days(_et(2024, 1, 16, 15, 59, 59)) == (
            date(2024, 1, 16), date(2024, 1, 17), date(2024, 1, 18),
            date(2024, 1, 19), date(2024, 1, 22),
        )

    def test_friday_after_close(self):
        assert next_trading_days(_et(2024, 1, 19, 16, 0)) == (
            date(2024, 1, 22), date(2024, 1, 23), date(2024, 1, 24),
            date(2024, 1, 25), date(2024, 1, 26),
        )

    def test_holiday_is_included(self):
        days = next_trading_days(_et(2024, 1, 12, 17, 0))
        assert days[0] == date(2024, 1, 15)  # MLK Day

    def test_count(self):
        assert len(next_trading_days(_et(2024, 1, 16, 10, 0), count=1)) == 1
        days = next_trading_days(_et(2024, 1, 16, 10, 0), count=12)
        assert len(days) == 12
        assert days[-1] == date(2024, 1, 31)

    @pytest.mark.parametrize("count", [0, -1])
    def test_invalid_count(self, count):
        with pytest.raises(ValueError):
            next_trading_days(_et(2024, 1, 16, 10, 0), count=count)

    def test_idempotent(self):
        ref = datetime(2024, 3, 8, 22, 15, tzinfo=timezone.utc)
        assert next_trading_days(ref) == next_trading_days(ref)

    def test_every_hour_for_three_weeks(self):
        # Spans the 2024-03-10 DST change in New York.
        ref = datetime(2024, 3, 1, 0, 0, tzinfo=timezone.utc)
        for _ in range(21 * 24):
            days = next_trading_days(ref, "America/New_York", count=5)
            assert len(days) == 5
            assert all(d.weekday() < 5 for d in days)
            assert all(b > a for a, b in zip(days, days[1:]))
            assert days[0] >= to_exchange_time(ref, "America/New_York").date()
            ref += timedelta(hours=1)
