"""
Tests for core.time — Clock protocol and temporal helpers.
"""

import pytest
from datetime import datetime, timezone, timedelta

from core.time.clock import (
    FixedClock,
    SystemClock,
    set_default_clock,
    get_default_clock,
    now_utc,
)
from core.time.temporal import (
    Deadline,
    add_days,
    ceil_days,
    is_expired,
    seconds_until_expiry,
)


T0 = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


# ── Clock Tests ──────────────────────────────────────────────

class TestSystemClock:
    def test_returns_utc_datetime(self):
        dt = SystemClock().now_utc()
        assert dt.tzinfo == timezone.utc

    def test_time_advances(self):
        clock = SystemClock()
        t1 = clock.now_utc()
        t2 = clock.now_utc()
        assert t2 >= t1


class TestFixedClock:
    def test_returns_fixed_time(self):
        clock = FixedClock(T0)
        assert clock.now_utc() == T0
        assert clock.now_utc() == T0

    def test_rejects_naive_datetime(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            FixedClock(datetime(2025, 1, 1))

    def test_advance_seconds_and_days(self):
        clock = FixedClock(T0)
        clock.advance(60)
        clock.advance(days=2)
        assert clock.now_utc() == T0 + timedelta(days=2, seconds=60)


class TestDefaultClock:
    def test_override_and_restore(self):
        original = get_default_clock()
        try:
            set_default_clock(FixedClock(T0))
            assert now_utc() == T0
        finally:
            set_default_clock(original)


# ── Day Arithmetic ───────────────────────────────────────────

class TestCeilDays:
    def test_exact_days(self):
        assert ceil_days(timedelta(days=3)) == 3

    def test_partial_day_rounds_up(self):
        assert ceil_days(timedelta(days=2, seconds=1)) == 3
        assert ceil_days(timedelta(hours=1)) == 1

    def test_zero_and_negative_floor_at_zero(self):
        assert ceil_days(timedelta(0)) == 0
        assert ceil_days(timedelta(days=-4)) == 0

    def test_add_days(self):
        assert add_days(T0, 30) == T0 + timedelta(days=30)


# ── Expiry & Deadline ────────────────────────────────────────

class TestExpiry:
    def test_not_expired_within_ttl(self):
        assert not is_expired(T0, 30, T0 + timedelta(seconds=30))

    def test_expired_after_ttl(self):
        assert is_expired(T0, 30, T0 + timedelta(seconds=31))

    def test_seconds_until_expiry(self):
        assert seconds_until_expiry(T0, 30, T0 + timedelta(seconds=10)) == 20
        assert seconds_until_expiry(T0, 30, T0 + timedelta(seconds=40)) is None


class TestDeadline:
    def test_no_timeout_never_expires(self):
        deadline = Deadline(T0)
        assert not deadline.expired(T0 + timedelta(days=365))

    def test_expires_after_timeout(self):
        deadline = Deadline(T0, timeout_seconds=30)
        assert not deadline.expired(T0 + timedelta(seconds=29))
        assert deadline.expired(T0 + timedelta(seconds=31))

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError):
            Deadline(T0, timeout_seconds=0)
