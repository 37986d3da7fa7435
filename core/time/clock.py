"""
GymTastic Core Time — Explicit Clock Protocol
===============================================
Doctrine: NO datetime.now() inside engine logic.

Membership windows and checkout deadlines are computed against an
injected Clock. Production code uses SystemClock; tests pin time
with FixedClock so renewal boundaries are deterministic.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


# ══════════════════════════════════════════════════════════════
# CLOCK PROTOCOL
# ══════════════════════════════════════════════════════════════

class Clock(Protocol):
    """Injectable time source."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class SystemClock:
    """Production clock — real system time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Test clock — returns a pinned timestamp until advanced.

    Usage:
        clock = FixedClock(datetime(2025, 1, 1, tzinfo=timezone.utc))
        clock.advance(days=2)
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def advance(self, seconds: float = 0, *, days: float = 0) -> None:
        """Move the pinned time forward (multi-step scenarios)."""
        self._fixed_dt = self._fixed_dt + timedelta(seconds=seconds, days=days)


# ══════════════════════════════════════════════════════════════
# DEFAULT CLOCK (infrastructure use only)
# ══════════════════════════════════════════════════════════════

_default_clock: Clock = SystemClock()


def set_default_clock(clock: Clock) -> None:
    """Override the default clock (testing only)."""
    global _default_clock
    _default_clock = clock


def get_default_clock() -> Clock:
    return _default_clock


def now_utc() -> datetime:
    """Convenience: current UTC time from the default clock."""
    return _default_clock.now_utc()
