"""
GymTastic Core Time — Temporal Helpers
========================================
Pure functions for day counting and deadlines.
All functions take explicit datetime arguments — no hidden clock access.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

SECONDS_PER_DAY = 86_400


# ══════════════════════════════════════════════════════════════
# DAY ARITHMETIC
# ══════════════════════════════════════════════════════════════

def ceil_days(delta: timedelta) -> int:
    """
    Whole days covered by `delta`, rounding partial days up.

    Negative or zero deltas return 0. One second past a day boundary
    counts as a full extra day.
    """
    seconds = delta.total_seconds()
    if seconds <= 0:
        return 0
    return math.ceil(seconds / SECONDS_PER_DAY)


def add_days(start: datetime, days: int) -> datetime:
    return start + timedelta(days=days)


# ══════════════════════════════════════════════════════════════
# EXPIRY
# ══════════════════════════════════════════════════════════════

def is_expired(issued_at: datetime, ttl_seconds: float, now: datetime) -> bool:
    """
    Check if something issued at `issued_at` has expired given a TTL.

    All arguments are explicit — no hidden clock.
    """
    return (now - issued_at).total_seconds() > ttl_seconds


def seconds_until_expiry(
    issued_at: datetime, ttl_seconds: float, now: datetime
) -> Optional[float]:
    """Seconds remaining before expiry, or None if already expired."""
    remaining = ttl_seconds - (now - issued_at).total_seconds()
    return remaining if remaining > 0 else None


@dataclass(frozen=True)
class Deadline:
    """
    Wall-clock budget for one unit of work.

    A timeout of None means the work never expires.
    """

    started_at: datetime
    timeout_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0 when set.")

    def expired(self, now: datetime) -> bool:
        if self.timeout_seconds is None:
            return False
        return is_expired(self.started_at, self.timeout_seconds, now)
