"""
GymTastic Core Time — Public API
==================================
Explicit clock protocol and temporal helpers.
Doctrine: NO datetime.now() in engine logic.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    now_utc,
    set_default_clock,
)
from core.time.temporal import (
    Deadline,
    add_days,
    ceil_days,
    is_expired,
    seconds_until_expiry,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_default_clock",
    "set_default_clock",
    "now_utc",
    "Deadline",
    "add_days",
    "ceil_days",
    "is_expired",
    "seconds_until_expiry",
]
