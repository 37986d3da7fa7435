"""
GymTastic Membership — Membership State
=========================================
A user's current plan expiry and the site the plan is bound to.

Active iff plan_end is set and lies strictly after "now". Only
MembershipPolicy.activate produces a changed state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class MembershipState:
    user_id: str
    plan_end: Optional[datetime] = None
    site_id: Optional[int] = None
    site_name: Optional[str] = None
    site_lat: Optional[float] = None
    site_lng: Optional[float] = None

    def __post_init__(self):
        if not self.user_id or not isinstance(self.user_id, str):
            raise ValueError("user_id must be a non-empty string.")
        if self.plan_end is not None and self.plan_end.tzinfo is None:
            raise ValueError("plan_end must be timezone-aware.")

    @classmethod
    def empty(cls, user_id: str) -> "MembershipState":
        return cls(user_id=user_id)

    def is_active(self, now: datetime) -> bool:
        return self.plan_end is not None and self.plan_end > now

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "plan_end": self.plan_end.isoformat() if self.plan_end else None,
            "site_id": self.site_id,
            "site_name": self.site_name,
            "site_lat": self.site_lat,
            "site_lng": self.site_lng,
        }
