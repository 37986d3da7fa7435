"""
GymTastic Membership — Renewal Policy
=======================================
Pure decision logic. No storage, no clock: "now" is always passed in.

A user without an active plan may always buy one. A user holding an
active plan may buy a new one only inside the renewal window, i.e.
when the remaining days are <= renewal_threshold_days.

Remaining days are counted with the ceiling rule: any part of a day
left counts as a whole day.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from core.config.rules import DEFAULT_RENEWAL_THRESHOLD_DAYS, MembershipRules
from core.errors import ReasonCode, RejectionReason
from core.time import ceil_days
from engines.membership.state import MembershipState

POLICY_NAME = "membership_renewal_window"


class MembershipPolicy:
    def __init__(self, renewal_threshold_days: int = DEFAULT_RENEWAL_THRESHOLD_DAYS) -> None:
        if renewal_threshold_days < 0:
            raise ValueError("renewal_threshold_days must be >= 0.")
        self.renewal_threshold_days = renewal_threshold_days

    @classmethod
    def from_rules(cls, rules: MembershipRules) -> "MembershipPolicy":
        return cls(renewal_threshold_days=rules.renewal_threshold_days)

    def has_active_plan(self, state: MembershipState, now: datetime) -> bool:
        return state.is_active(now)

    def remaining_days(self, state: MembershipState, now: datetime) -> Optional[int]:
        if state.plan_end is None:
            return None
        return ceil_days(state.plan_end - now)

    def can_purchase_new_plan(self, state: MembershipState, now: datetime) -> bool:
        if not self.has_active_plan(state, now):
            return True
        return self.remaining_days(state, now) <= self.renewal_threshold_days

    def renewal_rejection(
        self, state: MembershipState, now: datetime,
    ) -> Optional[RejectionReason]:
        """Explain why a new plan cannot be bought yet, or None if it can."""
        if self.can_purchase_new_plan(state, now):
            return None
        remaining = self.remaining_days(state, now)
        return RejectionReason(
            code=ReasonCode.MEMBERSHIP_RENEWAL_NOT_ELIGIBLE,
            message=(
                f"Active plan has {remaining} day(s) remaining; a new plan can "
                f"be purchased when {self.renewal_threshold_days} or fewer remain."
            ),
            policy_name=POLICY_NAME,
        )

    def activate(
        self,
        state: MembershipState,
        plan_end: datetime,
        site_id: Optional[int],
        site_name: Optional[str],
        site_lat: Optional[float],
        site_lng: Optional[float],
    ) -> MembershipState:
        return MembershipState(
            user_id=state.user_id,
            plan_end=plan_end,
            site_id=site_id,
            site_name=site_name,
            site_lat=site_lat,
            site_lng=site_lng,
        )
