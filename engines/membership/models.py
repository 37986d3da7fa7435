"""
GymTastic Membership - Persistent Membership State
===================================================
"""

from __future__ import annotations

from django.db import models

from engines.membership.state import MembershipState


class Membership(models.Model):
    user_id = models.CharField(max_length=255, primary_key=True)
    plan_end = models.DateTimeField(null=True, blank=True)
    site_id = models.IntegerField(null=True, blank=True)
    site_name = models.CharField(max_length=255, null=True, blank=True)
    site_lat = models.FloatField(null=True, blank=True)
    site_lng = models.FloatField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "gym_memberships"
        ordering = ["user_id"]

    def __str__(self) -> str:
        return f"{self.user_id} (until {self.plan_end})"

    def to_state(self) -> MembershipState:
        return MembershipState(
            user_id=self.user_id,
            plan_end=self.plan_end,
            site_id=self.site_id,
            site_name=self.site_name,
            site_lat=self.site_lat,
            site_lng=self.site_lng,
        )

    @classmethod
    def from_state(cls, state: MembershipState) -> "Membership":
        return cls(
            user_id=state.user_id,
            plan_end=state.plan_end,
            site_id=state.site_id,
            site_name=state.site_name,
            site_lat=state.site_lat,
            site_lng=state.site_lng,
        )
