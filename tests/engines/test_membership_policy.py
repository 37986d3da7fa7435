"""
Tests for engines.membership — renewal window and membership storage.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.config import MembershipRules
from core.errors import ReasonCode
from engines.membership import InMemoryMembershipStore, MembershipPolicy, MembershipState

NOW = datetime(2025, 5, 10, 8, 0, tzinfo=timezone.utc)
USER = "ana@example.com"


def _state(delta=None) -> MembershipState:
    return MembershipState(user_id=USER, plan_end=NOW + delta if delta is not None else None)


@pytest.fixture
def policy():
    return MembershipPolicy(renewal_threshold_days=3)


class TestActivePlan:
    def test_no_plan(self, policy):
        assert not policy.has_active_plan(_state(), NOW)

    def test_future_end_is_active(self, policy):
        assert policy.has_active_plan(_state(timedelta(seconds=1)), NOW)

    def test_end_equal_to_now_is_not_active(self, policy):
        assert not policy.has_active_plan(_state(timedelta(0)), NOW)


class TestRemainingDays:
    def test_none_without_plan(self, policy):
        assert policy.remaining_days(_state(), NOW) is None

    def test_ceiling(self, policy):
        assert policy.remaining_days(_state(timedelta(days=2, hours=1)), NOW) == 3
        assert policy.remaining_days(_state(timedelta(days=3)), NOW) == 3
        assert policy.remaining_days(_state(timedelta(days=3, seconds=1)), NOW) == 4

    def test_expired_is_zero(self, policy):
        assert policy.remaining_days(_state(timedelta(days=-5)), NOW) == 0


class TestRenewalWindow:
    def test_no_plan_can_buy(self, policy):
        assert policy.can_purchase_new_plan(_state(), NOW)

    def test_inside_window(self, policy):
        assert policy.can_purchase_new_plan(_state(timedelta(days=2)), NOW)

    def test_on_threshold(self, policy):
        assert policy.can_purchase_new_plan(_state(timedelta(days=3)), NOW)

    def test_outside_window(self, policy):
        assert not policy.can_purchase_new_plan(_state(timedelta(days=10)), NOW)

    def test_expired_plan_can_buy(self, policy):
        assert policy.can_purchase_new_plan(_state(timedelta(days=-1)), NOW)

    def test_rejection_explains(self, policy):
        reason = policy.renewal_rejection(_state(timedelta(days=10)), NOW)
        assert reason.code == ReasonCode.MEMBERSHIP_RENEWAL_NOT_ELIGIBLE
        assert "10 day(s)" in reason.message
        assert policy.renewal_rejection(_state(timedelta(days=1)), NOW) is None

    def test_threshold_from_rules(self):
        policy = MembershipPolicy.from_rules(MembershipRules(renewal_threshold_days=10))
        assert policy.can_purchase_new_plan(_state(timedelta(days=10)), NOW)


class TestActivate:
    def test_returns_new_state(self, policy):
        before = _state()
        after = policy.activate(
            before,
            plan_end=NOW + timedelta(days=30),
            site_id=1,
            site_name="Sede Centro",
            site_lat=-33.447,
            site_lng=-70.653,
        )
        assert before.plan_end is None
        assert after.user_id == USER
        assert after.plan_end == NOW + timedelta(days=30)
        assert after.site_name == "Sede Centro"


class TestMembershipState:
    def test_naive_plan_end_rejected(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            MembershipState(user_id=USER, plan_end=datetime(2025, 1, 1))

    def test_blank_user_rejected(self):
        with pytest.raises(ValueError):
            MembershipState(user_id="")


class TestInMemoryStore:
    def test_unknown_user_is_empty(self):
        state = InMemoryMembershipStore().get(USER)
        assert state == MembershipState.empty(USER)

    def test_save_and_get(self):
        store = InMemoryMembershipStore()
        state = _state(timedelta(days=30))
        store.save(state)
        assert store.get(USER) == state
