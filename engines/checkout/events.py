"""
GymTastic Checkout — Event Types and Payload Builders
=======================================================
Emitted only after a checkout has committed. Reminder scheduling
(plan-expiry notifications) subscribes to these; the core never
schedules anything itself.
"""

from __future__ import annotations

from datetime import datetime

from engines.membership.state import MembershipState
from engines.orders.records import Order

SOURCE_ENGINE = "checkout"

# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

CHECKOUT_ORDER_COMMITTED_V1 = "checkout.order.committed.v1"
CHECKOUT_MEMBERSHIP_ACTIVATED_V1 = "checkout.membership.activated.v1"

CHECKOUT_EVENT_TYPES = (
    CHECKOUT_ORDER_COMMITTED_V1,
    CHECKOUT_MEMBERSHIP_ACTIVATED_V1,
)


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def build_order_committed_payload(order: Order) -> dict:
    return {
        "order_id": order.order_id,
        "user_id": order.user_id,
        "total_amount": order.total_amount,
        "item_count": order.item_count,
        "item_summary": order.item_summary,
        "membership_activated": order.membership_activated,
        "payment_method": order.payment_method,
        "created_at": order.created_at.isoformat(),
    }


def build_membership_activated_payload(
    state: MembershipState, order_id: str, activated_at: datetime,
) -> dict:
    return {
        "user_id": state.user_id,
        "order_id": order_id,
        "plan_end": state.plan_end.isoformat() if state.plan_end else None,
        "site_id": state.site_id,
        "site_name": state.site_name,
        "activated_at": activated_at.isoformat(),
    }
