"""
GymTastic Checkout — Checkout Outcome Contract
================================================
Every checkout produces exactly one Outcome. No exceptions escape.

COMMITTED → stock decremented, membership saved (if a plan was bought),
            order appended.
ABORTED   → no persisted side effects remain; reasons are mandatory.

Rules:
- Outcome is immutable (frozen dataclass)
- ABORTED must contain at least one RejectionReason and no order
- COMMITTED must contain an order and no reasons
- stages records the state machine path actually taken
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from core.errors import RejectionReason
from engines.orders.records import Order


# ══════════════════════════════════════════════════════════════
# STATUS & STAGES
# ══════════════════════════════════════════════════════════════

class CheckoutStatus(Enum):
    COMMITTED = "COMMITTED"
    ABORTED = "ABORTED"


class CheckoutStage(Enum):
    """
    VALIDATING → RESERVING_STOCK → ACTIVATING_MEMBERSHIP
               → RECORDING_ORDER → COMMITTED

    RESERVING_STOCK and ACTIVATING_MEMBERSHIP are skipped when the cart
    holds no merch or no plan lines. Any failure ends in ABORTED.
    """
    VALIDATING = "VALIDATING"
    RESERVING_STOCK = "RESERVING_STOCK"
    ACTIVATING_MEMBERSHIP = "ACTIVATING_MEMBERSHIP"
    RECORDING_ORDER = "RECORDING_ORDER"
    COMMITTED = "COMMITTED"
    ABORTED = "ABORTED"


# ══════════════════════════════════════════════════════════════
# CHECKOUT OUTCOME
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CheckoutOutcome:
    """
    Result of one checkout attempt.

    Fields:
        status:               COMMITTED or ABORTED.
        order:                The appended Order (COMMITTED only).
        reasons:              Why the checkout aborted (ABORTED only).
        membership_activated: A plan was activated by this checkout.
        stages:               Stages traversed, ending in COMMITTED/ABORTED.
        rollback_complete:    False when compensation itself failed and
                              some stock may remain decremented.
        caused_by:            Original failure when compensation failed.
    """

    status: CheckoutStatus
    order: Optional[Order] = None
    reasons: Tuple[RejectionReason, ...] = ()
    membership_activated: bool = False
    stages: Tuple[CheckoutStage, ...] = ()
    rollback_complete: bool = True
    caused_by: Optional[RejectionReason] = None

    def __post_init__(self):
        if not isinstance(self.status, CheckoutStatus):
            raise ValueError(
                f"status must be CheckoutStatus, got {type(self.status).__name__}."
            )

        if self.status == CheckoutStatus.ABORTED:
            if not self.reasons:
                raise ValueError(
                    "ABORTED outcome must include a RejectionReason. "
                    "No silent aborts allowed."
                )
            if self.order is not None:
                raise ValueError("ABORTED outcome must NOT include an order.")
            if self.membership_activated:
                raise ValueError("ABORTED outcome cannot activate a membership.")

        if self.status == CheckoutStatus.COMMITTED:
            if self.order is None:
                raise ValueError("COMMITTED outcome must include an order.")
            if self.reasons:
                raise ValueError(
                    "COMMITTED outcome must NOT include a RejectionReason."
                )
            if not self.rollback_complete or self.caused_by is not None:
                raise ValueError("COMMITTED outcome cannot carry rollback state.")

    @property
    def is_committed(self) -> bool:
        return self.status == CheckoutStatus.COMMITTED

    @property
    def is_aborted(self) -> bool:
        return self.status == CheckoutStatus.ABORTED

    @property
    def reason(self) -> Optional[RejectionReason]:
        """First (primary) reason, or None when committed."""
        return self.reasons[0] if self.reasons else None

    @property
    def reason_codes(self) -> Tuple[str, ...]:
        return tuple(r.code for r in self.reasons)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "order": self.order.to_dict() if self.order else None,
            "reasons": [r.to_dict() for r in self.reasons],
            "membership_activated": self.membership_activated,
            "stages": [s.value for s in self.stages],
            "rollback_complete": self.rollback_complete,
            "caused_by": self.caused_by.to_dict() if self.caused_by else None,
        }
