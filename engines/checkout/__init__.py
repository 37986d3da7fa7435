"""
GymTastic Checkout — Public API
=================================
"""

from engines.checkout.events import (
    CHECKOUT_EVENT_TYPES,
    CHECKOUT_MEMBERSHIP_ACTIVATED_V1,
    CHECKOUT_ORDER_COMMITTED_V1,
)
from engines.checkout.outcomes import CheckoutOutcome, CheckoutStage, CheckoutStatus
from engines.checkout.policies import PAYMENT_METHODS
from engines.checkout.service import CheckoutService

__all__ = [
    "CheckoutService",
    "CheckoutOutcome",
    "CheckoutStatus",
    "CheckoutStage",
    "PAYMENT_METHODS",
    "CHECKOUT_EVENT_TYPES",
    "CHECKOUT_ORDER_COMMITTED_V1",
    "CHECKOUT_MEMBERSHIP_ACTIVATED_V1",
]
