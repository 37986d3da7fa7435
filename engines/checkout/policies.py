"""
GymTastic Checkout — Validation Policies
==========================================
Checks run in the VALIDATING stage, before any state is touched.
Each returns a RejectionReason or None.
"""

from __future__ import annotations

from typing import Optional

from core.errors import ReasonCode, RejectionReason
from engines.cart.lines import CartSnapshot

PAYMENT_METHODS = ("DEBIT", "CREDIT", "TRANSFER")


def normalize_user_id(user_id) -> str:
    """Users are keyed by e-mail: trimmed and lower-cased."""
    if not isinstance(user_id, str):
        return ""
    return user_id.strip().lower()


def user_id_policy(user_id: str) -> Optional[RejectionReason]:
    if not user_id:
        return RejectionReason(
            code=ReasonCode.INVALID_USER,
            message="Checkout requires a signed-in user.",
            policy_name="user_id_policy",
        )
    return None


def empty_cart_policy(snapshot: CartSnapshot) -> Optional[RejectionReason]:
    if snapshot.is_empty:
        return RejectionReason(
            code=ReasonCode.EMPTY_CART,
            message="Cart is empty.",
            policy_name="empty_cart_policy",
        )
    return None


def payment_method_policy(payment_method) -> Optional[RejectionReason]:
    normalized = payment_method.strip().upper() if isinstance(payment_method, str) else ""
    if normalized not in PAYMENT_METHODS:
        return RejectionReason(
            code=ReasonCode.INVALID_PAYMENT_METHOD,
            message=(
                f"Unknown payment method {payment_method!r}; "
                f"expected one of {', '.join(PAYMENT_METHODS)}."
            ),
            policy_name="payment_method_policy",
        )
    return None


def known_products_policy(
    snapshot: CartSnapshot,
    catalog=None,
) -> list[RejectionReason]:
    """
    One PRODUCT_NOT_FOUND per cart line the catalog does not know.

    Without a catalog this policy passes.
    """
    if catalog is None:
        return []

    product_ids = snapshot.product_ids()
    known = catalog.kinds_by_id(product_ids)
    return [
        RejectionReason(
            code=ReasonCode.PRODUCT_NOT_FOUND,
            message=f"Product {product_id} is no longer in the catalog.",
            policy_name="known_products_policy",
            product_id=product_id,
        )
        for product_id in product_ids
        if product_id not in known
    ]


def site_required_policy(snapshot: CartSnapshot, site) -> Optional[RejectionReason]:
    """Plans are bound to a site; merch-only carts need none."""
    if snapshot.plan_lines and site is None:
        return RejectionReason(
            code=ReasonCode.SITE_REQUIRED,
            message="Select a gym site before buying a plan.",
            policy_name="site_required_policy",
        )
    return None
