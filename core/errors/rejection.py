"""
GymTastic Core — Rejection Model
==================================
Structured reasons for refused cart edits, stock decrements and
checkouts.

A rejection is a VALUE, not an exception. The stock ledger returns
them so the checkout orchestrator can aggregate several per-product
failures before reporting, and checkout outcomes carry them to the UI.

Every rejection must be:
- Deterministic (same input → same rejection)
- Machine-readable (code)
- Human-readable (message)
- Attributable (policy_name)
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for a refused operation.

    Fields:
        code:        Machine-readable code (see ReasonCode).
        message:     Human-readable explanation.
        policy_name: Name of the policy or step that refused.
        product_id:  Product concerned, for per-line failures.
    """

    code: str
    message: str
    policy_name: str
    product_id: int | None = None

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
            "product_id": self.product_id,
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Input validation ──────────────────────────────────────
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INVALID_PRICE = "INVALID_PRICE"
    INVALID_USER = "INVALID_USER"

    # ── Checkout preconditions ────────────────────────────────
    EMPTY_CART = "EMPTY_CART"
    SITE_REQUIRED = "SITE_REQUIRED"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    CHECKOUT_IN_PROGRESS = "CHECKOUT_IN_PROGRESS"
    INVALID_PAYMENT_METHOD = "INVALID_PAYMENT_METHOD"

    # ── Policy / domain ───────────────────────────────────────
    MEMBERSHIP_RENEWAL_NOT_ELIGIBLE = "MEMBERSHIP_RENEWAL_NOT_ELIGIBLE"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"

    # ── Interruption ──────────────────────────────────────────
    CHECKOUT_CANCELLED = "CHECKOUT_CANCELLED"
    CHECKOUT_TIMEOUT = "CHECKOUT_TIMEOUT"

    # ── Infrastructure ────────────────────────────────────────
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"
