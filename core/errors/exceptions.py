"""
GymTastic Core — Exceptions
=============================
Raised for local input validation and for infrastructure faults.

Domain refusals (stock, renewal, empty cart) are NOT exceptions;
they travel as RejectionReason values. Storage implementations raise
PersistenceError subclasses, which the checkout orchestrator converts
into PERSISTENCE_FAILURE outcomes after compensating.
"""

from __future__ import annotations

from core.errors.rejection import ReasonCode, RejectionReason


class CommerceError(Exception):
    """Base error for the commerce core."""
    pass


class InvalidQuantityError(CommerceError, ValueError):
    """Cart edit with a non-positive or non-integer quantity (or bad price)."""

    def __init__(self, reason: RejectionReason):
        self.reason = reason
        super().__init__(reason.message)

    @property
    def code(self) -> str:
        return self.reason.code


class PersistenceError(CommerceError):
    """A storage operation could not be completed."""
    pass


class StockPersistenceError(PersistenceError):
    """Stock ledger storage failure."""
    pass


class MembershipPersistenceError(PersistenceError):
    """Membership state could not be read or written."""
    pass


class OrderPersistenceError(PersistenceError):
    """Order log append/read failure."""
    pass


class CartPersistenceError(PersistenceError):
    """Durable cart storage failure."""
    pass


class CatalogPersistenceError(PersistenceError):
    """Product or site tables could not be read or written."""
    pass


class ProductNotFoundError(CommerceError, LookupError):
    """Catalog has no product with the requested id."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found in catalog.")


def invalid_quantity(
    quantity,
    *,
    policy_name: str,
    product_id: int | None = None,
) -> InvalidQuantityError:
    """Build the standard INVALID_QUANTITY error for a bad quantity."""
    return InvalidQuantityError(
        RejectionReason(
            code=ReasonCode.INVALID_QUANTITY,
            message=f"Quantity must be a positive integer, got {quantity!r}.",
            policy_name=policy_name,
            product_id=product_id,
        )
    )


def is_positive_int(value) -> bool:
    """True for ints > 0. Bools are not quantities."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
