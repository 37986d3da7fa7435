"""
GymTastic Orders — Order Record
=================================
An Order is written exactly once, when a checkout commits, and is
never changed afterwards.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from engines.catalog.domain import ProductKind


@dataclass(frozen=True)
class OrderLine:
    product_id: int
    name: str
    kind: ProductKind
    quantity: int
    unit_price: int

    @property
    def subtotal(self) -> int:
        return self.quantity * self.unit_price

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "kind": self.kind.value,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OrderLine":
        return cls(
            product_id=int(data["product_id"]),
            name=str(data["name"]),
            kind=ProductKind(data["kind"]),
            quantity=int(data["quantity"]),
            unit_price=int(data["unit_price"]),
        )


@dataclass(frozen=True)
class Order:
    """
    Fields:
        order_id:             Unique id (uuid4 string).
        user_id:              Buyer.
        created_at:           Commit time (timezone-aware).
        total_amount:         Σ quantity × unit_price.
        item_summary:         "Name ×q, Name ×q".
        item_count:           Σ quantity.
        lines:                Purchased lines with display names.
        membership_activated: True when a plan line was bought.
        site_id:              Site the plan was bound to, if any.
        payment_method:       Recorded only; payment is simulated.
    """

    user_id: str
    created_at: datetime
    total_amount: int
    item_summary: str
    item_count: int
    lines: Tuple[OrderLine, ...] = ()
    membership_activated: bool = False
    site_id: Optional[int] = None
    payment_method: str = "DEBIT"
    order_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        if not self.user_id:
            raise ValueError("user_id must be non-empty.")
        if self.created_at.tzinfo is None:
            raise ValueError("created_at must be timezone-aware.")
        if self.total_amount < 0:
            raise ValueError("total_amount cannot be negative.")
        if self.item_count <= 0:
            raise ValueError("item_count must be > 0.")
        if self.lines:
            if sum(line.subtotal for line in self.lines) != self.total_amount:
                raise ValueError("total_amount does not match order lines.")
            if sum(line.quantity for line in self.lines) != self.item_count:
                raise ValueError("item_count does not match order lines.")

    def to_dict(self) -> dict:
        return {
            "order_id": self.order_id,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat(),
            "total_amount": self.total_amount,
            "item_summary": self.item_summary,
            "item_count": self.item_count,
            "lines": [line.to_dict() for line in self.lines],
            "membership_activated": self.membership_activated,
            "site_id": self.site_id,
            "payment_method": self.payment_method,
        }
