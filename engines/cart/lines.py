"""
GymTastic Cart — Line & Snapshot Types
========================================
A CartLine is one product in the cart. A CartSnapshot is the frozen,
insertion-ordered view the checkout works from: later cart edits do
not change a snapshot already taken.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from core.errors import (
    InvalidQuantityError,
    ReasonCode,
    RejectionReason,
    invalid_quantity,
    is_positive_int,
)
from engines.catalog.domain import Product, ProductKind


def invalid_price(unit_price, *, policy_name: str, product_id=None) -> InvalidQuantityError:
    return InvalidQuantityError(
        RejectionReason(
            code=ReasonCode.INVALID_PRICE,
            message=f"Unit price must be a non-negative integer, got {unit_price!r}.",
            policy_name=policy_name,
            product_id=product_id,
        )
    )


def validate_unit_price(unit_price, *, policy_name: str, product_id=None) -> None:
    if (
        not isinstance(unit_price, int)
        or isinstance(unit_price, bool)
        or unit_price < 0
    ):
        raise invalid_price(unit_price, policy_name=policy_name, product_id=product_id)


@dataclass(frozen=True)
class CartLine:
    product_id: int
    quantity: int
    unit_price: int
    kind: ProductKind

    def __post_init__(self):
        if not is_positive_int(self.quantity):
            raise invalid_quantity(
                self.quantity, policy_name="cart_line", product_id=self.product_id,
            )
        validate_unit_price(
            self.unit_price, policy_name="cart_line", product_id=self.product_id,
        )
        if not isinstance(self.kind, ProductKind):
            raise ValueError("kind must be ProductKind enum.")

    @property
    def subtotal(self) -> int:
        return self.quantity * self.unit_price

    @property
    def is_plan(self) -> bool:
        return self.kind == ProductKind.PLAN

    @classmethod
    def from_product(cls, product: Product, quantity: int) -> "CartLine":
        return cls(
            product_id=product.product_id,
            quantity=quantity,
            unit_price=product.price,
            kind=product.kind,
        )

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "kind": self.kind.value,
        }


@dataclass(frozen=True)
class CartSnapshot:
    """Immutable, insertion-ordered cart contents."""

    lines: Tuple[CartLine, ...] = ()

    def __post_init__(self):
        seen = set()
        for line in self.lines:
            if line.product_id in seen:
                raise ValueError(
                    f"Duplicate cart line for product {line.product_id}."
                )
            seen.add(line.product_id)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total(self) -> int:
        return sum(line.subtotal for line in self.lines)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def plan_lines(self) -> Tuple[CartLine, ...]:
        return tuple(line for line in self.lines if line.kind == ProductKind.PLAN)

    @property
    def merch_lines(self) -> Tuple[CartLine, ...]:
        return tuple(line for line in self.lines if line.kind == ProductKind.MERCH)

    def product_ids(self) -> Tuple[int, ...]:
        return tuple(line.product_id for line in self.lines)
