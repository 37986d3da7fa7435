"""
GymTastic Cart - Persistent Cart Lines
=======================================
"""

from __future__ import annotations

from django.db import models

from engines.cart.lines import CartLine
from engines.catalog.domain import ProductKind
from engines.catalog.models import ProductKindChoice


class CartLineRecord(models.Model):
    user_id = models.CharField(max_length=255, db_index=True)
    product_id = models.IntegerField()
    quantity = models.PositiveIntegerField()
    unit_price = models.PositiveIntegerField()
    kind = models.CharField(
        max_length=10,
        choices=ProductKindChoice.choices,
    )
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "gym_cart_lines"
        ordering = ["user_id", "position"]
        constraints = [
            models.UniqueConstraint(
                fields=["user_id", "product_id"],
                name="uq_cart_line_user_product",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user_id}: {self.product_id} x{self.quantity}"

    def to_line(self) -> CartLine:
        return CartLine(
            product_id=self.product_id,
            quantity=self.quantity,
            unit_price=self.unit_price,
            kind=ProductKind(self.kind),
        )

    @classmethod
    def from_line(cls, user_id: str, line: CartLine, position: int) -> "CartLineRecord":
        return cls(
            user_id=user_id,
            product_id=line.product_id,
            quantity=line.quantity,
            unit_price=line.unit_price,
            kind=line.kind.value,
            position=position,
        )
