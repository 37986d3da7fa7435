"""
GymTastic Orders - Persistent Order Log
========================================
Orders are INSERT-only. Refunds or corrections are new records,
never edits of an existing one.
"""

from __future__ import annotations

from django.db import models

from engines.orders.records import Order, OrderLine


class OrderRecord(models.Model):
    order_id = models.CharField(max_length=64, unique=True)
    user_id = models.CharField(max_length=255, db_index=True)
    created_at = models.DateTimeField()
    total_amount = models.PositiveBigIntegerField()
    item_summary = models.TextField()
    item_count = models.PositiveIntegerField()
    lines = models.JSONField(default=list)
    membership_activated = models.BooleanField(default=False)
    site_id = models.IntegerField(null=True, blank=True)
    payment_method = models.CharField(max_length=20, default="DEBIT")

    class Meta:
        db_table = "gym_orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user_id", "created_at"], name="idx_order_user_created"),
        ]

    def __str__(self) -> str:
        return f"{self.order_id} ({self.user_id})"

    def save(self, *args, **kwargs):
        """
        GUARD: INSERT only. No updates to recorded orders.
        """
        if not self._state.adding:
            raise PermissionError(
                "Orders are immutable. Cannot update a recorded order."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """
        GUARD: Orders are never deleted.
        """
        raise PermissionError("Orders are never deleted.")

    @staticmethod
    def fields_from_order(order: Order) -> dict:
        return {
            "order_id": order.order_id,
            "user_id": order.user_id,
            "created_at": order.created_at,
            "total_amount": order.total_amount,
            "item_summary": order.item_summary,
            "item_count": order.item_count,
            "lines": [line.to_dict() for line in order.lines],
            "membership_activated": order.membership_activated,
            "site_id": order.site_id,
            "payment_method": order.payment_method,
        }

    def to_order(self) -> Order:
        return Order(
            order_id=self.order_id,
            user_id=self.user_id,
            created_at=self.created_at,
            total_amount=self.total_amount,
            item_summary=self.item_summary,
            item_count=self.item_count,
            lines=tuple(OrderLine.from_dict(line) for line in self.lines),
            membership_activated=self.membership_activated,
            site_id=self.site_id,
            payment_method=self.payment_method,
        )
