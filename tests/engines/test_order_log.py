"""
Tests for engines.orders — Order record and in-memory append-only log.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.errors import OrderPersistenceError
from engines.catalog import ProductKind
from engines.orders import InMemoryOrderLog, Order, OrderLine

T0 = datetime(2025, 2, 1, 10, 0, tzinfo=timezone.utc)


def _order(user="ana@example.com", at=T0, **overrides) -> Order:
    line = OrderLine(product_id=2, name="Shaker", kind=ProductKind.MERCH,
                     quantity=2, unit_price=6990)
    values = dict(
        user_id=user,
        created_at=at,
        total_amount=13980,
        item_summary="Shaker ×2",
        item_count=2,
        lines=(line,),
    )
    values.update(overrides)
    return Order(**values)


class TestOrder:
    def test_ids_are_unique(self):
        assert _order().order_id != _order().order_id

    def test_total_must_match_lines(self):
        with pytest.raises(ValueError, match="total_amount"):
            _order(total_amount=1)

    def test_count_must_match_lines(self):
        with pytest.raises(ValueError, match="item_count"):
            _order(item_count=5)

    def test_requires_aware_timestamp(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            _order(at=datetime(2025, 1, 1))

    def test_to_dict(self):
        data = _order().to_dict()
        assert data["lines"][0] == {
            "product_id": 2, "name": "Shaker", "kind": "MERCH",
            "quantity": 2, "unit_price": 6990,
        }
        assert data["payment_method"] == "DEBIT"

    def test_line_round_trip(self):
        line = _order().lines[0]
        assert OrderLine.from_dict(line.to_dict()) == line


class TestInMemoryOrderLog:
    def test_history_is_newest_first_and_per_user(self):
        log = InMemoryOrderLog()
        first = _order(at=T0)
        second = _order(at=T0 + timedelta(days=1))
        other = _order(user="ben@example.com")
        for order in (first, other, second):
            log.append(order)

        assert log.list_for_user("ana@example.com") == [second, first]
        assert log.list_for_user("ben@example.com") == [other]
        assert log.list_for_user("nobody@example.com") == []

    def test_same_timestamp_keeps_append_order_reversed(self):
        log = InMemoryOrderLog()
        a, b = _order(), _order()
        log.append(a)
        log.append(b)
        assert log.list_for_user("ana@example.com") == [b, a]

    def test_duplicate_order_id_rejected(self):
        log = InMemoryOrderLog()
        order = _order()
        log.append(order)
        with pytest.raises(OrderPersistenceError):
            log.append(order)
        assert len(log) == 1
