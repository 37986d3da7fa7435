"""
Tests for engines.cart — Cart Aggregator and cart storage.
"""

import threading

import pytest

from core.errors import InvalidQuantityError, ReasonCode
from engines.cart import CartAggregator, CartLine, CartSnapshot, InMemoryCartStore
from engines.catalog import ProductKind

PLAN, MERCH = ProductKind.PLAN, ProductKind.MERCH


@pytest.fixture
def cart():
    return CartAggregator()


# ── add / merge ──────────────────────────────────────────────

class TestAdd:
    def test_new_line(self, cart):
        cart.add(2, 1, 6990, MERCH)
        assert cart.quantity_for(2) == 1
        assert len(cart) == 1

    def test_same_product_merges(self, cart):
        cart.add(2, 1, 6990, MERCH)
        cart.add(2, 2, 6990, MERCH)
        snapshot = cart.snapshot()
        assert len(snapshot) == 1
        assert snapshot.lines[0].quantity == 3

    def test_merge_refreshes_price(self, cart):
        cart.add(2, 1, 6990, MERCH)
        cart.add(2, 1, 5990, MERCH)
        assert cart.snapshot().lines[0].unit_price == 5990

    def test_insertion_order_preserved(self, cart):
        cart.add(3, 1, 100, MERCH)
        cart.add(1, 1, 19990, PLAN)
        cart.add(3, 1, 100, MERCH)
        assert cart.snapshot().product_ids() == (3, 1)

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", True, None])
    def test_invalid_quantity(self, cart, quantity):
        with pytest.raises(InvalidQuantityError) as excinfo:
            cart.add(2, quantity, 6990, MERCH)
        assert excinfo.value.code == ReasonCode.INVALID_QUANTITY
        assert cart.is_empty

    def test_negative_price(self, cart):
        with pytest.raises(InvalidQuantityError) as excinfo:
            cart.add(2, 1, -5, MERCH)
        assert excinfo.value.code == ReasonCode.INVALID_PRICE


# ── edits ────────────────────────────────────────────────────

class TestEdits:
    def test_remove_and_remove_absent(self, cart):
        cart.add(2, 1, 6990, MERCH)
        cart.remove(2)
        cart.remove(2)
        assert cart.quantity_for(2) == 0
        assert cart.is_empty

    def test_set_quantity(self, cart):
        cart.add(2, 1, 6990, MERCH)
        cart.set_quantity(2, 5)
        assert cart.quantity_for(2) == 5

    def test_set_quantity_absent_is_noop(self, cart):
        cart.set_quantity(9, 5)
        assert cart.is_empty

    def test_set_quantity_invalid(self, cart):
        cart.add(2, 1, 6990, MERCH)
        with pytest.raises(InvalidQuantityError):
            cart.set_quantity(2, 0)
        assert cart.quantity_for(2) == 1

    def test_remove_products_and_clear(self, cart):
        cart.add(1, 1, 19990, PLAN)
        cart.add(2, 1, 6990, MERCH)
        cart.add(3, 1, 990, MERCH)
        cart.remove_products([1, 3, 42])
        assert cart.snapshot().product_ids() == (2,)
        cart.clear()
        assert cart.is_empty


# ── totals & snapshot ────────────────────────────────────────

class TestTotals:
    def test_totals_by_kind(self, cart):
        cart.add(1, 1, 19990, PLAN)
        cart.add(2, 2, 6990, MERCH)
        assert cart.total() == 33970
        assert cart.subtotal_for(PLAN) == 19990
        assert cart.subtotal_for(MERCH) == 13980
        assert cart.item_count() == 3

    def test_snapshot_is_isolated_from_later_edits(self, cart):
        cart.add(2, 2, 6990, MERCH)
        snapshot = cart.snapshot()
        cart.add(2, 5, 6990, MERCH)
        cart.clear()
        assert snapshot.lines[0].quantity == 2
        assert snapshot.total == 13980

    def test_concurrent_adds_and_reads_agree(self, cart):
        seen = []

        def worker():
            for _ in range(50):
                cart.add(2, 1, 6990, MERCH)
                seen.append((cart.quantity_for(2), len(cart), cart.is_empty))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert cart.quantity_for(2) == 200
        assert len(cart) == 1
        assert all(quantity >= 1 and size == 1 and not empty for quantity, size, empty in seen)

    def test_snapshot_partitions(self, cart):
        cart.add(1, 1, 19990, PLAN)
        cart.add(2, 2, 6990, MERCH)
        snapshot = cart.snapshot()
        assert [l.product_id for l in snapshot.plan_lines] == [1]
        assert [l.product_id for l in snapshot.merch_lines] == [2]

    def test_snapshot_rejects_duplicate_lines(self):
        line = CartLine(2, 1, 6990, MERCH)
        with pytest.raises(ValueError, match="Duplicate"):
            CartSnapshot(lines=(line, line))


# ── durable store ────────────────────────────────────────────

class TestCartStore:
    def test_mutations_are_persisted_and_restored(self):
        store = InMemoryCartStore()
        cart = CartAggregator(user_id="ana@example.com", store=store)
        cart.add(2, 2, 6990, MERCH)
        cart.add(1, 1, 19990, PLAN)

        restored = CartAggregator.load("ana@example.com", store)
        assert restored.snapshot() == cart.snapshot()

        restored.clear()
        assert store.load("ana@example.com") == ()

    def test_store_requires_user(self):
        with pytest.raises(ValueError, match="user_id"):
            CartAggregator(store=InMemoryCartStore())
