"""
Tests for engines.stock — in-memory Stock Ledger and the no-oversell rule.
"""

import threading

import pytest

from core.errors import ReasonCode
from engines.stock import InMemoryStockLedger, StockDecrementResult


class TestTryDecrement:
    def test_success(self):
        ledger = InMemoryStockLedger({2: 10})
        result = ledger.try_decrement(2, 3)
        assert result.success
        assert result.rejection is None
        assert ledger.available_quantity(2) == 7

    def test_exact_stock_allowed(self):
        ledger = InMemoryStockLedger({2: 3})
        assert ledger.try_decrement(2, 3).success
        assert ledger.available_quantity(2) == 0

    def test_insufficient_leaves_stock_untouched(self):
        ledger = InMemoryStockLedger({2: 1})
        result = ledger.try_decrement(2, 2)
        assert not result.success
        assert result.rejection.code == ReasonCode.INSUFFICIENT_STOCK
        assert result.rejection.product_id == 2
        assert ledger.available_quantity(2) == 1

    def test_untracked_product_cannot_be_decremented(self):
        ledger = InMemoryStockLedger({1: None})
        result = ledger.try_decrement(1, 1)
        assert not result.success
        assert "not stock-tracked" in result.rejection.message

    def test_unknown_product(self):
        assert not InMemoryStockLedger().try_decrement(99, 1).success

    @pytest.mark.parametrize("quantity", [0, -2, True])
    def test_non_positive_quantity(self, quantity):
        ledger = InMemoryStockLedger({2: 5})
        result = ledger.try_decrement(2, quantity)
        assert result.rejection.code == ReasonCode.INVALID_QUANTITY
        assert ledger.available_quantity(2) == 5

    def test_result_invariants(self):
        with pytest.raises(ValueError):
            StockDecrementResult(product_id=1, quantity=1, success=False)


class TestAdministration:
    def test_restock_existing(self):
        ledger = InMemoryStockLedger({2: 1})
        ledger.restock(2, 4)
        assert ledger.available_quantity(2) == 5

    def test_restock_creates_tracked_record(self):
        ledger = InMemoryStockLedger()
        ledger.restock(8, 3)
        assert ledger.available_quantity(8) == 3

    def test_restock_untracked_rejected(self):
        ledger = InMemoryStockLedger({1: None})
        with pytest.raises(ValueError, match="not stock-tracked"):
            ledger.restock(1, 1)

    def test_set_stock(self):
        ledger = InMemoryStockLedger({2: 4})
        ledger.set_stock(2, None)
        assert ledger.available_quantity(2) is None
        with pytest.raises(ValueError, match="negative"):
            ledger.set_stock(2, -1)


class TestConcurrency:
    def test_two_concurrent_decrements_one_wins(self):
        ledger = InMemoryStockLedger({7: 5})
        barrier = threading.Barrier(2)
        results = []

        def buy():
            barrier.wait()
            results.append(ledger.try_decrement(7, 3))

        threads = [threading.Thread(target=buy) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(r.success for r in results) == [False, True]
        assert ledger.available_quantity(7) == 2

    def test_no_oversell_under_contention(self):
        initial = 50
        ledger = InMemoryStockLedger({7: initial})
        barrier = threading.Barrier(20)
        sold = []
        sold_lock = threading.Lock()

        def buyer():
            barrier.wait()
            for _ in range(10):
                result = ledger.try_decrement(7, 1)
                if result.success:
                    with sold_lock:
                        sold.append(result.quantity)

        threads = [threading.Thread(target=buyer) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(sold) == initial
        assert ledger.available_quantity(7) == 0
