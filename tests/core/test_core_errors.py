"""
Tests for core.errors — Rejection values and exception taxonomy.
"""

import pytest

from core.errors import (
    CommerceError,
    InvalidQuantityError,
    PersistenceError,
    ProductNotFoundError,
    ReasonCode,
    RejectionReason,
    StockPersistenceError,
    invalid_quantity,
    is_positive_int,
)


class TestRejectionReason:
    def test_valid_reason(self):
        reason = RejectionReason(
            code=ReasonCode.INSUFFICIENT_STOCK,
            message="Only 1 left.",
            policy_name="stock_decrement",
            product_id=2,
        )
        assert reason.to_dict() == {
            "code": "INSUFFICIENT_STOCK",
            "message": "Only 1 left.",
            "policy_name": "stock_decrement",
            "product_id": 2,
        }

    @pytest.mark.parametrize("field", ["code", "message", "policy_name"])
    def test_empty_fields_rejected(self, field):
        values = {"code": "X", "message": "m", "policy_name": "p"}
        values[field] = ""
        with pytest.raises(ValueError, match=field):
            RejectionReason(**values)

    def test_frozen(self):
        reason = RejectionReason(code="X", message="m", policy_name="p")
        with pytest.raises(AttributeError):
            reason.code = "Y"


class TestExceptions:
    def test_invalid_quantity_is_value_error(self):
        err = invalid_quantity(0, policy_name="cart_add", product_id=3)
        assert isinstance(err, InvalidQuantityError)
        assert isinstance(err, ValueError)
        assert isinstance(err, CommerceError)
        assert err.code == ReasonCode.INVALID_QUANTITY
        assert err.reason.product_id == 3

    def test_persistence_hierarchy(self):
        assert issubclass(StockPersistenceError, PersistenceError)
        assert issubclass(PersistenceError, CommerceError)

    def test_product_not_found(self):
        err = ProductNotFoundError(42)
        assert isinstance(err, LookupError)
        assert err.product_id == 42
        assert "42" in str(err)


class TestIsPositiveInt:
    @pytest.mark.parametrize("value", [1, 5, 10_000])
    def test_positive(self, value):
        assert is_positive_int(value)

    @pytest.mark.parametrize("value", [0, -1, 1.0, "1", None, True])
    def test_not_positive_int(self, value):
        assert not is_positive_int(value)
