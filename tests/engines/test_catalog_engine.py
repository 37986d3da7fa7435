"""
Tests for engines.catalog — product/site types and boundary conversion.
"""

import pytest

from core.errors import ProductNotFoundError
from engines.cart.lines import CartLine
from engines.catalog import (
    DEFAULT_SITES,
    InMemoryProductCatalog,
    InMemorySiteDirectory,
    Product,
    ProductKind,
    Site,
    cart_line_for,
    product_from_dict,
    product_to_dict,
    site_from_dict,
    stock_from_dict,
)

PLAN = Product(product_id=1, name="Plan Mensual", price=19990, kind=ProductKind.PLAN,
               plan_duration_days=30)
SHAKER = Product(product_id=2, name="Shaker", price=6990, kind=ProductKind.MERCH)


class TestProductKind:
    @pytest.mark.parametrize("raw,expected", [
        ("plan", ProductKind.PLAN),
        ("PLAN", ProductKind.PLAN),
        (" merch ", ProductKind.MERCH),
        ("merchandise", ProductKind.MERCH),
        (ProductKind.MERCH, ProductKind.MERCH),
    ])
    def test_parse(self, raw, expected):
        assert ProductKind.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["", "service", None, 3])
    def test_parse_unknown(self, raw):
        with pytest.raises(ValueError, match="Unknown product kind"):
            ProductKind.parse(raw)

    def test_wire_value(self):
        assert ProductKind.PLAN.wire_value == "plan"


class TestProduct:
    def test_negative_price_rejected(self):
        with pytest.raises(ValueError, match="price"):
            Product(product_id=3, name="Toalla", price=-1, kind=ProductKind.MERCH)

    def test_duration_only_for_plans(self):
        with pytest.raises(ValueError, match="PLAN"):
            Product(product_id=3, name="Toalla", price=100, kind=ProductKind.MERCH,
                    plan_duration_days=30)

    def test_is_plan(self):
        assert PLAN.is_plan
        assert not SHAKER.is_plan


class TestConversion:
    def test_product_from_remote_payload(self):
        product = product_from_dict({
            "id": 7,
            "nombre": "Proteína Whey",
            "precio": 24990.0,
            "tipo": "merch",
            "descripcion": "",
            "stock": 12,
        })
        assert product == Product(
            product_id=7, name="Proteína Whey", price=24990, kind=ProductKind.MERCH,
        )

    def test_fractional_price_rejected(self):
        with pytest.raises(ValueError, match="whole amount"):
            product_from_dict({"id": 7, "nombre": "X", "precio": 10.5, "tipo": "merch"})

    def test_round_trip_through_canonical_keys(self):
        assert product_from_dict(product_to_dict(PLAN)) == PLAN

    def test_stock_from_payload(self):
        assert stock_from_dict({"id": 7, "tipo": "merch", "stock": 4}) == 4
        assert stock_from_dict({"id": 7, "tipo": "merch"}) is None
        # plans are never stock-tracked
        assert stock_from_dict({"id": 1, "tipo": "plan", "stock": 99}) is None

    def test_site_from_dict(self):
        site = site_from_dict({
            "id": 9, "nombre": "Sede Maipú", "direccion": "Pajaritos 1",
            "lat": -33.51, "lng": -70.75,
        })
        assert site == Site(9, "Sede Maipú", "Pajaritos 1", -33.51, -70.75)

    def test_cart_line_for(self):
        line = cart_line_for(SHAKER, 2)
        assert line == CartLine(product_id=2, quantity=2, unit_price=6990,
                                kind=ProductKind.MERCH)


class TestInMemoryCatalog:
    def test_lookups(self):
        catalog = InMemoryProductCatalog([PLAN, SHAKER])
        assert catalog.get(1) == PLAN
        assert catalog.names_by_id([1, 2, 99]) == {1: "Plan Mensual", 2: "Shaker"}
        assert catalog.kinds_by_id([2]) == {2: ProductKind.MERCH}
        assert catalog.plan_duration(1) == 30
        assert catalog.plan_duration(2) is None
        assert catalog.plan_duration(99) is None

    def test_unknown_product(self):
        with pytest.raises(ProductNotFoundError):
            InMemoryProductCatalog().get(5)


class TestSites:
    def test_default_sites(self):
        directory = InMemorySiteDirectory()
        names = [site.name for site in directory.list_sites()]
        assert names == ["Sede Centro", "Sede Ñuñoa", "Sede Providencia"]
        assert directory.get(2) == DEFAULT_SITES[1]
        assert directory.get(42) is None

    def test_label(self):
        assert DEFAULT_SITES[0].label() == "Sede Centro • Alameda 123"

    def test_coordinates_validated(self):
        with pytest.raises(ValueError, match="lat"):
            Site(1, "X", "Y", 120.0, 0.0)
