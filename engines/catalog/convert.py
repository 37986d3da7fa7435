"""
GymTastic Catalog — Boundary Conversion
=========================================
Explicit conversion between the remote product API payloads and the
canonical Product / Site types. Nothing outside this module reads
raw catalog dictionaries.

The remote API publishes Spanish field names; they are mapped here
once instead of field-by-field in every caller.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from engines.catalog.domain import Product, ProductKind, Site

REMOTE_FIELD_ALIASES = {
    "id": "product_id",
    "nombre": "name",
    "precio": "price",
    "tipo": "kind",
    "descripcion": "description",
    "duracionDias": "plan_duration_days",
}

REMOTE_SITE_ALIASES = {
    "id": "site_id",
    "nombre": "name",
    "direccion": "address",
}


def _canonical(data: Mapping[str, Any], aliases: Mapping[str, str]) -> dict:
    out: dict = {}
    for key, value in data.items():
        out[aliases.get(key, key)] = value
    return out


def _as_money(value: Any, *, field_name: str) -> int:
    # The remote API serialises prices as floats (19990.0).
    if isinstance(value, bool) or value is None:
        raise ValueError(f"{field_name} must be numeric.")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field_name} must be a whole amount, got {value}.")
        return int(value)
    return int(value)


def product_from_dict(data: Mapping[str, Any]) -> Product:
    values = _canonical(data, REMOTE_FIELD_ALIASES)
    kind = ProductKind.parse(values["kind"])
    duration = values.get("plan_duration_days")
    return Product(
        product_id=int(values["product_id"]),
        name=str(values["name"]).strip(),
        price=_as_money(values["price"], field_name="price"),
        kind=kind,
        plan_duration_days=int(duration) if duration is not None and kind == ProductKind.PLAN else None,
        description=values.get("description") or None,
    )


def stock_from_dict(data: Mapping[str, Any]) -> Optional[int]:
    """
    Stock level carried by a remote product payload.

    Plans are never stock-tracked, whatever the payload says.
    """
    values = _canonical(data, REMOTE_FIELD_ALIASES)
    if ProductKind.parse(values["kind"]) == ProductKind.PLAN:
        return None
    stock = values.get("stock")
    return None if stock is None else int(stock)


def product_to_dict(product: Product) -> dict:
    return {
        "product_id": product.product_id,
        "name": product.name,
        "price": product.price,
        "kind": product.kind.wire_value,
        "plan_duration_days": product.plan_duration_days,
        "description": product.description,
    }


def site_from_dict(data: Mapping[str, Any]) -> Site:
    values = _canonical(data, REMOTE_SITE_ALIASES)
    return Site(
        site_id=int(values["site_id"]),
        name=str(values["name"]),
        address=str(values.get("address", "")),
        lat=float(values["lat"]),
        lng=float(values["lng"]),
    )


def site_to_dict(site: Site) -> dict:
    return {
        "site_id": site.site_id,
        "name": site.name,
        "address": site.address,
        "lat": site.lat,
        "lng": site.lng,
    }


def cart_line_for(product: Product, quantity: int):
    """CartLine for `quantity` units of `product` at its current price."""
    from engines.cart.lines import CartLine

    return CartLine.from_product(product, quantity)
