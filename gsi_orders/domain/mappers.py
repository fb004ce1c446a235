# gsi_orders/domain/mappers.py
"""Row -> response dict helpers shared by several services."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict

from gsi_orders.data.models.brand import BrandModel
from gsi_orders.data.models.product import ProductModel

CENT = Decimal("0.01")


def to_money(value) -> float:
    """Round half-up to cents and hand back a float for JSON."""
    return float(Decimal(str(value or 0)).quantize(CENT, rounding=ROUND_HALF_UP))


def brand_ref(brand: BrandModel | None, with_id: bool = True) -> Dict[str, Any] | None:
    if brand is None:
        return None
    ref = {"name": brand.name, "slug": brand.slug}
    if with_id:
        ref["id"] = brand.id
    return ref


def product_dict(product: ProductModel) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": to_money(product.price),
        "brand_id": product.brand_id,
        "inventory_count": product.inventory_count,
        "images": product.images or [],
        "created_at": product.created_at,
        "brand": brand_ref(product.brand),
    }


def product_summary(product: ProductModel | None) -> Dict[str, Any] | None:
    if product is None:
        return None
    return {
        "id": product.id,
        "name": product.name,
        "price": to_money(product.price),
        "images": product.images or [],
        "inventory_count": product.inventory_count,
        "brand": brand_ref(product.brand, with_id=False),
    }
