# gsi_orders/services/catalog_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from gsi_orders.domain.errors import InvalidInput, NotFound
from gsi_orders.domain.mappers import product_dict
from gsi_orders.repos.brand_repo import BrandRepo
from gsi_orders.repos.product_repo import ProductRepo, SORTABLE_FIELDS
from gsi_orders.utils.pagination import clamp_page, clamp_limit, offset_for
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogService:
    """Read side of the storefront: brands and in-stock products."""

    def __init__(self, db: Session):
        self.brands = BrandRepo(db)
        self.products = ProductRepo(db)

    def list_brands(self) -> Dict[str, Any]:
        brands = self.brands.list_brands()
        logger.info(f"Found {len(brands)} brands")
        return {
            "brands": [
                {
                    "id": b.id,
                    "name": b.name,
                    "slug": b.slug,
                    "theme_config": b.theme_config or {},
                }
                for b in brands
            ],
            "total": len(brands),
        }

    def list_products(
        self,
        brand: str | None = None,
        search: str | None = None,
        page: int | None = 1,
        limit: int | None = 20,
        sort: str | None = "created_at",
        order: str | None = "desc",
    ) -> Dict[str, Any]:
        page = clamp_page(page)
        limit = clamp_limit(limit, default=20, maximum=100)
        offset = offset_for(page, limit)

        logger.info(f"Fetching products - page {page}, limit {limit}, brand {brand or 'all'}")

        brand_id = None
        if brand and brand != "all":
            found = self.brands.get_by_slug(brand)
            if not found:
                raise InvalidInput(f"Brand '{brand}' not found")
            brand_id = found.id

        sort_field = sort if sort in SORTABLE_FIELDS else "created_at"

        rows, total = self.products.list_in_stock(
            brand_id=brand_id,
            search=search or None,
            sort_field=sort_field,
            ascending=order == "asc",
            offset=offset,
            limit=limit,
        )

        logger.info(f"Found {len(rows)} products ({total} total)")

        return {
            "products": [product_dict(p) for p in rows],
            "total": total,
            "page": page,
            "limit": limit,
            "has_more": offset + limit < total,
        }

    def get_product(self, product_id: str) -> Dict[str, Any]:
        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found")
        return product_dict(product)
