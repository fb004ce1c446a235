# gsi_orders/services/inventory_service.py
import re
from typing import Any, Dict

from sqlalchemy.orm import Session

from gsi_orders.domain.errors import InvalidInput, NotFound
from gsi_orders.domain.mappers import to_money
from gsi_orders.repos.order_repo import OrderRepo
from gsi_orders.repos.product_repo import ProductRepo
from gsi_orders.utils.pagination import clamp_page, clamp_limit, offset_for
from gsi_orders.utils.settings import LOW_INVENTORY_THRESHOLD
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
UNKNOWN_BRAND = "Unknown Brand"


def is_uuid(value: Any) -> bool:
    return isinstance(value, str) and bool(UUID_RE.match(value))


class InventoryService:
    """Admin side: stock table, inventory edits and the dashboard metrics."""

    def __init__(self, db: Session):
        self.products = ProductRepo(db)
        self.orders = OrderRepo(db)

    def list_products(self, page: int | None = 1, limit: int | None = 50) -> Dict[str, Any]:
        page = clamp_page(page)
        limit = clamp_limit(limit, default=50, maximum=200)

        logger.info(f"Fetching products for inventory management (page {page}, limit {limit})")

        rows, total = self.products.list_all(offset_for(page, limit), limit)

        return {
            "products": [
                {
                    "id": p.id,
                    "name": p.name,
                    "inventory_count": p.inventory_count or 0,
                    "price": to_money(p.price),
                    "brand_id": p.brand_id,
                    "brand_name": p.brand.name if p.brand else UNKNOWN_BRAND,
                    "created_at": p.created_at,
                }
                for p in rows
            ],
            "total_count": total,
        }

    def update_inventory(self, product_id: Any, new_count: Any) -> Dict[str, Any]:
        if not product_id:
            raise InvalidInput("Missing required field: product_id")

        if isinstance(new_count, bool) or not isinstance(new_count, (int, float)):
            raise InvalidInput("Invalid field: new_inventory_count must be a number")

        if new_count < 0:
            raise InvalidInput("Invalid field: new_inventory_count cannot be negative")

        if new_count != int(new_count):
            raise InvalidInput("Invalid field: new_inventory_count must be an integer")

        if not is_uuid(product_id):
            raise InvalidInput("Invalid field: product_id must be a valid UUID")

        new_count = int(new_count)
        logger.info(f"Updating inventory for product {product_id} to {new_count}")

        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found", details=f"No product exists with ID: {product_id}")

        old_count = product.inventory_count
        product.inventory_count = new_count
        self.products.commit()

        logger.info(f'Updated inventory for "{product.name}" from {old_count} to {new_count}')

        return {
            "success": True,
            "product_id": product_id,
            "new_count": new_count,
            "message": f'Successfully updated inventory for "{product.name}"',
        }

    def dashboard(self) -> Dict[str, Any]:
        logger.info("Fetching admin dashboard metrics")

        _, revenue = self.orders.paid_summary()
        total_orders = self.orders.count_orders()
        low_inventory = self.products.list_low_inventory(LOW_INVENTORY_THRESHOLD)
        recent = self.orders.recent_orders(10)

        metrics = {
            "total_revenue": to_money(revenue),
            "total_orders": total_orders,
            "low_inventory_products": [
                {
                    "id": p.id,
                    "name": p.name,
                    "inventory_count": p.inventory_count,
                    "brand_name": p.brand.name if p.brand else UNKNOWN_BRAND,
                }
                for p in low_inventory
            ],
            "recent_orders": [
                {
                    "id": o.id,
                    "total": to_money(o.total),
                    "status": o.status,
                    "created_at": o.created_at,
                    "user_id": o.user_id,
                }
                for o in recent
            ],
        }

        logger.info(
            f"Dashboard metrics: revenue {metrics['total_revenue']}, orders {total_orders}, "
            f"low inventory {len(low_inventory)}, recent {len(recent)}"
        )
        return metrics
