# gsi_orders/services/order_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from gsi_orders.data.models.order import OrderModel
from gsi_orders.domain.mappers import brand_ref, to_money
from gsi_orders.repos.order_repo import OrderRepo
from gsi_orders.utils.pagination import clamp_page, clamp_limit, offset_for
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Order history. Orders themselves are only created by the payment
    webhook (see CheckoutService.handle_webhook).
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)

    def list_orders(
        self,
        user_id: str,
        page: int | None = 1,
        limit: int | None = 10,
        status: str | None = None,
        include_items: bool = False,
    ) -> Dict[str, Any]:
        page = clamp_page(page)
        limit = clamp_limit(limit, default=10, maximum=50)

        logger.info(f"Fetching orders for user {user_id}, page {page}, include_items {include_items}")

        rows, total = self.repo.list_for_user(
            user_id=user_id,
            status=status or None,
            offset=offset_for(page, limit),
            limit=limit,
            include_items=include_items,
        )

        logger.info(f"Found {len(rows)} orders ({total} total)")

        return {
            "orders": [self._order_dict(o, include_items) for o in rows],
            "total": total,
            "page": page,
            "limit": limit,
        }

    @staticmethod
    def _order_dict(order: OrderModel, include_items: bool) -> Dict[str, Any]:
        data = {
            "id": order.id,
            "user_id": order.user_id,
            "total": to_money(order.total),
            "status": order.status,
            "created_at": order.created_at,
        }
        if include_items:
            data["order_items"] = [
                {
                    "id": i.id,
                    "order_id": i.order_id,
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "price": to_money(i.price),
                    "product": {
                        "id": i.product.id,
                        "name": i.product.name,
                        "images": i.product.images or [],
                        "brand": brand_ref(i.product.brand, with_id=False),
                    } if i.product else None,
                }
                for i in order.items
            ]
        return data
