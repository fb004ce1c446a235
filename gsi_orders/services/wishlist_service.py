# gsi_orders/services/wishlist_service.py
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gsi_orders.data.models.wishlist_item import WishlistItemModel
from gsi_orders.domain.errors import InvalidInput, NotFound, Conflict
from gsi_orders.domain.mappers import product_summary
from gsi_orders.repos.product_repo import ProductRepo
from gsi_orders.repos.wishlist_repo import WishlistRepo
from gsi_orders.utils.pagination import clamp_page, clamp_limit, offset_for, total_pages
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)

ACTIONS = ("add", "remove")


class WishlistService:
    def __init__(self, db: Session):
        self.repo = WishlistRepo(db)
        self.products = ProductRepo(db)

    def toggle(self, user_id: str, product_id: str | None, action: str | None) -> Dict[str, Any]:
        """Add or remove a product; `is_saved` in the result is the new state."""
        if not product_id or not action:
            raise InvalidInput("Missing required fields: productId, action")

        if action not in ACTIONS:
            raise InvalidInput('Action must be either "add" or "remove"')

        logger.info(f"Wishlist {action} of product {product_id} for user {user_id}")

        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        saved = self.repo.get_item(user_id, product_id) is not None

        if action == "add":
            if saved:
                raise Conflict("Product is already in wishlist", isSaved=True)
            try:
                self.repo.add_item(WishlistItemModel(user_id=user_id, product_id=product_id))
            except IntegrityError:
                self.repo.rollback()
                raise Conflict("Product is already in wishlist", isSaved=True)

            logger.info(f"Added to wishlist: {product.name}")
            return {
                "success": True,
                "is_saved": True,
                "message": f'Added "{product.name}" to wishlist',
            }

        if not saved:
            raise NotFound("Product is not in wishlist", isSaved=False)

        self.repo.delete_item(user_id, product_id)
        logger.info(f"Removed from wishlist: {product.name}")
        return {
            "success": True,
            "is_saved": False,
            "message": f'Removed "{product.name}" from wishlist',
        }

    def list_wishlist(self, user_id: str, page: int | None = 1, limit: int | None = 20) -> Dict[str, Any]:
        page = clamp_page(page)
        limit = clamp_limit(limit, default=20, maximum=100)

        rows, total = self.repo.list_for_user(user_id, offset_for(page, limit), limit)

        logger.info(f"Found {len(rows)} wishlist items for user {user_id}")

        return {
            "wishlist": [
                {"product_id": w.product_id, "product": product_summary(w.product)}
                for w in rows
            ],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": total_pages(total, limit),
            },
            "total_items": total,
        }

    def is_saved(self, user_id: str, product_id: str | None) -> Dict[str, Any]:
        if not product_id:
            raise InvalidInput("Product ID is required")
        return {"is_saved": self.repo.get_item(user_id, product_id) is not None, "success": True}
