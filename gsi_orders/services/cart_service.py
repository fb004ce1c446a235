# gsi_orders/services/cart_service.py
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gsi_orders.data.models.cart_item import CartItemModel
from gsi_orders.domain.errors import InvalidInput, NotFound, Conflict
from gsi_orders.domain.mappers import product_summary, to_money
from gsi_orders.repos.cart_repo import CartRepo
from gsi_orders.repos.product_repo import ProductRepo
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)

MAX_LINE_QUANTITY = 99


class CartService:
    """
    Cart use cases, one cart per user.
    commands (add, update, remove, clear) change state and return the fresh cart,
    query (get) only reads
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query
    def get_cart(self, user_id: str) -> Dict[str, Any]:
        items = self.repo.get_cart_items(user_id)

        total = sum(
            (Decimal(str(i.product.price)) * i.quantity for i in items if i.product),
            Decimal("0.00"),
        )
        item_count = sum(i.quantity for i in items)

        logger.info(f"Cart for user {user_id}: {len(items)} lines, {item_count} items")

        return {
            "items": [
                {
                    "id": i.id,
                    "user_id": i.user_id,
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "created_at": i.created_at,
                    "updated_at": i.updated_at,
                    "product": product_summary(i.product),
                }
                for i in items
            ],
            "total": to_money(total),
            "item_count": item_count,
        }

    #commands
    def add_item(self, user_id: str, product_id: str | None, quantity: int | None = 1) -> Dict[str, Any]:
        if not product_id:
            raise InvalidInput("Missing required field", "product_id is required")

        quantity = 1 if quantity is None else quantity
        if quantity < 1 or quantity > MAX_LINE_QUANTITY:
            raise InvalidInput("Invalid quantity", f"Quantity must be between 1 and {MAX_LINE_QUANTITY}")

        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        if product.inventory_count < quantity:
            raise InvalidInput(
                "Insufficient inventory",
                f"Only {product.inventory_count} items available",
            )

        existing = self.repo.get_cart_item(user_id, product_id)

        if existing:
            new_quantity = existing.quantity + quantity
            if new_quantity > product.inventory_count:
                raise InvalidInput(
                    "Insufficient inventory",
                    f"Cannot add {quantity} more. Only {product.inventory_count} items available",
                )
            logger.info(f"Product {product_id} already in cart, quantity {existing.quantity} -> {new_quantity}")
            existing.quantity = new_quantity
        else:
            logger.info(f"Adding product {product_id} x{quantity} to cart of user {user_id}")
            self.repo.add_cart_item(
                CartItemModel(user_id=user_id, product_id=product_id, quantity=quantity)
            )

        self._commit()
        return self.get_cart(user_id)

    def update_item(self, user_id: str, product_id: str | None, quantity: int | None) -> Dict[str, Any]:
        if not product_id or quantity is None:
            raise InvalidInput("Missing required fields", "product_id and quantity are required")

        if quantity < 0 or quantity > MAX_LINE_QUANTITY:
            raise InvalidInput("Invalid quantity", f"Quantity must be between 0 and {MAX_LINE_QUANTITY}")

        if quantity == 0:
            #0 means drop the line
            logger.info(f"Removing product {product_id} from cart of user {user_id}")
            self.repo.delete_cart_item(user_id, product_id)
            self._commit()
            return self.get_cart(user_id)

        item = self.repo.get_cart_item(user_id, product_id)
        if not item:
            raise NotFound("Item not in cart")

        product = self.products.get_product(product_id)
        if product and quantity > product.inventory_count:
            raise InvalidInput(
                "Insufficient inventory",
                f"Only {product.inventory_count} items available",
            )

        logger.info(f"Updating product {product_id} in cart of user {user_id} to {quantity}")
        item.quantity = quantity
        self._commit()
        return self.get_cart(user_id)

    def remove_item(self, user_id: str, product_id: str) -> Dict[str, Any]:
        logger.info(f"Removing product {product_id} from cart of user {user_id}")
        self.repo.delete_cart_item(user_id, product_id)
        self._commit()
        return self.get_cart(user_id)

    def clear_cart(self, user_id: str) -> Dict[str, Any]:
        removed = self.repo.clear_cart(user_id)
        self._commit()
        logger.info(f"Cleared cart of user {user_id} ({removed} lines)")
        return {"items": [], "total": 0.0, "item_count": 0}

    def _commit(self):
        try:
            self.repo.commit()
        except IntegrityError:
            # a parallel request inserted the same (user, product) line first
            self.repo.rollback()
            logger.warning("Cart line conflict, concurrent modification")
            raise Conflict("Cart was modified concurrently, please retry")
