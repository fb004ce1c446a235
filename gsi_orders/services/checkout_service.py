# gsi_orders/services/checkout_service.py
import uuid
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict

import stripe
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gsi_orders.data.models.order import OrderModel, OrderItemModel
from gsi_orders.domain.errors import InvalidInput, InternalError, UpstreamError
from gsi_orders.domain.mappers import to_money
from gsi_orders.domain.schemas import CheckoutIn
from gsi_orders.repos.cart_repo import CartRepo
from gsi_orders.repos.order_repo import OrderRepo
from gsi_orders.repos.product_repo import ProductRepo
from gsi_orders.repos.webhook_log_repo import WebhookLogRepo
from gsi_orders.services.inventory_service import is_uuid
from gsi_orders.services.lock_service import LockService
from gsi_orders.services.notification_service import NotificationService
from gsi_orders.services.payment_client import PaymentClient
from gsi_orders.utils.settings import WEBHOOK_LOCK_TTL_SECONDS
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)

SESSION_COMPLETED = "checkout.session.completed"


class CheckoutService:
    """
    Payment flow.

    create_session: cart lines -> Stripe Checkout Session
    handle_webhook: completed session -> order, order items, stock, empty cart
    """

    def __init__(self, db: Session, payment_client: PaymentClient, lock_service: LockService):
        self.payment_client = payment_client
        self.lock_service = lock_service
        self.orders = OrderRepo(db)
        self.cart = CartRepo(db)
        self.products = ProductRepo(db)
        self.webhook_logs = WebhookLogRepo(db)
        self.notification_service = NotificationService()

    def create_session(self, payload: CheckoutIn, origin: str) -> Dict[str, Any]:
        if not payload.user_id:
            raise InvalidInput("Missing userId")

        if not payload.cart_items:
            raise InvalidInput("No items in cart")

        if any(item.quantity < 1 for item in payload.cart_items):
            raise InvalidInput("Invalid quantity")

        line_items = [
            {
                "price_data": {
                    "currency": "usd",
                    "product_data": {"name": item.name},
                    "unit_amount": int(
                        (Decimal(str(item.price)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
                    ),
                },
                "quantity": item.quantity,
            }
            for item in payload.cart_items
        ]
        metadata = {"user_id": payload.user_id}

        try:
            session = self.payment_client.create_checkout_session(
                line_items=line_items,
                success_url=f"{origin}/success?session_id={{CHECKOUT_SESSION_ID}}",
                cancel_url=f"{origin}/cancel",
                metadata=metadata,
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe checkout session failed: {e}")
            raise UpstreamError(getattr(e, "user_message", None) or str(e))

        logger.info(f"Checkout session {session['id']} created for user {payload.user_id}")

        return {"session_id": session["id"], "url": session.get("url"), "metadata": metadata}

    def handle_webhook(self, payload: bytes, signature: str | None) -> Dict[str, Any]:
        # raises WebhookSignatureError, answered as plain text by the router
        event = self.payment_client.construct_event(payload, signature)
        event_type = event.get("type")

        logger.info(f"Webhook event received: {event_type}")

        if event_type != SESSION_COMPLETED:
            return {"received": True}

        session = event["data"]["object"]
        session_id = session.get("id")
        user_id = (session.get("metadata") or {}).get("user_id")

        if not is_uuid(user_id):
            logger.error(f"Invalid user_id in session {session_id} metadata: {user_id}")
            raise InvalidInput("Invalid user_id in metadata", session_id=session_id)

        existing = self.orders.get_by_session(session_id)
        if existing:
            logger.info(f"Session {session_id} already turned into order {existing.id}")
            return {"received": True, "order_id": existing.id, "message": "Order already processed"}

        owner = str(uuid.uuid4())
        try:
            acquired = self.lock_service.acquire_session_lock(session_id, owner, WEBHOOK_LOCK_TTL_SECONDS)
        except RedisError as e:
            # nothing written yet, the provider retries the delivery
            logger.error(f"Lock for session {session_id} unavailable: {e}")
            raise InternalError("Webhook processing failed", session_id=session_id)

        if not acquired:
            logger.info(f"Session {session_id} is being processed by another delivery")
            return {"received": True, "message": "Event already being processed"}

        try:
            # the lock holder before us may have finished in the meantime
            existing = self.orders.get_by_session(session_id)
            if existing:
                return {"received": True, "order_id": existing.id, "message": "Order already processed"}
            return self._create_order(session_id, user_id)
        finally:
            self._release(session_id, owner)

    def _release(self, session_id: str, owner: str) -> None:
        try:
            self.lock_service.release_session_lock(session_id, owner)
        except RedisError as e:
            # the key expires after WEBHOOK_LOCK_TTL_SECONDS
            logger.warning(f"Release of lock for session {session_id} failed: {e}")

    def _create_order(self, session_id: str, user_id: str) -> Dict[str, Any]:
        cart_items = self.cart.get_cart_items(user_id)
        if not cart_items:
            logger.error(f"No cart items for user {user_id}, session {session_id}")
            raise InvalidInput("No cart items found", session_id=session_id)

        total = sum(
            (Decimal(str(i.product.price)) * i.quantity for i in cart_items),
            Decimal("0.00"),
        )

        try:
            order = self.orders.add_order(
                OrderModel(
                    user_id=user_id,
                    total=total,
                    status="paid",
                    stripe_session_id=session_id,
                    items=[
                        OrderItemModel(
                            product_id=i.product_id,
                            quantity=i.quantity,
                            price=i.product.price,
                        )
                        for i in cart_items
                    ],
                )
            )

            for item in cart_items:
                if not self.products.decrement_inventory(item.product_id, item.quantity):
                    logger.warning(
                        f"Inventory of product {item.product_id} below {item.quantity}, left unchanged"
                    )

            self.cart.clear_cart(user_id)

            self.webhook_logs.log(
                SESSION_COMPLETED,
                "success",
                {
                    "session_id": session_id,
                    "order_id": order.id,
                    "user_id": user_id,
                    "total": to_money(total),
                    "items_count": len(cart_items),
                },
                commit=False,
            )
            self.orders.commit()
        except SQLAlchemyError as e:
            self.orders.rollback()
            logger.error(f"Order creation for session {session_id} failed: {e}")
            self.webhook_logs.log(
                SESSION_COMPLETED,
                "failed",
                {"session_id": session_id, "user_id": user_id, "error": str(e)},
            )
            raise InternalError("Webhook processing failed", session_id=session_id)

        logger.info(
            f"Order {order.id} created from session {session_id}: "
            f"{len(cart_items)} items, total {to_money(total)}"
        )

        self.notification_service.send_order_confirmation(user_id, order.id, to_money(total))

        return {"received": True, "order_id": order.id}
