# gsi_orders/services/quote_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gsi_orders.data.models.quote import QuoteModel, QuoteItemModel
from gsi_orders.domain.errors import InvalidInput, NotFound, Conflict, InternalError
from gsi_orders.domain.mappers import to_money
from gsi_orders.domain.schemas import QuoteRequestIn, is_email
from gsi_orders.repos.product_repo import ProductRepo
from gsi_orders.repos.quote_repo import QuoteRepo
from gsi_orders.services.notification_service import NotificationService
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)

MAX_QUOTE_QUANTITY = 999


def _validation_error(message: str) -> InvalidInput:
    return InvalidInput("validation_error", message)


class QuoteService:
    """
    B2B quote requests.

    1. validates the body item by item
    2. checks every product exists and has enough stock
    3. stores the quote with its items and total value
    4. queues a notification for the sales team
    """

    def __init__(self, db: Session):
        self.repo = QuoteRepo(db)
        self.products = ProductRepo(db)
        self.notification_service = NotificationService()

    @staticmethod
    def validate(payload: QuoteRequestIn | None) -> None:
        if payload is None:
            raise _validation_error("Request body is required")

        if not payload.items:
            raise _validation_error("At least one item is required")

        for index, item in enumerate(payload.items, start=1):
            if not item.product_id or not isinstance(item.product_id, str):
                raise _validation_error(f"Item {index}: product_id is required and must be a string")

            quantity = item.quantity
            if isinstance(quantity, bool) or not isinstance(quantity, (int, float)) or quantity <= 0:
                raise _validation_error(f"Item {index}: quantity must be a number greater than 0")
            if quantity > MAX_QUOTE_QUANTITY:
                raise _validation_error(f"Item {index}: quantity cannot exceed {MAX_QUOTE_QUANTITY}")
            if quantity != int(quantity):
                raise _validation_error(f"Item {index}: quantity must be a whole number")

        if payload.contact_email and not is_email(payload.contact_email):
            raise _validation_error("contact_email must be a valid email address")

    def request_quote(self, user_id: str, payload: QuoteRequestIn | None) -> Dict[str, Any]:
        self.validate(payload)

        product_ids: List[str] = list(dict.fromkeys(i.product_id for i in payload.items))

        try:
            products = {p.id: p for p in self.products.get_products(product_ids)}
        except SQLAlchemyError as e:
            logger.error(f"Product lookup for quote failed: {e}")
            raise InternalError("internal", "Database error while fetching products")

        missing = [pid for pid in product_ids if pid not in products]
        if missing:
            raise NotFound("not_found", f"Product(s) not found: {', '.join(missing)}")

        # the same product may be listed twice, check the combined quantity
        requested: Dict[str, int] = {}
        for item in payload.items:
            requested[item.product_id] = requested.get(item.product_id, 0) + int(item.quantity)

        for pid, quantity in requested.items():
            product = products[pid]
            if quantity > product.inventory_count:
                raise Conflict(
                    "out_of_stock",
                    f"Only {product.inventory_count} units available for {product.name}",
                )

        total_value = sum(
            (Decimal(str(products[i.product_id].price)) * int(i.quantity) for i in payload.items),
            Decimal("0.00"),
        )

        quote = QuoteModel(
            user_id=user_id,
            company_name=payload.company_name,
            contact_name=payload.contact_name,
            contact_email=payload.contact_email,
            contact_phone=payload.contact_phone,
            additional_notes=payload.additional_notes,
            items={
                "items": [
                    {"product_id": i.product_id, "quantity": int(i.quantity), "notes": i.notes}
                    for i in payload.items
                ],
                "submitted_at": datetime.now(timezone.utc).isoformat(),
            },
            total_value=total_value,
            status="requested",
            quote_items=[
                QuoteItemModel(
                    product_id=i.product_id,
                    quantity=int(i.quantity),
                    unit_price=products[i.product_id].price,
                    notes=i.notes,
                )
                for i in payload.items
            ],
        )

        try:
            created = self.repo.create_quote(quote)
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Quote insert failed: {e}")
            raise InternalError("internal", "Database error while creating quote request")

        logger.info(
            f"B2B quote request {created.id}: user {user_id}, {len(payload.items)} items, "
            f"company {payload.company_name}, contact {payload.contact_email}"
        )

        self.notification_service.send_quote_notification(
            created.id, payload.company_name, payload.contact_email, len(payload.items)
        )

        return {
            "success": True,
            "quote_id": created.id,
            "status": created.status,
            "total_value": to_money(created.total_value),
            "message": "Quote request submitted successfully",
        }
