# gsi_orders/services/notification_service.py
from gsi_orders.celery_worker import celery_app
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Customer and sales-team notifications.
    Queued on Celery so a slow mail provider never holds up a request.
    """

    @staticmethod
    def send_order_confirmation(user_id: str, order_id: str, total: float):
        send_order_confirmation_task.delay(user_id, order_id, total)

    @staticmethod
    def send_quote_notification(quote_id: str, company_name: str | None, contact_email: str | None, item_count: int):
        send_quote_notification_task.delay(quote_id, company_name, contact_email, item_count)


@celery_app.task(name="gsi_orders.services.notification_service.send_order_confirmation_task")
def send_order_confirmation_task(user_id: str, order_id: str, total: float):
    # the mail provider hookup goes here, for now the log line is the notification
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} paid, total {total:.2f}")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}


@celery_app.task(name="gsi_orders.services.notification_service.send_quote_notification_task")
def send_quote_notification_task(quote_id: str, company_name: str | None, contact_email: str | None, item_count: int):
    logger.info(
        f"[SALES] B2B quote request {quote_id}: {item_count} item(s) "
        f"from {company_name or 'unknown company'} <{contact_email or 'no email'}>"
    )
    return {"quote_id": quote_id, "status": "sent"}
