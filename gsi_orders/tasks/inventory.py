# gsi_orders/tasks/inventory.py
from gsi_orders.celery_worker import celery_app
from gsi_orders.data.database import SessionLocal
from gsi_orders.repos.product_repo import ProductRepo
from gsi_orders.utils.settings import LOW_INVENTORY_THRESHOLD
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="gsi_orders.tasks.inventory.low_inventory_report_task")
def low_inventory_report_task(threshold: int | None = None):
    threshold = LOW_INVENTORY_THRESHOLD if threshold is None else threshold
    logger.info(f"Low inventory report started (threshold {threshold})")

    db = SessionLocal()
    try:
        products = ProductRepo(db).list_low_inventory(threshold)

        logger.info(f"Found {len(products)} products below threshold")

        for product in products:
            brand_name = product.brand.name if product.brand else "Unknown Brand"
            logger.warning(
                f"Low inventory: {product.name} ({brand_name}) has {product.inventory_count} left"
            )

        return [p.id for p in products]
    finally:
        db.close()
