# gsi_orders/celery_worker.py
from celery import Celery

from gsi_orders.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
)

celery_app = Celery(
    "gsi_orders",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# tasks live outside this module, import them explicitly so the worker registers them
celery_app.conf.imports = (
    "gsi_orders.tasks.inventory",
    "gsi_orders.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "low-inventory-report-every-hour": {
        "task": "gsi_orders.tasks.inventory.low_inventory_report_task",
        "schedule": 60.0 * 60,
    },
}

celery_app.conf.timezone = "UTC"

# local runs and tests execute tasks in-process
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
celery_app.conf.task_eager_propagates = CELERY_TASK_ALWAYS_EAGER
