# gsi_orders/repos/webhook_log_repo.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from gsi_orders.data.models.webhook_log import WebhookLogModel


class WebhookLogRepo:
    def __init__(self, db: Session):
        self.db = db

    def log(self, event_type: str, status: str, payload: Dict[str, Any], commit: bool = True) -> WebhookLogModel:
        entry = WebhookLogModel(event_type=event_type, status=status, payload=payload)
        self.db.add(entry)
        if commit:
            self.db.commit()
        return entry
