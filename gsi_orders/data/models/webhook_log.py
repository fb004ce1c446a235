# gsi_orders/data/models/webhook_log.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, JSON

from gsi_orders.data.database import Base


class WebhookLogModel(Base):
    __tablename__ = "webhook_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_type = Column(String(100), nullable=False)
    status = Column(String(20), nullable=False)  # success, failed
    payload = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
