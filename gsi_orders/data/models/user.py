# gsi_orders/data/models/user.py
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime

from gsi_orders.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    # ids come from the hosted auth provider
    id = Column(String(36), primary_key=True)
    email = Column(String(255), nullable=True, unique=True)
    role = Column(String(20), nullable=False, default="customer")
    full_name = Column(String(200), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
