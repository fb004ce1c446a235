# gsi_orders/data/models/quote.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric, ForeignKey, JSON
from sqlalchemy.orm import relationship

from gsi_orders.data.database import Base


class QuoteModel(Base):
    __tablename__ = "quotes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)

    company_name = Column(String(200), nullable=True)
    contact_name = Column(String(200), nullable=True)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(50), nullable=True)
    additional_notes = Column(Text, nullable=True)

    # snapshot of the request as submitted
    items = Column(JSON, nullable=False)
    total_value = Column(Numeric(12, 2), nullable=False)
    status = Column(String(20), nullable=False, default="requested")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    quote_items = relationship(
        "QuoteItemModel",
        back_populates="quote",
        cascade="all, delete-orphan",
    )


class QuoteItemModel(Base):
    __tablename__ = "quote_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    quote_id = Column(String(36), ForeignKey("quotes.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text, nullable=True)

    quote = relationship("QuoteModel", back_populates="quote_items")
