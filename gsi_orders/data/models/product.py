# gsi_orders/data/models/product.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Numeric, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from gsi_orders.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    inventory_count = Column(Integer, nullable=False, default=0)
    brand_id = Column(String(36), ForeignKey("brands.id"), nullable=True, index=True)
    images = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    brand = relationship("BrandModel", back_populates="products")
