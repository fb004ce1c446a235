# gsi_orders/data/models/review.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from gsi_orders.data.database import Base


class ReviewModel(Base):
    __tablename__ = "reviews"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)

    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False)
    approved = Column(Boolean, nullable=False, default=False)  # moderation gate
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # reviewers are not always mirrored into users yet
    user = relationship(
        "UserModel",
        primaryjoin="foreign(ReviewModel.user_id) == UserModel.id",
        viewonly=True,
    )
