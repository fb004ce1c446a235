# gsi_orders/repos/review_repo.py
from typing import List, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import Session, joinedload

from gsi_orders.data.models.review import ReviewModel


class ReviewRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_review(self, review_id: str) -> ReviewModel | None:
        return self.db.get(ReviewModel, review_id)

    def get_user_review(self, user_id: str, product_id: str) -> ReviewModel | None:
        return self.db.execute(
            select(ReviewModel).where(
                ReviewModel.user_id == user_id,
                ReviewModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def create_review(self, review: ReviewModel) -> ReviewModel:
        self.db.add(review)
        self.db.commit()
        self.db.refresh(review)
        return review

    def list_approved(self, product_id: str, offset: int, limit: int) -> Tuple[List[ReviewModel], int]:
        filters = [ReviewModel.product_id == product_id, ReviewModel.approved.is_(True)]
        rows = self.db.execute(
            select(ReviewModel)
            .options(joinedload(ReviewModel.user))
            .where(*filters)
            .order_by(ReviewModel.created_at.desc(), ReviewModel.id)
            .offset(offset)
            .limit(limit)
        ).scalars().all()
        total = self.db.execute(
            select(func.count()).select_from(ReviewModel).where(*filters)
        ).scalar_one()
        return list(rows), total

    def average_rating(self, product_id: str) -> float:
        avg = self.db.execute(
            select(func.avg(ReviewModel.rating)).where(
                ReviewModel.product_id == product_id,
                ReviewModel.approved.is_(True),
            )
        ).scalar_one()
        return float(avg or 0)

    def list_by_approval(self, approved: bool, offset: int, limit: int) -> Tuple[List[ReviewModel], int]:
        filters = [ReviewModel.approved.is_(approved)]
        rows = self.db.execute(
            select(ReviewModel)
            .where(*filters)
            .order_by(ReviewModel.created_at.asc(), ReviewModel.id)
            .offset(offset)
            .limit(limit)
        ).scalars().all()
        total = self.db.execute(
            select(func.count()).select_from(ReviewModel).where(*filters)
        ).scalar_one()
        return list(rows), total

    def commit(self):
        self.db.commit()
