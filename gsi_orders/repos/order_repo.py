# gsi_orders/repos/order_repo.py
from decimal import Decimal
from typing import List, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload, joinedload

from gsi_orders.data.models.order import OrderModel, OrderItemModel
from gsi_orders.data.models.product import ProductModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        # no commit, the caller owns the transaction
        self.db.add(order)
        self.db.flush()
        return order

    def get_by_session(self, session_id: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(OrderModel.stripe_session_id == session_id)
        ).scalar_one_or_none()

    def list_for_user(
        self,
        user_id: str,
        status: str | None,
        offset: int,
        limit: int,
        include_items: bool = False,
    ) -> Tuple[List[OrderModel], int]:
        filters = [OrderModel.user_id == user_id]
        if status:
            filters.append(OrderModel.status == status)

        query = (
            select(OrderModel)
            .where(*filters)
            .order_by(OrderModel.created_at.desc(), OrderModel.id)
            .offset(offset)
            .limit(limit)
        )
        if include_items:
            query = query.options(
                selectinload(OrderModel.items)
                .joinedload(OrderItemModel.product)
                .joinedload(ProductModel.brand)
            )

        rows = self.db.execute(query).scalars().all()
        total = self.db.execute(
            select(func.count()).select_from(OrderModel).where(*filters)
        ).scalar_one()
        return list(rows), total

    def paid_summary(self, user_id: str | None = None) -> Tuple[int, Decimal]:
        """Count and revenue of paid orders, optionally for a single user."""
        filters = [OrderModel.status == "paid"]
        if user_id:
            filters.append(OrderModel.user_id == user_id)
        count, revenue = self.db.execute(
            select(func.count(OrderModel.id), func.coalesce(func.sum(OrderModel.total), 0))
            .where(*filters)
        ).one()
        return count, Decimal(str(revenue))

    def count_orders(self) -> int:
        return self.db.execute(select(func.count()).select_from(OrderModel)).scalar_one()

    def recent_orders(self, limit: int = 10) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel).order_by(OrderModel.created_at.desc(), OrderModel.id).limit(limit)
            ).scalars()
        )

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
