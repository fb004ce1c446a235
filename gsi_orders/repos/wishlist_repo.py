# gsi_orders/repos/wishlist_repo.py
from typing import List, Tuple

from sqlalchemy import select, delete, func
from sqlalchemy.orm import Session, joinedload

from gsi_orders.data.models.product import ProductModel
from gsi_orders.data.models.wishlist_item import WishlistItemModel


class WishlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_item(self, user_id: str, product_id: str) -> WishlistItemModel | None:
        return self.db.get(WishlistItemModel, (user_id, product_id))

    def add_item(self, item: WishlistItemModel) -> WishlistItemModel:
        self.db.add(item)
        self.db.commit()
        return item

    def delete_item(self, user_id: str, product_id: str) -> int:
        result = self.db.execute(
            delete(WishlistItemModel).where(
                WishlistItemModel.user_id == user_id,
                WishlistItemModel.product_id == product_id,
            )
        )
        self.db.commit()
        return result.rowcount

    def list_for_user(self, user_id: str, offset: int, limit: int) -> Tuple[List[WishlistItemModel], int]:
        rows = self.db.execute(
            select(WishlistItemModel)
            .options(joinedload(WishlistItemModel.product).joinedload(ProductModel.brand))
            .where(WishlistItemModel.user_id == user_id)
            .order_by(WishlistItemModel.created_at.desc(), WishlistItemModel.product_id)
            .offset(offset)
            .limit(limit)
        ).scalars().all()
        return list(rows), self.count_for_user(user_id)

    def count_for_user(self, user_id: str) -> int:
        return self.db.execute(
            select(func.count()).select_from(WishlistItemModel).where(WishlistItemModel.user_id == user_id)
        ).scalar_one()

    def rollback(self):
        self.db.rollback()
