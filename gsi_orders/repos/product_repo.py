# gsi_orders/repos/product_repo.py
from typing import List, Sequence, Tuple

from sqlalchemy import select, func, update
from sqlalchemy.orm import Session, joinedload

from gsi_orders.data.models.product import ProductModel

SORTABLE_FIELDS = {
    "name": ProductModel.name,
    "price": ProductModel.price,
    "created_at": ProductModel.created_at,
}


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel)
            .options(joinedload(ProductModel.brand))
            .where(ProductModel.id == product_id)
        ).scalar_one_or_none()

    def get_products(self, product_ids: Sequence[str]) -> List[ProductModel]:
        if not product_ids:
            return []
        return list(
            self.db.execute(
                select(ProductModel).where(ProductModel.id.in_(product_ids))
            ).scalars()
        )

    def list_in_stock(
        self,
        brand_id: str | None,
        search: str | None,
        sort_field: str,
        ascending: bool,
        offset: int,
        limit: int,
    ) -> Tuple[List[ProductModel], int]:
        filters = [ProductModel.inventory_count > 0]
        if brand_id:
            filters.append(ProductModel.brand_id == brand_id)
        if search:
            filters.append(ProductModel.name.ilike(f"%{search}%"))

        column = SORTABLE_FIELDS.get(sort_field, ProductModel.created_at)
        order = column.asc() if ascending else column.desc()

        rows = self.db.execute(
            select(ProductModel)
            .options(joinedload(ProductModel.brand))
            .where(*filters)
            .order_by(order, ProductModel.id)
            .offset(offset)
            .limit(limit)
        ).scalars().all()

        total = self.db.execute(
            select(func.count()).select_from(ProductModel).where(*filters)
        ).scalar_one()

        return list(rows), total

    def list_all(self, offset: int, limit: int) -> Tuple[List[ProductModel], int]:
        rows = self.db.execute(
            select(ProductModel)
            .options(joinedload(ProductModel.brand))
            .order_by(ProductModel.name.asc(), ProductModel.id)
            .offset(offset)
            .limit(limit)
        ).scalars().all()
        total = self.db.execute(select(func.count()).select_from(ProductModel)).scalar_one()
        return list(rows), total

    def list_low_inventory(self, threshold: int) -> List[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .options(joinedload(ProductModel.brand))
                .where(ProductModel.inventory_count < threshold)
                .order_by(ProductModel.inventory_count.asc(), ProductModel.name.asc())
            ).scalars()
        )

    def decrement_inventory(self, product_id: str, quantity: int) -> int:
        # never below zero; no commit, the caller owns the transaction
        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.inventory_count >= quantity,
            )
            .values(inventory_count=ProductModel.inventory_count - quantity)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()
