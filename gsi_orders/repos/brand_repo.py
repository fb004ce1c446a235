# gsi_orders/repos/brand_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from gsi_orders.data.models.brand import BrandModel


class BrandRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_brands(self) -> List[BrandModel]:
        return list(self.db.execute(select(BrandModel).order_by(BrandModel.name.asc())).scalars())

    def get_by_slug(self, slug: str) -> BrandModel | None:
        return self.db.execute(
            select(BrandModel).where(BrandModel.slug == slug)
        ).scalar_one_or_none()
