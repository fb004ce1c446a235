# gsi_orders/api/routers/catalog.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from gsi_orders.data.database import get_db
from gsi_orders.domain.errors import ShopError
from gsi_orders.domain.schemas import BrandsOut, ProductsOut, ProductOut
from gsi_orders.services.catalog_service import CatalogService

router = APIRouter(tags=["catalog"])


@router.get("/brands", response_model=BrandsOut)
def list_brands(db: Session = Depends(get_db)):
    return CatalogService(db).list_brands()


@router.get("/products", response_model=ProductsOut)
def list_products(
    brand: str | None = Query(None),
    search: str | None = Query(None),
    page: int = Query(1),
    limit: int = Query(20),
    sort: str = Query("created_at"),
    order: str = Query("desc"),
    db: Session = Depends(get_db),
):
    svc = CatalogService(db)
    try:
        return svc.list_products(brand, search, page, limit, sort, order)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: str, db: Session = Depends(get_db)):
    svc = CatalogService(db)
    try:
        return svc.get_product(product_id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
