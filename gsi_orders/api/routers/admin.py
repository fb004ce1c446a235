# gsi_orders/api/routers/admin.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gsi_orders.data.database import get_db
from gsi_orders.domain.errors import ShopError
from gsi_orders.domain.schemas import (
    InventoryUpdateIn,
    InventoryUpdateOut,
    AdminProductsOut,
    DashboardOut,
    AdminReviewsOut,
    AdminReviewOut,
    ReviewModerationIn,
)
from gsi_orders.services.inventory_service import InventoryService
from gsi_orders.services.review_service import ReviewService
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.put("/inventory", response_model=InventoryUpdateOut)
def update_inventory(payload: InventoryUpdateIn, db: Session = Depends(get_db)):
    svc = InventoryService(db)
    try:
        return svc.update_inventory(payload.product_id, payload.new_inventory_count)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())


@router.get("/products", response_model=AdminProductsOut)
def list_products(
    page: int = Query(1),
    limit: int = Query(50),
    db: Session = Depends(get_db),
):
    return InventoryService(db).list_products(page, limit)


@router.get("/dashboard", response_model=DashboardOut)
def dashboard(db: Session = Depends(get_db)):
    try:
        return InventoryService(db).dashboard()
    except SQLAlchemyError as e:
        logger.error(f"Dashboard metrics failed: {e}")
        raise HTTPException(status_code=500, detail={"error": "Failed to fetch dashboard metrics"})


# review moderation


@router.get("/reviews", response_model=AdminReviewsOut)
def list_reviews(
    approved: bool = Query(False),
    page: int = Query(1),
    limit: int = Query(20),
    db: Session = Depends(get_db),
):
    return ReviewService(db).list_for_moderation(approved, page, limit)


@router.put("/reviews/{review_id}", response_model=AdminReviewOut)
def moderate_review(review_id: str, payload: ReviewModerationIn, db: Session = Depends(get_db)):
    svc = ReviewService(db)
    try:
        return svc.set_approval(review_id, payload.approved)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
