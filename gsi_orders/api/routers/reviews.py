# gsi_orders/api/routers/reviews.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from gsi_orders.api.deps import get_current_user_id
from gsi_orders.data.database import get_db
from gsi_orders.domain.errors import ShopError
from gsi_orders.domain.schemas import ReviewIn, ReviewCreatedOut, ReviewsOut
from gsi_orders.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post("", response_model=ReviewCreatedOut, status_code=201)
def create_review(
    payload: ReviewIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = ReviewService(db)
    try:
        return svc.create_review(user_id, payload.product_id, payload.rating, payload.comment)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())


@router.get("", response_model=ReviewsOut)
def list_reviews(
    product_id: str | None = Query(None, alias="productId"),
    page: int = Query(1),
    limit: int = Query(10),
    db: Session = Depends(get_db),
):
    svc = ReviewService(db)
    try:
        return svc.list_reviews(product_id, page, limit)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
