# gsi_orders/api/routers/wishlist.py
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from gsi_orders.api.deps import get_current_user_id
from gsi_orders.data.database import get_db
from gsi_orders.domain.errors import ShopError
from gsi_orders.domain.schemas import (
    WishlistToggleIn,
    WishlistToggleOut,
    WishlistOut,
    WishlistCheckOut,
)
from gsi_orders.services.wishlist_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@router.post("", response_model=WishlistToggleOut)
def toggle(
    payload: WishlistToggleIn,
    response: Response,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = WishlistService(db)
    try:
        result = svc.toggle(user_id, payload.product_id, payload.action)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())

    if result["is_saved"]:
        response.status_code = 201
    return result


@router.get("", response_model=WishlistOut)
def list_wishlist(
    page: int = Query(1),
    limit: int = Query(20),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return WishlistService(db).list_wishlist(user_id, page, limit)


@router.get("/check", response_model=WishlistCheckOut)
def check(
    product_id: str | None = Query(None, alias="productId"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = WishlistService(db)
    try:
        return svc.is_saved(user_id, product_id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
