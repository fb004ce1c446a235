# gsi_orders/api/routers/cart.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from gsi_orders.api.deps import get_current_user_id
from gsi_orders.data.database import get_db
from gsi_orders.domain.errors import ShopError
from gsi_orders.domain.schemas import CartItemIn, CartOut
from gsi_orders.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartOut)
def get_cart(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return CartService(db).get_cart(user_id)


@router.post("", response_model=CartOut)
def add_item(
    payload: CartItemIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    try:
        return svc.add_item(user_id, payload.product_id, payload.quantity)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())


@router.put("", response_model=CartOut)
def update_item(
    payload: CartItemIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    try:
        return svc.update_item(user_id, payload.product_id, payload.quantity)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())


@router.delete("", response_model=CartOut)
def remove_item(
    product_id: str | None = Query(None),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Remove one line when product_id is given, otherwise empty the whole cart."""
    svc = CartService(db)
    try:
        if product_id:
            return svc.remove_item(user_id, product_id)
        return svc.clear_cart(user_id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
