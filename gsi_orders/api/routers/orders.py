# gsi_orders/api/routers/orders.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gsi_orders.api.deps import get_current_user_id
from gsi_orders.data.database import get_db
from gsi_orders.domain.schemas import OrdersOut
from gsi_orders.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=OrdersOut)
def list_orders(
    page: int = Query(1),
    limit: int = Query(10),
    status: str | None = Query(None),
    include_items: bool = Query(False),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Order history of the caller, newest first.
    With include_items=true every order carries its lines and products.
    """
    svc = OrderService(db)
    return svc.list_orders(user_id, page, limit, status, include_items)
