# gsi_orders/api/routers/quotes.py
from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from gsi_orders.api.deps import get_current_user_id
from gsi_orders.data.database import get_db
from gsi_orders.domain.errors import ShopError
from gsi_orders.domain.schemas import QuoteRequestIn, QuoteCreatedOut
from gsi_orders.services.quote_service import QuoteService

router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.post("/request", response_model=QuoteCreatedOut, status_code=201)
def request_quote(
    payload: QuoteRequestIn | None = Body(None),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """B2B quote request; the sales team is notified in the background."""
    svc = QuoteService(db)
    try:
        return svc.request_quote(user_id, payload)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
