# gsi_orders/api/routers/tax.py
from fastapi import APIRouter, HTTPException

from gsi_orders.domain.errors import ShopError
from gsi_orders.domain.schemas import TaxIn, TaxOut
from gsi_orders.services.tax_service import calculate_tax

router = APIRouter(tags=["tax"])


@router.post("/calculate-tax", response_model=TaxOut)
def calculate(payload: TaxIn):
    try:
        return calculate_tax(payload.subtotal, payload.state)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
