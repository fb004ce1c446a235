# gsi_orders/api/routers/checkout.py
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from gsi_orders.api.deps import get_lock_service, get_payment_client
from gsi_orders.data.database import get_db
from gsi_orders.domain.errors import ShopError
from gsi_orders.domain.schemas import CheckoutIn, CheckoutOut
from gsi_orders.services.checkout_service import CheckoutService
from gsi_orders.services.lock_service import LockService
from gsi_orders.services.payment_client import PaymentClient, WebhookSignatureError
from gsi_orders.utils import settings
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["checkout"])


def get_service(db: Session, payment_client: PaymentClient, lock_service: LockService):
    return CheckoutService(db=db, payment_client=payment_client, lock_service=lock_service)


@router.post("/checkout", response_model=CheckoutOut)
def create_checkout_session(
    payload: CheckoutIn,
    request: Request,
    db: Session = Depends(get_db),
    payment_client: PaymentClient = Depends(get_payment_client),
    lock_service: LockService = Depends(get_lock_service),
):
    svc = get_service(db, payment_client, lock_service)
    origin = request.headers.get("origin") or settings.SITE_URL
    try:
        return svc.create_session(payload, origin)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())


@router.post("/webhook")
async def webhook(
    request: Request,
    db: Session = Depends(get_db),
    payment_client: PaymentClient = Depends(get_payment_client),
    lock_service: LockService = Depends(get_lock_service),
):
    """
    Stripe callback. The raw body is needed for signature verification,
    a bad signature is answered in plain text the way Stripe expects.
    """
    payload = await request.body()
    signature = request.headers.get("stripe-signature")

    svc = get_service(db, payment_client, lock_service)
    try:
        return svc.handle_webhook(payload, signature)
    except WebhookSignatureError as e:
        logger.error(f"Webhook signature verification failed: {e}")
        return PlainTextResponse(f"Webhook Error: {e}", status_code=400)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
