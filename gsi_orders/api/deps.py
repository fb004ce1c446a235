# gsi_orders/api/deps.py
from fastapi import Header, HTTPException

from gsi_orders.services.chat_client import ChatClient
from gsi_orders.services.lock_service import LockService
from gsi_orders.services.payment_client import PaymentClient
from gsi_orders.utils import settings


def get_current_user_id(x_user_id: str | None = Header(None)) -> str:
    """Caller identity from X-User-Id, the dev test user when the header is missing."""
    user_id = x_user_id or settings.DEFAULT_USER_ID
    if not user_id:
        raise HTTPException(
            status_code=401,
            detail={"error": "unauthorized", "message": "Authentication required"},
        )
    return user_id


# external clients, overridden in tests


def get_lock_service() -> LockService:
    return LockService()


def get_payment_client() -> PaymentClient:
    return PaymentClient()


def get_chat_client() -> ChatClient:
    return ChatClient()
