# gsi_orders/services/payment_client.py
import json
from typing import Any, Dict, List

import stripe

from gsi_orders.utils.settings import STRIPE_SECRET_KEY, STRIPE_WEBHOOK_SECRET
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)


class WebhookSignatureError(Exception):
    pass


class PaymentClient:
    """Thin wrapper over the Stripe SDK: checkout sessions and webhook verification."""

    def __init__(self, api_key: str | None = None, webhook_secret: str | None = None):
        self.api_key = api_key or STRIPE_SECRET_KEY
        self.webhook_secret = webhook_secret or STRIPE_WEBHOOK_SECRET

    def create_checkout_session(
        self,
        line_items: List[Dict[str, Any]],
        success_url: str,
        cancel_url: str,
        metadata: Dict[str, str],
    ) -> Dict[str, Any]:
        logger.info(f"Stripe checkout session for {len(line_items)} line items")

        session = stripe.checkout.Session.create(
            api_key=self.api_key,
            payment_method_types=["card"],
            mode="payment",
            line_items=line_items,
            success_url=success_url,
            cancel_url=cancel_url,
            metadata=metadata,
        )
        return {"id": session.id, "url": session.url}

    def construct_event(self, payload: bytes, signature: str | None) -> Dict[str, Any]:
        """Verify the Stripe-Signature header and return the event as a plain dict."""
        try:
            stripe.Webhook.construct_event(payload, signature or "", self.webhook_secret)
        except stripe.SignatureVerificationError as e:
            raise WebhookSignatureError(str(e))
        except ValueError as e:
            raise WebhookSignatureError(str(e))

        return json.loads(payload)
