import json
import os
from decimal import Decimal

USER_ID = "123e4567-e89b-12d3-a456-426614174000"
OTHER_USER_ID = "9b2f5c1e-3d4a-4f6b-8c7d-1e2f3a4b5c6d"

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ["DEFAULT_USER_ID"] = USER_ID
os.environ["OPENAI_API_KEY"] = "sk-test"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_123"
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_test"

import pytest
from fastapi.testclient import TestClient

from gsi_orders.api.deps import get_chat_client, get_lock_service, get_payment_client
from gsi_orders.data.database import SessionLocal, create_tables, drop_tables
from gsi_orders.data.models import BrandModel, ProductModel, UserModel, CartItemModel
from gsi_orders.main import app
from gsi_orders.services.payment_client import WebhookSignatureError


class FakeLockService:
    def __init__(self):
        self.held = {}
        self.released = []

    def acquire_session_lock(self, session_id, owner, ttl):
        if session_id in self.held:
            return False
        self.held[session_id] = owner
        return True

    def release_session_lock(self, session_id, owner):
        self.released.append(session_id)
        if self.held.get(session_id) == owner:
            del self.held[session_id]
            return True
        return False


class FakePaymentClient:
    def __init__(self):
        self.sessions = []
        self.error = None

    def create_checkout_session(self, line_items, success_url, cancel_url, metadata):
        if self.error:
            raise self.error
        self.sessions.append(
            {
                "line_items": line_items,
                "success_url": success_url,
                "cancel_url": cancel_url,
                "metadata": metadata,
            }
        )
        return {"id": "cs_test_123", "url": "https://checkout.stripe.com/c/pay/cs_test_123"}

    def construct_event(self, payload, signature):
        if signature != "valid":
            raise WebhookSignatureError("No signatures found matching the expected signature for payload")
        return json.loads(payload)


class FakeChatClient:
    def __init__(self):
        self.configured = True
        self.reply = "Hello from the assistant"
        self.chunks = ["Hello", " there"]
        self.error = None
        self.calls = []

    def complete(self, messages, max_tokens=500, temperature=0.7):
        self.calls.append({"messages": messages, "max_tokens": max_tokens, "temperature": temperature})
        if self.error:
            raise self.error
        return self.reply

    def stream(self, messages, max_tokens=500, temperature=0.7):
        self.calls.append({"messages": messages, "max_tokens": max_tokens, "temperature": temperature})
        if self.error:
            raise self.error
        yield from self.chunks


@pytest.fixture
def db():
    drop_tables()
    create_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def lock_service():
    return FakeLockService()


@pytest.fixture
def payment_client():
    return FakePaymentClient()


@pytest.fixture
def chat_client():
    return FakeChatClient()


@pytest.fixture
def client(db, lock_service, payment_client, chat_client):
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_payment_client] = lambda: payment_client
    app.dependency_overrides[get_chat_client] = lambda: chat_client
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_brand(db):
    def _make(name="Liquid Heaven", slug="liquidheaven", theme_config=None):
        brand = BrandModel(name=name, slug=slug, theme_config=theme_config or {"primaryColor": "#10b981"})
        db.add(brand)
        db.commit()
        db.refresh(brand)
        return brand

    return _make


@pytest.fixture
def make_product(db, make_brand):
    def _make(name="CBD Tincture", price="49.99", inventory_count=10, brand=None, **kwargs):
        if brand is None:
            brand = db.query(BrandModel).filter_by(slug="liquidheaven").first() or make_brand()
        product = ProductModel(
            name=name,
            price=Decimal(price),
            inventory_count=inventory_count,
            brand_id=brand.id,
            images=kwargs.pop("images", ["https://img.example.com/p.png"]),
            **kwargs,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def make_user(db):
    def _make(user_id=USER_ID, email="test@gsiorders.com", role="customer", full_name="Test User"):
        user = UserModel(id=user_id, email=email, role=role, full_name=full_name)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def add_to_cart(db):
    def _add(product, quantity=1, user_id=USER_ID):
        item = CartItemModel(user_id=user_id, product_id=product.id, quantity=quantity)
        db.add(item)
        db.commit()
        return item

    return _add
