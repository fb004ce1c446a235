from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from gsi_orders.data.models import OrderModel, ProductModel
from gsi_orders.services.inventory_service import InventoryService

MISSING_ID = "00000000-0000-4000-8000-000000000000"


def test_update_inventory(client, db, make_product):
    product = make_product(name="Recovery Balm", inventory_count=3)

    r = client.put("/api/admin/inventory", json={"product_id": product.id, "new_inventory_count": 40})
    assert r.status_code == 200
    assert r.json() == {
        "success": True,
        "product_id": product.id,
        "new_count": 40,
        "message": 'Successfully updated inventory for "Recovery Balm"',
    }

    db.expire_all()
    assert db.get(ProductModel, product.id).inventory_count == 40


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"new_inventory_count": 5}, "Missing required field: product_id"),
        ({"product_id": MISSING_ID, "new_inventory_count": "5"}, "Invalid field: new_inventory_count must be a number"),
        ({"product_id": MISSING_ID}, "Invalid field: new_inventory_count must be a number"),
        ({"product_id": MISSING_ID, "new_inventory_count": -1}, "Invalid field: new_inventory_count cannot be negative"),
        ({"product_id": MISSING_ID, "new_inventory_count": 2.5}, "Invalid field: new_inventory_count must be an integer"),
        ({"product_id": "not-a-uuid", "new_inventory_count": 5}, "Invalid field: product_id must be a valid UUID"),
    ],
)
def test_update_inventory_validation(client, db, payload, message):
    r = client.put("/api/admin/inventory", json=payload)
    assert r.status_code == 400
    assert r.json() == {"error": message}


def test_update_inventory_unknown_product(client, db):
    r = client.put("/api/admin/inventory", json={"product_id": MISSING_ID, "new_inventory_count": 5})
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found", "details": f"No product exists with ID: {MISSING_ID}"}


def test_admin_products_ordered_by_name(client, make_brand, make_product):
    lastgenie = make_brand(name="Last Genie", slug="lastgenie")
    make_product(name="Wish Candle Set", brand=lastgenie, inventory_count=0)
    make_product(name="Agave Spritz")

    r = client.get("/api/admin/products")
    assert r.status_code == 200
    body = r.json()
    assert body["total_count"] == 2
    assert [p["name"] for p in body["products"]] == ["Agave Spritz", "Wish Candle Set"]
    assert body["products"][1]["brand_name"] == "Last Genie"
    assert body["products"][1]["inventory_count"] == 0


def test_dashboard_metrics(client, db, make_product):
    make_product(name="Plenty", inventory_count=50)
    make_product(name="Low", inventory_count=4)
    make_product(name="Lower", inventory_count=1)

    now = datetime.now(timezone.utc)
    for i, (total, status) in enumerate([("10.10", "paid"), ("20.20", "paid"), ("99.00", "cancelled")]):
        db.add(
            OrderModel(
                user_id="123e4567-e89b-12d3-a456-426614174000",
                total=Decimal(total),
                status=status,
                created_at=now - timedelta(minutes=i),
            )
        )
    db.commit()

    r = client.get("/api/admin/dashboard")
    assert r.status_code == 200
    body = r.json()
    assert body["totalRevenue"] == 30.3
    assert body["totalOrders"] == 3
    assert [p["name"] for p in body["lowInventoryProducts"]] == ["Lower", "Low"]
    assert body["lowInventoryProducts"][0]["brand_name"] == "Liquid Heaven"
    assert [o["total"] for o in body["recentOrders"]] == [10.1, 20.2, 99.0]


def test_dashboard_failure(client, monkeypatch):
    def boom(self):
        raise OperationalError("SELECT", {}, Exception("db down"))

    monkeypatch.setattr(InventoryService, "dashboard", boom)
    r = client.get("/api/admin/dashboard")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch dashboard metrics"}
