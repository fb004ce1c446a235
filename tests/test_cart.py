from gsi_orders.data.models import CartItemModel

OTHER_USER_ID = "9b2f5c1e-3d4a-4f6b-8c7d-1e2f3a4b5c6d"


def test_empty_cart(client, db):
    r = client.get("/api/cart")
    assert r.status_code == 200
    assert r.json() == {"items": [], "total": 0.0, "itemCount": 0}


def test_add_item_creates_line(client, make_product):
    product = make_product(price="10.50", inventory_count=5)

    r = client.post("/api/cart", json={"product_id": product.id, "quantity": 2})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 21.0
    assert body["itemCount"] == 2
    line = body["items"][0]
    assert line["product_id"] == product.id
    assert line["quantity"] == 2
    assert line["product"]["brand"] == {"name": "Liquid Heaven", "slug": "liquidheaven"}


def test_add_item_defaults_to_one(client, make_product):
    product = make_product()
    r = client.post("/api/cart", json={"product_id": product.id})
    assert r.json()["itemCount"] == 1


def test_add_existing_item_increments(client, make_product, add_to_cart):
    product = make_product(inventory_count=5)
    add_to_cart(product, 2)

    r = client.post("/api/cart", json={"product_id": product.id, "quantity": 3})
    assert r.status_code == 200
    assert len(r.json()["items"]) == 1
    assert r.json()["items"][0]["quantity"] == 5


def test_add_existing_item_above_inventory(client, make_product, add_to_cart):
    product = make_product(inventory_count=5)
    add_to_cart(product, 4)

    r = client.post("/api/cart", json={"product_id": product.id, "quantity": 2})
    assert r.status_code == 400
    assert r.json() == {
        "error": "Insufficient inventory",
        "message": "Cannot add 2 more. Only 5 items available",
    }


def test_add_item_validation(client, make_product):
    product = make_product(inventory_count=3)

    r = client.post("/api/cart", json={"quantity": 1})
    assert r.status_code == 400
    assert r.json()["error"] == "Missing required field"

    r = client.post("/api/cart", json={"product_id": product.id, "quantity": 100})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid quantity"

    r = client.post("/api/cart", json={"product_id": product.id, "quantity": 0})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid quantity"

    r = client.post("/api/cart", json={"product_id": product.id, "quantity": 4})
    assert r.status_code == 400
    assert r.json() == {"error": "Insufficient inventory", "message": "Only 3 items available"}


def test_add_unknown_product(client, db):
    r = client.post("/api/cart", json={"product_id": "00000000-0000-4000-8000-000000000000"})
    assert r.status_code == 404
    assert r.json()["error"] == "Product not found"


def test_update_sets_quantity(client, make_product, add_to_cart):
    product = make_product(inventory_count=10)
    add_to_cart(product, 1)

    r = client.put("/api/cart", json={"product_id": product.id, "quantity": 7})
    assert r.status_code == 200
    assert r.json()["itemCount"] == 7


def test_update_zero_removes_line(client, make_product, add_to_cart):
    product = make_product()
    add_to_cart(product, 2)

    r = client.put("/api/cart", json={"product_id": product.id, "quantity": 0})
    assert r.status_code == 200
    assert r.json()["items"] == []


def test_update_errors(client, make_product, add_to_cart):
    product = make_product(inventory_count=3)

    r = client.put("/api/cart", json={"product_id": product.id})
    assert r.status_code == 400

    r = client.put("/api/cart", json={"product_id": product.id, "quantity": 2})
    assert r.status_code == 404

    add_to_cart(product, 1)
    r = client.put("/api/cart", json={"product_id": product.id, "quantity": 5})
    assert r.status_code == 400
    assert r.json()["error"] == "Insufficient inventory"

    r = client.put("/api/cart", json={"product_id": product.id, "quantity": -1})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid quantity"


def test_delete_single_line(client, make_product, add_to_cart):
    keep = make_product(name="Keep")
    drop = make_product(name="Drop")
    add_to_cart(keep)
    add_to_cart(drop)

    r = client.delete("/api/cart", params={"product_id": drop.id})
    assert r.status_code == 200
    assert [i["product_id"] for i in r.json()["items"]] == [keep.id]


def test_delete_without_product_clears_cart(client, db, make_product, add_to_cart):
    add_to_cart(make_product(name="One"))
    add_to_cart(make_product(name="Two"))
    add_to_cart(make_product(name="Other"), user_id=OTHER_USER_ID)

    r = client.delete("/api/cart")
    assert r.status_code == 200
    assert r.json() == {"items": [], "total": 0, "itemCount": 0}

    db.expire_all()
    assert db.query(CartItemModel).filter_by(user_id=OTHER_USER_ID).count() == 1


def test_cart_is_scoped_by_user_header(client, make_product, add_to_cart):
    add_to_cart(make_product(), 2, user_id=OTHER_USER_ID)

    assert client.get("/api/cart").json()["itemCount"] == 0
    assert client.get("/api/cart", headers={"X-User-Id": OTHER_USER_ID}).json()["itemCount"] == 2


def test_cart_requires_identity(client, monkeypatch):
    from gsi_orders.utils import settings

    monkeypatch.setattr(settings, "DEFAULT_USER_ID", "")
    r = client.get("/api/cart")
    assert r.status_code == 401
    assert r.json() == {"error": "unauthorized", "message": "Authentication required"}


def test_invalid_body_type(client, db):
    r = client.post("/api/cart", json={"product_id": "abc", "quantity": "many"})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid request"
    assert r.json()["details"].startswith("quantity")
