from gsi_orders.data.models import WishlistItemModel

USER_ID = "123e4567-e89b-12d3-a456-426614174000"


def _save(db, product, user_id=USER_ID):
    db.add(WishlistItemModel(user_id=user_id, product_id=product.id))
    db.commit()


def test_add_to_wishlist(client, make_product):
    product = make_product(name="Recovery Balm")

    r = client.post("/api/wishlist", json={"productId": product.id, "action": "add"})
    assert r.status_code == 201
    assert r.json() == {
        "success": True,
        "isSaved": True,
        "message": 'Added "Recovery Balm" to wishlist',
    }


def test_add_twice_conflicts(client, db, make_product):
    product = make_product()
    _save(db, product)

    r = client.post("/api/wishlist", json={"productId": product.id, "action": "add"})
    assert r.status_code == 409
    assert r.json() == {"error": "Product is already in wishlist", "isSaved": True}


def test_remove_from_wishlist(client, db, make_product):
    product = make_product(name="Recovery Balm")
    _save(db, product)

    r = client.post("/api/wishlist", json={"productId": product.id, "action": "remove"})
    assert r.status_code == 200
    assert r.json()["isSaved"] is False
    assert r.json()["message"] == 'Removed "Recovery Balm" from wishlist'


def test_remove_missing_entry(client, make_product):
    product = make_product()
    r = client.post("/api/wishlist", json={"productId": product.id, "action": "remove"})
    assert r.status_code == 404
    assert r.json() == {"error": "Product is not in wishlist", "isSaved": False}


def test_toggle_validation(client, make_product):
    product = make_product()

    r = client.post("/api/wishlist", json={"productId": product.id})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required fields: productId, action"}

    r = client.post("/api/wishlist", json={"productId": product.id, "action": "toggle"})
    assert r.status_code == 400
    assert r.json() == {"error": 'Action must be either "add" or "remove"'}

    r = client.post(
        "/api/wishlist",
        json={"productId": "00000000-0000-4000-8000-000000000000", "action": "add"},
    )
    assert r.status_code == 404


def test_list_wishlist(client, db, make_product):
    one = make_product(name="One")
    two = make_product(name="Two")
    _save(db, one)
    _save(db, two)
    _save(db, one, user_id="9b2f5c1e-3d4a-4f6b-8c7d-1e2f3a4b5c6d")

    r = client.get("/api/wishlist", params={"limit": 1})
    assert r.status_code == 200
    body = r.json()
    assert body["totalItems"] == 2
    assert body["pagination"] == {"page": 1, "limit": 1, "total": 2, "totalPages": 2}
    assert len(body["wishlist"]) == 1
    assert body["wishlist"][0]["product"]["brand"]["slug"] == "liquidheaven"


def test_check_wishlist(client, db, make_product):
    saved = make_product(name="Saved")
    other = make_product(name="Other")
    _save(db, saved)

    r = client.get("/api/wishlist/check", params={"productId": saved.id})
    assert r.json() == {"isSaved": True, "success": True}

    r = client.get("/api/wishlist/check", params={"productId": other.id})
    assert r.json() == {"isSaved": False, "success": True}

    r = client.get("/api/wishlist/check")
    assert r.status_code == 400
