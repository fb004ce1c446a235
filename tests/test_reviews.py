from datetime import datetime, timedelta, timezone

import pytest

from gsi_orders.data.models import ReviewModel

USER_ID = "123e4567-e89b-12d3-a456-426614174000"
COMMENT = "Great product, works as described."


@pytest.fixture
def make_review(db):
    def _make(product, user_id, rating=5, approved=True, comment=COMMENT, age_days=0):
        review = ReviewModel(
            user_id=user_id,
            product_id=product.id,
            rating=rating,
            comment=comment,
            approved=approved,
            created_at=datetime.now(timezone.utc) - timedelta(days=age_days),
        )
        db.add(review)
        db.commit()
        db.refresh(review)
        return review

    return _make


def test_create_review_waits_for_moderation(client, make_product):
    product = make_product()

    r = client.post(
        "/api/reviews",
        json={"productId": product.id, "rating": 4, "comment": "  Really nice tincture!  "},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["review"]["approved"] is False
    assert body["review"]["rating"] == 4
    assert body["review"]["comment"] == "Really nice tincture!"
    assert body["message"] == "Review submitted successfully! It will be visible after moderation."


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"rating": 4, "comment": COMMENT}, "Missing required fields: productId, rating, comment"),
        ({"productId": "x", "rating": 6, "comment": COMMENT}, "Rating must be between 1 and 5"),
        ({"productId": "x", "rating": 3, "comment": "  short    "}, "Comment must be at least 10 characters long"),
        ({"productId": "x", "rating": 3, "comment": "a" * 501}, "Comment must be less than 500 characters"),
    ],
)
def test_create_review_validation(client, db, payload, message):
    r = client.post("/api/reviews", json=payload)
    assert r.status_code == 400
    assert r.json() == {"error": message}


def test_create_review_unknown_product(client, db):
    r = client.post(
        "/api/reviews",
        json={"productId": "00000000-0000-4000-8000-000000000000", "rating": 5, "comment": COMMENT},
    )
    assert r.status_code == 404


def test_create_review_twice_conflicts(client, make_product, make_review):
    product = make_product()
    make_review(product, USER_ID, approved=False)

    r = client.post("/api/reviews", json={"productId": product.id, "rating": 5, "comment": COMMENT})
    assert r.status_code == 409
    assert r.json() == {"error": "You have already reviewed this product"}


def test_list_reviews_only_approved_with_average(client, make_product, make_user, make_review):
    product = make_product()
    make_user(email="reviewer@example.com")
    make_review(product, USER_ID, rating=5, age_days=1)
    make_review(product, "aaaaaaaa-aaaa-4aaa-8aaa-aaaaaaaaaaaa", rating=2, age_days=0)
    make_review(product, "bbbbbbbb-bbbb-4bbb-8bbb-bbbbbbbbbbbb", rating=1, approved=False)

    r = client.get("/api/reviews", params={"productId": product.id})
    assert r.status_code == 200
    body = r.json()
    assert body["totalReviews"] == 2
    assert body["averageRating"] == 3.5
    assert body["pagination"] == {"page": 1, "limit": 10, "total": 2, "totalPages": 1}
    assert [rv["rating"] for rv in body["reviews"]] == [2, 5]
    assert body["reviews"][0]["user"] is None
    assert body["reviews"][1]["user"] == {"email": "reviewer@example.com"}


def test_average_rating_rounds_half_up(client, make_product, make_review):
    product = make_product()
    for n, rating in enumerate([4, 4, 4, 5]):
        make_review(product, f"{n}aaaaaaa-aaaa-4aaa-8aaa-aaaaaaaaaaaa", rating=rating)

    # 17 / 4 = 4.25
    r = client.get("/api/reviews", params={"productId": product.id})
    assert r.json()["averageRating"] == 4.3


def test_list_reviews_requires_product(client, db):
    r = client.get("/api/reviews")
    assert r.status_code == 400
    assert r.json() == {"error": "Product ID is required"}


def test_moderation_queue_and_approval(client, make_product, make_review):
    product = make_product()
    pending = make_review(product, USER_ID, approved=False)

    r = client.get("/api/admin/reviews")
    assert r.status_code == 200
    assert [rv["id"] for rv in r.json()["reviews"]] == [pending.id]

    r = client.put(f"/api/admin/reviews/{pending.id}", json={"approved": True})
    assert r.status_code == 200
    assert r.json()["approved"] is True

    r = client.get("/api/reviews", params={"productId": product.id})
    assert r.json()["totalReviews"] == 1

    r = client.put("/api/admin/reviews/missing", json={"approved": True})
    assert r.status_code == 404
    assert r.json() == {"error": "Review not found"}
