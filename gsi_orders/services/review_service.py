# gsi_orders/services/review_service.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict

from sqlalchemy.orm import Session

from gsi_orders.data.models.review import ReviewModel
from gsi_orders.domain.errors import InvalidInput, NotFound, Conflict
from gsi_orders.repos.product_repo import ProductRepo
from gsi_orders.repos.review_repo import ReviewRepo
from gsi_orders.utils.pagination import clamp_page, clamp_limit, offset_for, total_pages
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)

TENTH = Decimal("0.1")

MIN_COMMENT_LENGTH = 10
MAX_COMMENT_LENGTH = 500


class ReviewService:
    """
    Product reviews. New reviews wait for moderation (approved=False) and
    only approved ones are listed publicly.
    """

    def __init__(self, db: Session):
        self.repo = ReviewRepo(db)
        self.products = ProductRepo(db)

    def create_review(self, user_id: str, product_id: str | None, rating: int | None, comment: str | None) -> Dict[str, Any]:
        if not product_id or not rating or not comment:
            raise InvalidInput("Missing required fields: productId, rating, comment")

        if rating < 1 or rating > 5:
            raise InvalidInput("Rating must be between 1 and 5")

        comment = comment.strip()
        if len(comment) < MIN_COMMENT_LENGTH:
            raise InvalidInput(f"Comment must be at least {MIN_COMMENT_LENGTH} characters long")
        if len(comment) > MAX_COMMENT_LENGTH:
            raise InvalidInput(f"Comment must be less than {MAX_COMMENT_LENGTH} characters")

        logger.info(f"Creating review by {user_id} for product {product_id}: {comment[:50]}...")

        if not self.products.get_product(product_id):
            raise NotFound("Product not found")

        if self.repo.get_user_review(user_id, product_id):
            raise Conflict("You have already reviewed this product")

        review = self.repo.create_review(
            ReviewModel(
                user_id=user_id,
                product_id=product_id,
                rating=rating,
                comment=comment,
                approved=False,
            )
        )

        logger.info(f"Review {review.id} created, waiting for moderation")

        return {
            "success": True,
            "review": {
                "id": review.id,
                "rating": review.rating,
                "comment": review.comment,
                "created_at": review.created_at,
                "approved": review.approved,
            },
            "message": "Review submitted successfully! It will be visible after moderation.",
        }

    def list_reviews(self, product_id: str | None, page: int | None = 1, limit: int | None = 10) -> Dict[str, Any]:
        if not product_id:
            raise InvalidInput("Product ID is required")

        page = clamp_page(page)
        limit = clamp_limit(limit, default=10, maximum=100)

        logger.info(f"Fetching reviews for product {product_id}, page {page}")

        rows, total = self.repo.list_approved(product_id, offset_for(page, limit), limit)
        average = self.repo.average_rating(product_id)

        return {
            "reviews": [
                {
                    "id": r.id,
                    "rating": r.rating,
                    "comment": r.comment,
                    "created_at": r.created_at,
                    "user": {"email": r.user.email} if r.user else None,
                }
                for r in rows
            ],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": total_pages(total, limit),
            },
            "average_rating": float(Decimal(str(average)).quantize(TENTH, rounding=ROUND_HALF_UP)),
            "total_reviews": total,
        }

    # moderation

    def list_for_moderation(self, approved: bool = False, page: int | None = 1, limit: int | None = 20) -> Dict[str, Any]:
        page = clamp_page(page)
        limit = clamp_limit(limit, default=20, maximum=100)

        rows, total = self.repo.list_by_approval(approved, offset_for(page, limit), limit)

        return {
            "reviews": [
                {
                    "id": r.id,
                    "product_id": r.product_id,
                    "user_id": r.user_id,
                    "rating": r.rating,
                    "comment": r.comment,
                    "approved": r.approved,
                    "created_at": r.created_at,
                }
                for r in rows
            ],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": total_pages(total, limit),
            },
        }

    def set_approval(self, review_id: str, approved: bool) -> Dict[str, Any]:
        review = self.repo.get_review(review_id)
        if not review:
            raise NotFound("Review not found")

        review.approved = approved
        self.repo.commit()

        logger.info(f"Review {review_id} {'approved' if approved else 'rejected'}")

        return {
            "id": review.id,
            "product_id": review.product_id,
            "user_id": review.user_id,
            "rating": review.rating,
            "comment": review.comment,
            "approved": review.approved,
            "created_at": review.created_at,
        }
