# gsi_orders/services/user_service.py
import uuid
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gsi_orders.data.models.user import UserModel
from gsi_orders.domain.errors import InvalidInput, NotFound, Conflict
from gsi_orders.domain.mappers import to_money
from gsi_orders.domain.schemas import UserRead, UserUpdateIn, CreateAdminIn, is_email
from gsi_orders.repos.cart_repo import CartRepo
from gsi_orders.repos.order_repo import OrderRepo
from gsi_orders.repos.user_repo import UserRepo
from gsi_orders.repos.wishlist_repo import WishlistRepo
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)
        self.orders = OrderRepo(db)
        self.cart = CartRepo(db)
        self.wishlist = WishlistRepo(db)

    def get_profile(self, user_id: str, include_stats: bool = True) -> Dict[str, Any] | UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")

        profile = UserRead.model_validate(user)
        if not include_stats:
            return profile

        total_orders, total_spent = self.orders.paid_summary(user_id)
        cart_items = len(self.cart.get_cart_items(user_id))

        stats = {
            "total_orders": total_orders,
            "total_spent": to_money(total_spent),
            "cart_items": cart_items,
            "wishlist_items": self.wishlist.count_for_user(user_id),
        }

        logger.info(f"Profile of {user_id} with stats {stats}")

        return {"user": profile, "stats": stats}

    def update_profile(self, user_id: str, payload: UserUpdateIn) -> UserRead:
        if payload.email and not is_email(payload.email):
            raise InvalidInput("Invalid email format")

        updates = {k: v for k, v in payload.model_dump().items() if v}
        if not updates:
            raise InvalidInput("No valid fields to update")

        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")

        for field, value in updates.items():
            setattr(user, field, value)

        try:
            self.repo.save(user)
        except IntegrityError:
            self.repo.rollback()
            raise Conflict("Email already exists")

        logger.info(f"User profile updated: {user_id}")
        return UserRead.model_validate(user)

    def create_admin(self, payload: CreateAdminIn) -> tuple[bool, UserRead]:
        """
        Create an admin user or promote the existing one with the same email.
        Returns (created, user).
        """
        if not payload.email:
            raise InvalidInput("Email required", example={"email": "admin@gsiorders.com"})
        if not is_email(payload.email):
            raise InvalidInput("Invalid email format")

        existing = self.repo.get_by_email(payload.email)
        if existing:
            existing.role = "admin"
            if payload.full_name:
                existing.full_name = payload.full_name
            self.repo.save(existing)
            logger.info(f"User {existing.id} promoted to admin")
            return False, UserRead.model_validate(existing)

        user = UserModel(
            id=str(uuid.uuid4()),
            email=payload.email,
            role="admin",
            full_name=payload.full_name,
        )

        created = self.repo.create_user(user)
        logger.info(f"Admin user created: {created.id}")
        return True, UserRead.model_validate(created)
