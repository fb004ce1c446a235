# gsi_orders/domain/schemas.py
from typing import Any, List, Optional, Dict
from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict, EmailStr, TypeAdapter, ValidationError, model_serializer

_email = TypeAdapter(EmailStr)


def is_email(value: Any) -> bool:
    try:
        _email.validate_python(value)
    except ValidationError:
        return False
    return True


# Request bodies keep loose types: the services run the field checks
# themselves so every endpoint can answer with its own messages.


class CartItemIn(BaseModel):
    """Body for adding / updating a cart line."""

    product_id: Optional[str] = None
    quantity: Optional[int] = None


class ReviewIn(BaseModel):
    """Body for posting a product review."""

    model_config = ConfigDict(populate_by_name=True)

    product_id: Optional[str] = Field(None, alias="productId")
    rating: Optional[int] = None
    comment: Optional[str] = None


class ReviewModerationIn(BaseModel):
    approved: bool


class WishlistToggleIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: Optional[str] = Field(None, alias="productId")
    action: Optional[str] = None


class QuoteItemIn(BaseModel):
    product_id: Any = None
    quantity: Any = None
    notes: Optional[str] = None


class QuoteRequestIn(BaseModel):
    """Body of a B2B quote request."""

    items: Optional[List[QuoteItemIn]] = None
    company_name: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    additional_notes: Optional[str] = None


class InventoryUpdateIn(BaseModel):
    product_id: Any = None
    new_inventory_count: Any = None


class UserUpdateIn(BaseModel):
    email: Optional[str] = None
    full_name: Optional[str] = None


class CreateAdminIn(BaseModel):
    email: Optional[str] = None
    full_name: Optional[str] = None


class CheckoutItemIn(BaseModel):
    name: str
    price: float
    quantity: int


class CheckoutIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cart_items: Optional[List[CheckoutItemIn]] = Field(None, alias="cartItems")
    user_id: Optional[str] = Field(None, alias="userId")


class ChatbotIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    brand: Any = None
    page_context: Any = Field(None, alias="pageContext")
    user_question: Any = Field(None, alias="userQuestion")


class TaxIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    subtotal: Any = None
    state: Optional[str] = None
    zip_code: Optional[str] = Field(None, alias="zipCode")


# ---------------------------------------------------------------- responses


class BrandNameRef(BaseModel):
    name: str
    slug: str


class BrandRef(BaseModel):
    id: Optional[str] = None
    name: str
    slug: str


class BrandOut(BaseModel):
    id: str
    name: str
    slug: str
    theme_config: Dict[str, Any] = {}


class BrandsOut(BaseModel):
    brands: List[BrandOut]
    total: int


class ProductOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    price: float
    brand_id: Optional[str] = None
    inventory_count: int
    images: Optional[List[str]] = None
    created_at: datetime
    brand: Optional[BrandRef] = None


class ProductsOut(BaseModel):
    products: List[ProductOut]
    total: int
    page: int
    limit: int
    has_more: bool = Field(serialization_alias="hasMore")


class ProductSummaryOut(BaseModel):
    id: str
    name: str
    price: float
    images: Optional[List[str]] = None
    inventory_count: int
    brand: Optional[BrandNameRef] = None


class CartItemOut(BaseModel):
    id: str
    user_id: str
    product_id: str
    quantity: int
    created_at: datetime
    updated_at: datetime
    product: Optional[ProductSummaryOut] = None


class CartOut(BaseModel):
    items: List[CartItemOut]
    total: float
    item_count: int = Field(serialization_alias="itemCount")


class OrderProductOut(BaseModel):
    id: str
    name: str
    images: Optional[List[str]] = None
    brand: Optional[BrandNameRef] = None


class OrderItemOut(BaseModel):
    id: str
    order_id: str
    product_id: str
    quantity: int
    price: float
    product: Optional[OrderProductOut] = None


class OrderOut(BaseModel):
    id: str
    user_id: str
    total: float
    status: str
    created_at: datetime
    # only present when the lines were requested
    order_items: Optional[List[OrderItemOut]] = None

    @model_serializer(mode="wrap")
    def _drop_missing_items(self, handler):
        data = handler(self)
        if self.order_items is None:
            data.pop("order_items", None)
        return data


class OrdersOut(BaseModel):
    orders: List[OrderOut]
    total: int
    page: int
    limit: int


class PaginationOut(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(serialization_alias="totalPages")


class ReviewOut(BaseModel):
    id: str
    rating: int
    comment: str
    created_at: datetime
    approved: bool


class ReviewCreatedOut(BaseModel):
    success: bool
    review: ReviewOut
    message: str


class ReviewerOut(BaseModel):
    email: Optional[str] = None


class ReviewListItemOut(BaseModel):
    id: str
    rating: int
    comment: str
    created_at: datetime
    user: Optional[ReviewerOut] = None


class ReviewsOut(BaseModel):
    reviews: List[ReviewListItemOut]
    pagination: PaginationOut
    average_rating: float = Field(serialization_alias="averageRating")
    total_reviews: int = Field(serialization_alias="totalReviews")


class AdminReviewOut(BaseModel):
    id: str
    product_id: str
    user_id: str
    rating: int
    comment: str
    approved: bool
    created_at: datetime


class AdminReviewsOut(BaseModel):
    reviews: List[AdminReviewOut]
    pagination: PaginationOut


class WishlistToggleOut(BaseModel):
    success: bool
    is_saved: bool = Field(serialization_alias="isSaved")
    message: str


class WishlistEntryOut(BaseModel):
    product_id: str
    product: Optional[ProductSummaryOut] = None


class WishlistOut(BaseModel):
    wishlist: List[WishlistEntryOut]
    pagination: PaginationOut
    total_items: int = Field(serialization_alias="totalItems")


class WishlistCheckOut(BaseModel):
    is_saved: bool = Field(serialization_alias="isSaved")
    success: bool = True


class QuoteCreatedOut(BaseModel):
    success: bool
    quote_id: str
    status: str
    total_value: float
    message: str


class InventoryUpdateOut(BaseModel):
    success: bool
    product_id: str
    new_count: int
    message: str


class AdminProductOut(BaseModel):
    id: str
    name: str
    inventory_count: int
    price: float
    brand_id: Optional[str] = None
    brand_name: str
    created_at: datetime


class AdminProductsOut(BaseModel):
    products: List[AdminProductOut]
    total_count: int


class LowInventoryOut(BaseModel):
    id: str
    name: str
    inventory_count: int
    brand_name: str


class RecentOrderOut(BaseModel):
    id: str
    total: float
    status: str
    created_at: datetime
    user_id: str


class DashboardOut(BaseModel):
    total_revenue: float = Field(serialization_alias="totalRevenue")
    total_orders: int = Field(serialization_alias="totalOrders")
    low_inventory_products: List[LowInventoryOut] = Field(serialization_alias="lowInventoryProducts")
    recent_orders: List[RecentOrderOut] = Field(serialization_alias="recentOrders")


class UserRead(BaseModel):
    id: str
    email: Optional[str] = None
    role: str
    full_name: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserStats(BaseModel):
    total_orders: int
    total_spent: float
    cart_items: int
    wishlist_items: int


class UserProfileOut(BaseModel):
    user: UserRead
    stats: UserStats


class AdminUserOut(BaseModel):
    success: bool
    message: str
    user: UserRead


class CheckoutOut(BaseModel):
    session_id: str = Field(serialization_alias="sessionId")
    url: Optional[str] = None
    metadata: Dict[str, Any] = {}


class ChatbotOut(BaseModel):
    response: str
    brand: str
    timestamp: str


class TaxOut(BaseModel):
    subtotal: float
    tax_amount: float = Field(serialization_alias="taxAmount")
    total: float
    tax_rate: float = Field(serialization_alias="taxRate")
    state: str
