#import every model so SQLAlchemy registers it in Base.metadata

from gsi_orders.data.models.brand import BrandModel
from gsi_orders.data.models.product import ProductModel
from gsi_orders.data.models.user import UserModel
from gsi_orders.data.models.cart_item import CartItemModel
from gsi_orders.data.models.order import OrderModel, OrderItemModel
from gsi_orders.data.models.review import ReviewModel
from gsi_orders.data.models.wishlist_item import WishlistItemModel
from gsi_orders.data.models.quote import QuoteModel, QuoteItemModel
from gsi_orders.data.models.webhook_log import WebhookLogModel

__all__ = [
    "BrandModel",
    "ProductModel",
    "UserModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "ReviewModel",
    "WishlistItemModel",
    "QuoteModel",
    "QuoteItemModel",
    "WebhookLogModel",
]
