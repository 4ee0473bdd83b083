#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from shopapi.data.models.user import UserModel
from shopapi.data.models.category import CategoryModel
from shopapi.data.models.product import ProductModel
from shopapi.data.models.cart_item import CartItemModel
from shopapi.data.models.order import OrderModel, ORDER_STATUSES
from shopapi.data.models.order_item import OrderItemModel

__all__ = [
    "UserModel",
    "CategoryModel",
    "ProductModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "ORDER_STATUSES",
]
