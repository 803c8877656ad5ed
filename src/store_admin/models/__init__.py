# Re-export all models from a single entry point so the rest of the app
# can import cleanly:
#   from store_admin.models import Category, Order, OrderItem
#
# Importing all models here also ensures they are registered with Base.metadata
# before any call to Base.metadata.create_all().

from store_admin.models.order import Order, OrderItem
from store_admin.models.product import Category, Product
from store_admin.models.review import Review
from store_admin.models.store import Store
from store_admin.models.user import User

__all__ = [
    "Store",
    "User",
    "Category",
    "Product",
    "Review",
    "Order",
    "OrderItem",
]
