from dataclasses import dataclass, field
from datetime import datetime
from typing import List, NamedTuple, Optional, Sequence

from sqlalchemy import func, select

from store_admin.models import Category, Order, OrderItem, Product, Review, User
from store_admin.repositories.base import BaseRepository
import logging

logger = logging.getLogger(__name__)

# sum(price x quantity), the only definition of money used in reports
_ITEM_VALUE = OrderItem.unit_price_cents * OrderItem.quantity


class OrderSales(NamedTuple):
    """Value of one order's items that belong to a single store"""
    order_id: int
    user_id: int
    created_at: datetime
    total_cents: int


@dataclass
class OrderSalesQuery:
    """Filters for per-order store sales; every filter is optional except the store"""
    store_id: int
    placed_from: Optional[datetime] = None
    placed_to: Optional[datetime] = None
    user_ids: Sequence[int] = field(default_factory=tuple)


class StatisticsRepository(BaseRepository[OrderItem]):
    """
    Read-only aggregate queries behind the store statistics.

    Every money figure is computed from order_items filtered by store_id,
    so items from other stores in a shared order never leak into a total.
    """

    @property
    def model(self):
        return OrderItem

    def total_revenue(self, store_id: int) -> int:
        statement = (
            select(func.coalesce(func.sum(_ITEM_VALUE), 0))
            .where(OrderItem.store_id == store_id)
        )
        return int(self.fetch_scalar(statement) or 0)

    def count_products(self, store_id: int) -> int:
        return self.count_by_store(store_id, Product)

    def count_categories(self, store_id: int) -> int:
        return self.count_by_store(store_id, Category)

    def average_rating(self, store_id: int) -> Optional[float]:
        """AVG(rating) for the store; None when the store has no reviews"""
        statement = select(func.avg(Review.rating)).where(Review.store_id == store_id)
        value = self.fetch_scalar(statement)
        return float(value) if value is not None else None

    def order_sales(self, query: OrderSalesQuery) -> List[OrderSales]:
        """
        One row per order that contains at least one item from the store,
        carrying only that store's share of the order.
        """
        statement = (
            select(
                Order.id,
                Order.user_id,
                Order.created_at,
                func.sum(_ITEM_VALUE).label("total_cents"),
            )
            .join(OrderItem, OrderItem.order_id == Order.id)
            .where(OrderItem.store_id == query.store_id)
        )
        if query.placed_from is not None:
            statement = statement.where(Order.created_at >= query.placed_from)
        if query.placed_to is not None:
            statement = statement.where(Order.created_at <= query.placed_to)
        if query.user_ids:
            statement = statement.where(Order.user_id.in_(list(query.user_ids)))

        statement = (
            statement
            .group_by(Order.id, Order.user_id, Order.created_at)
            .order_by(Order.created_at, Order.id)
        )

        rows = self.fetch_rows(statement)
        return [
            OrderSales(
                order_id=row.id,
                user_id=row.user_id,
                created_at=row.created_at,
                total_cents=int(row.total_cents or 0),
            )
            for row in rows
        ]

    def latest_buyers(self, store_id: int, limit: int) -> List[User]:
        """Most recently registered users with at least one order in the store"""
        has_store_order = (
            select(Order.id)
            .join(OrderItem, OrderItem.order_id == Order.id)
            .where(Order.user_id == User.id, OrderItem.store_id == store_id)
            .exists()
        )
        statement = (
            select(User)
            .where(has_store_order)
            .order_by(User.created_at.desc(), User.id.desc())
            .limit(limit)
        )
        return self.fetch_all(statement)
