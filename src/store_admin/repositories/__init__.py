from .base import BaseRepository
from .category_repository import CategoryRepository
from .statistics_repository import OrderSales, OrderSalesQuery, StatisticsRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "StatisticsRepository", "OrderSales", "OrderSalesQuery",
]
