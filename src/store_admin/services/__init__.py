from .category_service import CategoryService
from .statistics_service import StatisticsService

__all__ = ["CategoryService", "StatisticsService"]
