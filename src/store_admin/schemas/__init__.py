from .category_schemas import CategoryDto, CategoryResponse
from .statistics_schemas import DailySale, LastUserSale, SummaryMetric, TrendsReport

__all__ = [
    "CategoryDto", "CategoryResponse",
    "SummaryMetric", "DailySale", "LastUserSale", "TrendsReport",
]
