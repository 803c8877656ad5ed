from store_admin.routes.categories import categories_bp
from store_admin.routes.statistics import statistics_bp

__all__ = ["categories_bp", "statistics_bp"]
