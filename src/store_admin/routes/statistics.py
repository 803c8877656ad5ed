from flask import Blueprint

from store_admin.core.dependencies import get_service
from store_admin.routes.utils import success_response
from store_admin.services.statistics_service import StatisticsService

statistics_bp = Blueprint("statistics", __name__)


@statistics_bp.route("/<int:store_id>/statistics/summary", methods=["GET"])
def get_summary(store_id: int):
    """Revenue, product and category counts, and average rating for a store."""
    metrics = get_service(StatisticsService).get_summary(store_id)
    return success_response(metrics)


@statistics_bp.route("/<int:store_id>/statistics/trends", methods=["GET"])
def get_trends(store_id: int):
    """Daily sales for the trailing window plus the latest buyers."""
    report = get_service(StatisticsService).get_trends(store_id)
    return success_response(report)
