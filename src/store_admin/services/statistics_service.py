from datetime import date, datetime
from typing import Dict, List, Optional

from store_admin.core.config import ReportConfig
from store_admin.repositories.statistics_repository import (
    OrderSales, OrderSalesQuery, StatisticsRepository
)
from store_admin.schemas.statistics_schemas import (
    DailySale, LastUserSale, SummaryMetric, TrendsReport
)
from store_admin.utils.date_utils import DateUtils
import logging

logger = logging.getLogger(__name__)


class StatisticsService:
    """
    Store statistics for the admin dashboard

    Responsibilities:
    - Summary tiles: revenue, product count, category count, average rating
    - Trends: sparse daily sales over a trailing window and the latest buyers

    An unknown store is not an error; every figure simply comes out as zero.
    """

    def __init__(self, statistics_repository: StatisticsRepository, report_config: Optional[ReportConfig] = None):
        self.stats_repo = statistics_repository
        self.report_config = report_config or ReportConfig()

    def get_summary(self, store_id: int) -> List[SummaryMetric]:
        logger.info(f"Building summary statistics for store {store_id}")

        revenue = self.stats_repo.total_revenue(store_id)
        products_count = self.stats_repo.count_products(store_id)
        categories_count = self.stats_repo.count_categories(store_id)
        average_rating = self.stats_repo.average_rating(store_id)

        return [
            SummaryMetric(id=1, name="Revenue", value=revenue),
            SummaryMetric(id=2, name="Products", value=products_count),
            SummaryMetric(id=3, name="Categories", value=categories_count),
            SummaryMetric(
                id=4,
                name="Average rating",
                value=average_rating if average_rating is not None else 0,
            ),
        ]

    def get_trends(self, store_id: int, now: Optional[datetime] = None) -> TrendsReport:
        """
        Trend block for the dashboard

        `now` pins the current instant; it defaults to the wall clock.
        """
        logger.info(f"Building trend statistics for store {store_id}")

        daily_sales = self.calculate_daily_sales(store_id, now)
        last_users = self.get_last_users(store_id)

        return TrendsReport(daily_sales=daily_sales, last_users=last_users)

    def calculate_daily_sales(self, store_id: int, now: Optional[datetime] = None) -> List[DailySale]:
        """
        Store sales per calendar day, oldest day first.

        Only days with at least one order appear; there is no zero filling.
        """
        tz_name = self.report_config.timezone
        start, end = DateUtils.trailing_window(
            self.report_config.trends_window_days, tz_name, now
        )

        orders = self.stats_repo.order_sales(
            OrderSalesQuery(store_id=store_id, placed_from=start, placed_to=end)
        )

        sales_by_day: Dict[date, int] = {}
        for order in orders:
            day = DateUtils.local_date(order.created_at, tz_name)
            sales_by_day[day] = sales_by_day.get(day, 0) + order.total_cents

        logger.info(
            f"Store {store_id}: {len(orders)} orders on {len(sales_by_day)} days "
            f"between {start.isoformat()} and {end.isoformat()}"
        )

        return [
            DailySale(date=DateUtils.format_day_month(day), value=sales_by_day[day])
            for day in sorted(sales_by_day)
        ]

    def get_last_users(self, store_id: int) -> List[LastUserSale]:
        """
        Latest registered buyers, each with the store value of their most
        recent order (by placement time, ties broken by order id).
        """
        users = self.stats_repo.latest_buyers(store_id, self.report_config.last_users_limit)
        if not users:
            return []

        orders = self.stats_repo.order_sales(
            OrderSalesQuery(store_id=store_id, user_ids=[user.id for user in users])
        )

        latest: Dict[int, OrderSales] = {}
        for order in orders:
            current = latest.get(order.user_id)
            if current is None or self._placed_key(order) > self._placed_key(current):
                latest[order.user_id] = order

        result = []
        for user in users:
            last_order = latest.get(user.id)
            if last_order is None:
                logger.warning(f"User {user.id} has no remaining orders in store {store_id}")
            result.append(
                LastUserSale(
                    id=user.id,
                    name=user.name,
                    email=user.email,
                    picture=user.picture,
                    total=last_order.total_cents if last_order else 0,
                )
            )
        return result

    @staticmethod
    def _placed_key(order: OrderSales):
        return DateUtils.to_utc(order.created_at), order.order_id
