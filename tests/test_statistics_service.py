"""
Tests for StatisticsService.

Covers revenue isolation between stores, null-safe rating, the trailing
window boundaries and the latest-buyers block.
"""

import logging
from datetime import datetime, timedelta, timezone
from unittest import mock

import pytest

from store_admin.core.config import ReportConfig
from store_admin.repositories import StatisticsRepository
from store_admin.services import StatisticsService

from tests.conftest import NOW


def _summary_values(metrics):
    return {m.name: m.value for m in metrics}


@pytest.fixture
def two_stores(data):
    store = data.store("S")
    other = data.store("Other")
    own_product = data.product(store, 1000)
    foreign_product = data.product(other, 500)
    return store, other, own_product, foreign_product


def test_example_mixed_orders_revenue_and_daily_series(data, statistics_service, two_stores):
    store, other, own_product, foreign_product = two_stores
    buyer = data.user("Buyer")
    data.order(buyer, [(own_product, 10, 2), (foreign_product, 5, 1)], created_at=NOW)
    data.order(buyer, [(own_product, 3, 1)], created_at=NOW - timedelta(hours=2))

    summary = _summary_values(statistics_service.get_summary(store.id))
    assert summary["Revenue"] == 23

    trends = statistics_service.get_trends(store.id, now=NOW)
    assert [(d.date, d.value) for d in trends.daily_sales] == [("18 oct", 23)]


def test_revenue_of_other_store_only_counts_its_items(data, statistics_service, two_stores):
    store, other, own_product, foreign_product = two_stores
    buyer = data.user("Buyer")
    data.order(buyer, [(own_product, 10, 2), (foreign_product, 5, 1)])

    assert _summary_values(statistics_service.get_summary(other.id))["Revenue"] == 5


def test_summary_counts_and_average_rating(data, statistics_service, two_stores):
    store, other, own_product, _ = two_stores
    data.product(store, 200)
    data.category(store, "a")
    data.category(store, "b")
    data.category(other, "a")
    reviewer = data.user("Reviewer")
    data.review(store, own_product, reviewer, 4)
    data.review(store, own_product, reviewer, 5)

    metrics = statistics_service.get_summary(store.id)

    assert [m.id for m in metrics] == [1, 2, 3, 4]
    assert [m.name for m in metrics] == ["Revenue", "Products", "Categories", "Average rating"]
    values = _summary_values(metrics)
    assert values["Products"] == 2
    assert values["Categories"] == 2
    assert values["Average rating"] == pytest.approx(4.5)


def test_average_rating_is_zero_without_reviews(data, statistics_service, two_stores):
    store, other, own_product, _ = two_stores
    data.review(other, own_product, data.user("Someone"), 5)

    assert _summary_values(statistics_service.get_summary(store.id))["Average rating"] == 0


def test_unknown_store_yields_zeros(statistics_service):
    values = _summary_values(statistics_service.get_summary(9999))
    assert values == {"Revenue": 0, "Products": 0, "Categories": 0, "Average rating": 0}

    trends = statistics_service.get_trends(9999, now=NOW)
    assert trends.daily_sales == []
    assert trends.last_users == []


def test_daily_sales_window_is_inclusive_and_sparse(data, statistics_service, two_stores):
    store, _, product, _ = two_stores
    buyer = data.user("Buyer")
    window_start = datetime(2026, 9, 18, 0, 0, tzinfo=timezone.utc)

    data.order(buyer, [(product, 100, 1)], created_at=window_start)
    data.order(buyer, [(product, 100, 1)], created_at=window_start - timedelta(microseconds=1))
    data.order(buyer, [(product, 200, 1)], created_at=datetime(2026, 10, 18, 23, 59, 59, tzinfo=timezone.utc))
    data.order(buyer, [(product, 300, 1)], created_at=datetime(2026, 10, 19, 0, 0, tzinfo=timezone.utc))
    data.order(buyer, [(product, 50, 2)], created_at=datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc))
    data.order(buyer, [(product, 25, 1)], created_at=datetime(2026, 10, 1, 18, 0, tzinfo=timezone.utc))

    trends = statistics_service.get_trends(store.id, now=NOW)

    assert [(d.date, d.value) for d in trends.daily_sales] == [
        ("18 sep", 100),
        ("1 oct", 125),
        ("18 oct", 200),
    ]


def test_daily_sales_are_chronological_across_months(data, statistics_service, two_stores):
    store, _, product, _ = two_stores
    buyer = data.user("Buyer")
    # Inserted newest first; output must still be oldest first
    data.order(buyer, [(product, 1, 1)], created_at=datetime(2026, 10, 2, tzinfo=timezone.utc))
    data.order(buyer, [(product, 1, 1)], created_at=datetime(2026, 9, 30, tzinfo=timezone.utc))
    data.order(buyer, [(product, 1, 1)], created_at=datetime(2026, 9, 20, tzinfo=timezone.utc))

    labels = [d.date for d in statistics_service.get_trends(store.id, now=NOW).daily_sales]

    assert labels == ["20 sep", "30 sep", "2 oct"]


def test_daily_sales_use_reporting_timezone(data, session_factory, two_stores):
    store, _, product, _ = two_stores
    buyer = data.user("Buyer")
    # 02:00 UTC on the 18th is still the 17th in New York
    data.order(buyer, [(product, 700, 1)], created_at=datetime(2026, 10, 18, 2, 0, tzinfo=timezone.utc))

    service = StatisticsService(
        StatisticsRepository(session_factory),
        ReportConfig(timezone="America/New_York"),
    )
    trends = service.get_trends(store.id, now=NOW)

    assert [(d.date, d.value) for d in trends.daily_sales] == [("17 oct", 700)]


def test_last_users_are_latest_registered_buyers_of_the_store(data, statistics_service, two_stores):
    store, _, product, foreign_product = two_stores
    buyers = [
        data.user(f"Buyer{i}", created_at=NOW - timedelta(days=10 - i))
        for i in range(7)
    ]
    for buyer in buyers:
        data.order(buyer, [(product, 100, 1)])
    # Newest user, but never bought from this store
    outsider = data.user("Outsider", created_at=NOW)
    data.order(outsider, [(foreign_product, 100, 1)])
    # Registered, never ordered
    data.user("Idle", created_at=NOW)

    last_users = statistics_service.get_trends(store.id, now=NOW).last_users

    assert [u.name for u in last_users] == ["Buyer6", "Buyer5", "Buyer4", "Buyer3", "Buyer2"]


def test_last_user_total_comes_from_most_recent_order(data, statistics_service, two_stores):
    store, _, product, foreign_product = two_stores
    buyer = data.user("Buyer", picture="https://cdn.example.com/buyer.png")
    # Inserted out of chronological order on purpose
    data.order(buyer, [(product, 400, 2), (foreign_product, 999, 1)], created_at=NOW - timedelta(days=1))
    data.order(buyer, [(product, 100, 1)], created_at=NOW - timedelta(days=5))

    [entry] = statistics_service.get_trends(store.id, now=NOW).last_users

    assert entry.id == buyer.id
    assert entry.email == buyer.email
    assert entry.picture == "https://cdn.example.com/buyer.png"
    assert entry.total == 800


def test_last_users_include_buyers_with_orders_outside_window(data, statistics_service, two_stores):
    store, _, product, _ = two_stores
    buyer = data.user("Old")
    data.order(buyer, [(product, 150, 3)], created_at=NOW - timedelta(days=200))

    trends = statistics_service.get_trends(store.id, now=NOW)

    assert trends.daily_sales == []
    assert [(u.name, u.total) for u in trends.last_users] == [("Old", 450)]


def test_last_user_without_remaining_orders_gets_zero_total(data, statistics_service, two_stores, caplog):
    store, _, product, _ = two_stores
    buyer = data.user("Vanished")
    data.order(buyer, [(product, 100, 1)])

    # Orders disappear between the buyers query and the totals query
    with mock.patch.object(StatisticsRepository, "order_sales", return_value=[]):
        with caplog.at_level(logging.WARNING, logger="store_admin.services.statistics_service"):
            last_users = statistics_service.get_last_users(store.id)

    assert [(u.id, u.total) for u in last_users] == [(buyer.id, 0)]
    assert any(
        record.levelno == logging.WARNING and f"User {buyer.id}" in record.getMessage()
        for record in caplog.records
    )
