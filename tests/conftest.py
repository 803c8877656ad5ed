"""
Pytest configuration and fixtures.

Every test gets a fresh in-memory SQLite database built from the ORM
metadata, plus small builders for the records the reports read.
"""

import os
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

import pytest

os.environ.setdefault("ENVIRONMENT", "development")

from store_admin.app import create_app
from store_admin.core.config import Config, DatabaseConfig, ReportConfig
from store_admin.db import Base, build_engine, build_session_factory, init_db, session_scope
from store_admin.models import Category, Order, OrderItem, Product, Review, Store, User
from store_admin.repositories import CategoryRepository, StatisticsRepository
from store_admin.services import CategoryService, StatisticsService

NOW = datetime(2026, 10, 18, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings():
    cfg = Config()
    cfg.database = DatabaseConfig(url="sqlite://")
    cfg.cors.client_url = "http://localhost:3000"
    cfg.report = ReportConfig()
    cfg.app.log_level = "WARNING"
    return cfg


@pytest.fixture
def engine(settings):
    engine = build_engine(settings.database)
    init_db(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def app(settings):
    application = create_app(settings)
    application.config["TESTING"] = True
    engine = application.extensions["store_admin.engine"]
    init_db(engine)
    yield application
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_data(app):
    """Builder bound to the database behind the Flask app."""
    return DataBuilder(build_session_factory(app.extensions["store_admin.engine"]))


@pytest.fixture
def data(session_factory):
    return DataBuilder(session_factory)


@pytest.fixture
def category_service(session_factory):
    return CategoryService(CategoryRepository(session_factory))


@pytest.fixture
def statistics_service(session_factory):
    return StatisticsService(StatisticsRepository(session_factory), ReportConfig())


class DataBuilder:
    """Inserts fixture records and returns them detached."""

    def __init__(self, session_factory):
        self.session_factory = session_factory
        self._emails = 0

    def _add(self, instance):
        with session_scope(self.session_factory) as session:
            session.add(instance)
            session.flush()
            session.refresh(instance)
        return instance

    def store(self, name: str = "Store") -> Store:
        return self._add(Store(name=name))

    def user(self, name: str = "User", created_at: Optional[datetime] = None, picture: Optional[str] = None) -> User:
        self._emails += 1
        return self._add(User(
            name=name,
            email=f"{name.lower()}{self._emails}@example.com",
            picture=picture,
            created_at=created_at or NOW,
        ))

    def category(self, store: Store, slug: str = "misc", name: str = "Misc") -> Category:
        return self._add(Category(store_id=store.id, slug=slug, name=name))

    def product(
        self,
        store: Store,
        price_cents: int = 1000,
        title: str = "Product",
        category: Optional[Category] = None,
    ) -> Product:
        return self._add(Product(
            store_id=store.id,
            title=title,
            price_cents=price_cents,
            category_id=category.id if category else None,
        ))

    def reload(self, model, entity_id: int):
        with session_scope(self.session_factory) as session:
            return session.get(model, entity_id)

    def review(self, store: Store, product: Product, user: User, rating: int) -> Review:
        return self._add(Review(
            store_id=store.id, product_id=product.id, user_id=user.id, rating=rating
        ))

    def order(
        self,
        user: User,
        items: Iterable[Tuple[Product, int, int]],
        created_at: Optional[datetime] = None,
    ) -> Order:
        """items: (product, unit_price_cents, quantity); store comes from the product."""
        order = Order(user_id=user.id, status="paid", created_at=created_at or NOW)
        for product, price_cents, quantity in items:
            order.items.append(OrderItem(
                product_id=product.id,
                store_id=product.store_id,
                unit_price_cents=price_cents,
                quantity=quantity,
            ))
        return self._add(order)
