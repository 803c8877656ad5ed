"""
Seed script -- populates the database with realistic development data.

Run with:
    python -m store_admin.seed

Tables are created if missing. Stores, users and categories are looked up
before inserting, but orders and reviews are added on every run, so
repeated runs inflate the statistics. Drop the tables for a fresh state.
"""

import logging
import random
from datetime import timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from store_admin.core.config import config
from store_admin.db import build_engine, build_session_factory, init_db, session_scope
from store_admin.models import Category, Order, OrderItem, Product, Review, Store, User
from store_admin.utils.date_utils import DateUtils

logger = logging.getLogger(__name__)

STORES = {
    "Gadget Hub": {
        "electronics": ("Electronics", [("ProBook Laptop 15", 129999), ("SmartPhone X12", 79999)]),
        "audio": ("Audio", [("Studio Headphones", 19999)]),
    },
    "Thread & Co": {
        "t-shirts": ("T-Shirts", [("Classic Cotton T-Shirt", 2999), ("Organic V-Neck", 3499)]),
        "books": ("Books", [("Flask Web Development", 3999)]),
    },
}

USERS = [
    ("Alice", "alice@example.com"),
    ("Bob", "bob@example.com"),
    ("Carol", "carol@example.com"),
    ("Dave", "dave@example.com"),
    ("Erin", "erin@example.com"),
    ("Frank", "frank@example.com"),
]


def _get_or_create(session: Session, model, lookup: dict, **values):
    instance = session.scalars(select(model).filter_by(**lookup)).first()
    if instance is None:
        instance = model(**lookup, **values)
        session.add(instance)
        session.flush()
    return instance


def seed(order_count: int = 40, rng: Optional[random.Random] = None) -> None:
    rng = rng or random.Random(7)
    engine = build_engine(config.database)
    init_db(engine)
    session_factory = build_session_factory(engine)
    now = DateUtils.now_utc()

    with session_scope(session_factory) as session:
        # ------------------------------------------------------------------ #
        # Stores, categories, products                                         #
        # ------------------------------------------------------------------ #
        products = []
        for store_name, categories in STORES.items():
            store = _get_or_create(session, Store, {"name": store_name})
            for slug, (name, items) in categories.items():
                category = _get_or_create(
                    session, Category, {"store_id": store.id, "slug": slug}, name=name
                )
                for title, price_cents in items:
                    products.append(_get_or_create(
                        session,
                        Product,
                        {"store_id": store.id, "title": title},
                        price_cents=price_cents,
                        category_id=category.id,
                    ))
            logger.info(f"Store seeded: {store_name}")

        # ------------------------------------------------------------------ #
        # Users                                                               #
        # ------------------------------------------------------------------ #
        users = []
        for offset, (name, email) in enumerate(USERS):
            users.append(_get_or_create(
                session,
                User,
                {"email": email},
                name=name,
                created_at=now - timedelta(days=60 - offset * 5),
            ))
        logger.info(f"Users seeded: {len(users)}")

        # ------------------------------------------------------------------ #
        # Orders spread over the last ~45 days; baskets may mix stores         #
        # ------------------------------------------------------------------ #
        for _ in range(order_count):
            order = Order(
                user_id=rng.choice(users).id,
                status="paid",
                created_at=now - timedelta(days=rng.randint(0, 45), hours=rng.randint(0, 23)),
            )
            for product in rng.sample(products, rng.randint(1, 3)):
                order.items.append(OrderItem(
                    product_id=product.id,
                    store_id=product.store_id,
                    unit_price_cents=product.price_cents,
                    quantity=rng.randint(1, 3),
                ))
            session.add(order)

        for product in products:
            for user in rng.sample(users, rng.randint(0, 3)):
                session.add(Review(
                    rating=rng.randint(1, 5),
                    user_id=user.id,
                    product_id=product.id,
                    store_id=product.store_id,
                ))
        logger.info(f"Orders seeded: {order_count}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    logger.info("Seeding database...")
    seed()
    logger.info("Seed completed successfully.")
