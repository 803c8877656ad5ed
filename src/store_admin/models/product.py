from datetime import datetime, timezone

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, Text
from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from store_admin.db import Base, IdType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """
    A store-scoped grouping for products (e.g. Electronics, Clothing).

    The slug is unique within a store, not globally: two sellers may both
    have a 'shoes' category.
    """

    __tablename__ = "categories"

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    slug = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    store_id = Column(
        IdType, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (
        UniqueConstraint("store_id", "slug", name="uq_category_store_slug"),
    )

    # Deleting a category leaves its products uncategorised
    products = relationship("Product", back_populates="category", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Category id={self.id} store_id={self.store_id} slug={self.slug!r}>"


class Product(Base):
    """
    A purchasable item listed by a store.

    price_cents stores the list price as an integer number of cents to avoid
    floating-point rounding errors. $19.99 -> 1999. Order items snapshot the
    price at purchase time, so changing it never rewrites revenue.
    """

    __tablename__ = "products"

    id = Column(IdType, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    price_cents = Column(BigInteger, nullable=False)
    store_id = Column(
        IdType, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id = Column(
        IdType, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (CheckConstraint("price_cents >= 0", name="ck_product_price"),)

    category = relationship("Category", back_populates="products")

    def __repr__(self) -> str:
        return f"<Product id={self.id} store_id={self.store_id} title={self.title!r}>"
