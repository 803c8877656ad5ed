from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Text
from sqlalchemy import ForeignKey

from store_admin.db import Base, IdType


class Review(Base):
    """
    A 1-5 star rating left by a user on a product.

    store_id is denormalised from the product so the store average is a
    single-table aggregate.
    """

    __tablename__ = "reviews"

    id = Column(IdType, primary_key=True, autoincrement=True)
    rating = Column(Integer, nullable=False)
    text = Column(Text, nullable=True)
    user_id = Column(IdType, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(
        IdType, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    store_id = Column(
        IdType, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating"),
    )

    def __repr__(self) -> str:
        return f"<Review id={self.id} store_id={self.store_id} rating={self.rating}>"
