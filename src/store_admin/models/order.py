from datetime import datetime, timezone

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, Integer, Text
from sqlalchemy import ForeignKey
from sqlalchemy.orm import relationship

from store_admin.db import Base, IdType


class Order(Base):
    """
    A purchase by a user.

    One order may contain items from several stores (a marketplace basket);
    per-store figures are therefore always computed from order_items, never
    from an order-level total.
    """

    __tablename__ = "orders"

    id = Column(IdType, primary_key=True, autoincrement=True)
    user_id = Column(IdType, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(Text, nullable=False, default="created")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('created','paid','shipped','refunded','cancelled')",
            name="ck_order_status",
        ),
    )

    # cascade='all, delete-orphan' -> deleting an order removes its line items
    items = relationship(
        "OrderItem", back_populates="order", cascade="all, delete-orphan"
    )
    user = relationship("User", back_populates="orders")

    def __repr__(self) -> str:
        return f"<Order id={self.id} user_id={self.user_id} status={self.status!r}>"


class OrderItem(Base):
    """
    A single line item within an order.

    unit_price_cents is snapshotted at the time of purchase so that later
    price changes on the product do not alter historical sales figures.
    store_id is copied from the product for the same reason.
    """

    __tablename__ = "order_items"

    id = Column(IdType, primary_key=True, autoincrement=True)
    order_id = Column(
        IdType, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id = Column(IdType, ForeignKey("products.id"), nullable=False)
    store_id = Column(IdType, ForeignKey("stores.id"), nullable=False, index=True)
    unit_price_cents = Column(BigInteger, nullable=False)
    quantity = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("unit_price_cents >= 0", name="ck_item_unit_price"),
        CheckConstraint("quantity > 0", name="ck_item_quantity"),
    )

    order = relationship("Order", back_populates="items")

    @property
    def subtotal_cents(self) -> int:
        return self.unit_price_cents * self.quantity

    def __repr__(self) -> str:
        return (
            f"<OrderItem id={self.id} store_id={self.store_id} "
            f"product_id={self.product_id} qty={self.quantity}>"
        )
