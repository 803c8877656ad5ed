from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Text

from store_admin.db import Base, IdType


class Store(Base):
    """
    A seller scope. Products, categories, reviews and order items all carry a
    store_id; every admin query is filtered by it.
    """

    __tablename__ = "stores"

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Store id={self.id} name={self.name!r}>"
