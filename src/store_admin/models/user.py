from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Text
from sqlalchemy.orm import relationship

from store_admin.db import Base, IdType


class User(Base):
    """
    Represents a registered customer.

    created_at doubles as the registration time; the trends report lists the
    most recently registered buyers first.
    """

    __tablename__ = "users"

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    picture = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    orders = relationship("Order", back_populates="user")

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
