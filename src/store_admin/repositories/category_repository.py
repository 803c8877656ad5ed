from typing import List, Optional

from sqlalchemy import select

from store_admin.models import Category
from store_admin.repositories.base import BaseRepository
from store_admin.schemas.category_schemas import CategoryDto
import logging

logger = logging.getLogger(__name__)


class CategoryRepository(BaseRepository[Category]):
    """Repository for store-scoped categories"""

    @property
    def model(self):
        return Category

    def list_by_store(self, store_id: int) -> List[Category]:
        statement = (
            select(Category)
            .where(Category.store_id == store_id)
            .order_by(Category.created_at, Category.id)
        )
        return self.fetch_all(statement)

    def create(self, store_id: int, dto: CategoryDto) -> Category:
        with self.session("INSERT") as session:
            category = Category(store_id=store_id, **dto.to_dict())
            session.add(category)
            session.flush()
            session.refresh(category)
            return category

    def update(self, category_id: int, dto: CategoryDto) -> Optional[Category]:
        """Overwrite every client-editable field; None if the row vanished"""
        with self.session("UPDATE") as session:
            category = session.get(Category, category_id)
            if category is None:
                return None
            for field_name, value in dto.to_dict().items():
                setattr(category, field_name, value)
            session.flush()
            session.refresh(category)
            return category

    def delete(self, category_id: int) -> bool:
        with self.session("DELETE") as session:
            category = session.get(Category, category_id)
            if category is None:
                return False
            session.delete(category)
            return True
