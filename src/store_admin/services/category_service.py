from typing import List, Optional

from store_admin.core.exceptions import NotFoundError
from store_admin.models import Category
from store_admin.repositories.category_repository import CategoryRepository
from store_admin.schemas.category_schemas import CategoryDto
import logging

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Category business logic service

    Responsibilities:
    - Scope every category to its store
    - Check existence before any mutation
    """

    def __init__(self, category_repository: CategoryRepository):
        self.category_repo = category_repository

    def list_by_store(self, store_id: int) -> List[Category]:
        categories = self.category_repo.list_by_store(store_id)
        logger.info(f"Store {store_id} has {len(categories)} categories")
        return categories

    def get_by_id(self, category_id: int, store_id: Optional[int] = None) -> Category:
        """
        Get category by ID

        Business Rules:
        - Category must exist
        - When a store is given, a category owned by another store is
          reported exactly like a missing one
        """
        category = self.category_repo.get_by_id(category_id)

        if category is None or (store_id is not None and category.store_id != store_id):
            logger.warning(f"Category {category_id} not found (store={store_id})")
            raise NotFoundError("Category", str(category_id))

        return category

    def create(self, store_id: int, dto: CategoryDto) -> Category:
        logger.info(f"Creating category '{dto.slug}' in store {store_id}")
        category = self.category_repo.create(store_id, dto)
        logger.info(f"Created category {category.id} in store {store_id}")
        return category

    def update(self, category_id: int, dto: CategoryDto, store_id: Optional[int] = None) -> Category:
        """Full overwrite of an existing category"""
        self.get_by_id(category_id, store_id)

        category = self.category_repo.update(category_id, dto)
        if category is None:
            # Deleted between the existence check and the write
            raise NotFoundError("Category", str(category_id))

        logger.info(f"Updated category {category_id}")
        return category

    def delete(self, category_id: int, store_id: Optional[int] = None) -> Category:
        category = self.get_by_id(category_id, store_id)

        if not self.category_repo.delete(category_id):
            raise NotFoundError("Category", str(category_id))

        logger.info(f"Deleted category {category_id}")
        return category
