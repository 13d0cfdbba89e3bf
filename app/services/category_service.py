from sqlalchemy.orm import Session
from typing import List
import logging

from app.exceptions import InvalidArgumentError, NotFoundError
from app.models.category import Category
from app.repositories.category_repository import CategoryStore
from app.schemas.category import CategoryCreate, CategoryUpdate
from app.utils.cache import PRODUCT_CACHE_PREFIX, cache_service

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Service class for Category operations.

    Every update or delete first looks the category up and raises
    NotFoundError when it is missing, so a missing row is never masked
    by an upsert.
    """

    def __init__(self, db: Session):
        self.db = db
        self.store = CategoryStore(db)

    def find_all(self) -> List[Category]:
        """Get all categories."""
        return self.store.find_all()

    def find_by_id(self, category_id: int) -> Category:
        """
        Get a category by ID.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        category = self.store.get(category_id)
        if category is None:
            raise NotFoundError(f"Category with ID {category_id} not found")
        return category

    def find_all_by_name(self, name: str) -> List[Category]:
        """Case-insensitive substring search on name. May be empty."""
        return self.store.find_by_name(name)

    def find_all_by_description(self, description: str) -> List[Category]:
        """Case-insensitive substring search on description. May be empty."""
        return self.store.find_by_description(description)

    def create(self, category_data: CategoryCreate) -> Category:
        """Create a new category. The store assigns the id."""
        category = Category(
            name=category_data.name,
            description=category_data.description,
        )
        self.store.save(category)
        logger.info(f"Category #{category.id} '{category.name}' created")
        return category

    def update(self, category_data: CategoryUpdate) -> Category:
        """
        Replace an existing category.

        Raises:
            NotFoundError: If no category has ``category_data.id``
        """
        category = self.find_by_id(category_data.id)
        category.name = category_data.name
        category.description = category_data.description
        self.store.save(category)
        logger.info(f"Category #{category.id} updated")
        return category

    def update_description(self, category_id: int, new_description: str) -> Category:
        """
        Change only the description, stored trimmed.

        Raises:
            NotFoundError: If the category doesn't exist
            InvalidArgumentError: If the description is empty or whitespace
        """
        category = self.find_by_id(category_id)

        if not new_description or not new_description.strip():
            raise InvalidArgumentError("Description must not be empty")

        category.description = new_description.strip()
        self.store.save(category)
        logger.info(f"Category #{category.id} description updated")
        return category

    def delete(self, category_id: int) -> int:
        """
        Delete a category and, through the cascade, its products.
        Cached details of those products are dropped.

        Returns:
            Number of categories deleted

        Raises:
            NotFoundError: If the category doesn't exist
        """
        category = self.find_by_id(category_id)
        product_ids = [p.id for p in category.products]

        deleted = self.store.delete(category_id)
        for product_id in product_ids:
            cache_service.delete(PRODUCT_CACHE_PREFIX, str(product_id))
        logger.info(f"Category #{category_id} deleted with {len(product_ids)} product(s)")
        return deleted
