from typing import List

from app.models.category import Category
from app.repositories.base import SQLAlchemyStore


class CategoryStore(SQLAlchemyStore[Category]):
    """Store for Category rows."""

    model = Category

    def find_by_name(self, name: str) -> List[Category]:
        return self.find_all(Category.name.ilike(f"%{name}%"))

    def find_by_description(self, description: str) -> List[Category]:
        return self.find_all(Category.description.ilike(f"%{description}%"))
