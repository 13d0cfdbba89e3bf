from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.database import Base


class Category(Base):
    """
    Category grouping products (e.g. "Analgesics").

    Attributes:
        id: Unique identifier for the category
        name: Category name
        description: Free-text description
        products: Products in this category (deleted with the category)
    """
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(255), nullable=False)

    products = relationship(
        "Product",
        back_populates="category",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}')>"
