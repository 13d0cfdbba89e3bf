from sqlalchemy import Column, Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.database import Base


class Product(Base):
    """
    Product model representing an item in the pharmacy inventory.

    Attributes:
        id: Unique identifier for the product
        code: External product code (not unique)
        name: Product name
        price: Unit price, fixed-point with 2 decimal places
        quantity: Units in stock
        description: Free-text description
        expiration_date: Date the product expires
        manufacturer: Manufacturer name
        category_id: Owning category (deleting it deletes the product)
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(Integer, nullable=False, index=True)
    name = Column(String(100), nullable=False, index=True)
    price = Column(Numeric(8, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    description = Column(String(255), nullable=False)
    expiration_date = Column(Date, nullable=False, index=True)
    manufacturer = Column(String(100), nullable=False)
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    category = relationship("Category", back_populates="products")

    def __repr__(self):
        return f"<Product(id={self.id}, code={self.code}, name='{self.name}', price={self.price})>"
