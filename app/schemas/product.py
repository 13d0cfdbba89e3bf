from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.category import CategoryResponse


class ProductBase(BaseModel):
    """Base schema for Product with common attributes."""
    code: int = Field(..., description="External product code")
    name: str = Field(..., min_length=1, max_length=100, description="Product name")
    price: Decimal = Field(..., ge=0, max_digits=8, decimal_places=2, description="Unit price")
    quantity: int = Field(..., description="Units in stock")
    description: str = Field(..., min_length=1, max_length=255, description="Product description")
    expiration_date: date = Field(..., description="Expiration date (YYYY-MM-DD)")
    manufacturer: str = Field(..., min_length=1, max_length=100, description="Manufacturer name")
    category_id: int = Field(..., description="ID of the owning category")


class ProductCreate(ProductBase):
    """Schema for creating a new product."""
    pass


class ProductUpdate(ProductBase):
    """Schema for replacing an existing product. All fields are overwritten."""
    id: int = Field(..., description="ID of the product to replace")


class ProductResponse(ProductBase):
    """Schema for product response including the resolved category."""
    id: int
    category: Optional[CategoryResponse] = None

    model_config = ConfigDict(from_attributes=True)
