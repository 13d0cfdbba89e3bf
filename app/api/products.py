from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.services.product_service import ProductService
from app.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
)

router = APIRouter(prefix="/products", tags=["Products"])


@router.get(
    "/",
    response_model=List[ProductResponse],
    summary="List all products",
    description="Get all products with their category."
)
def list_products(db: Session = Depends(get_db)):
    return ProductService(db).find_all()


@router.get(
    "/expiring-this-month",
    response_model=List[ProductResponse],
    summary="Products expiring this month",
    description="Products whose expiration date falls in the current calendar month."
)
def list_expiring_this_month(db: Session = Depends(get_db)):
    return ProductService(db).find_expiring_this_month()


@router.get(
    "/by-expiration",
    response_model=List[ProductResponse],
    summary="Products ordered by expiration",
    description="All products, soonest expiration first."
)
def list_ordered_by_expiration(db: Session = Depends(get_db)):
    return ProductService(db).find_ordered_by_expiration()


@router.get(
    "/name/{name}",
    response_model=List[ProductResponse],
    summary="Search products by name",
    description="Case-insensitive substring match on the product name."
)
def search_by_name(name: str, db: Session = Depends(get_db)):
    return ProductService(db).find_all_by_name(name)


@router.get(
    "/code/{code}",
    response_model=ProductResponse,
    summary="Get product by code",
    description="If several products share the code, the one with the lowest id is returned."
)
def get_by_code(code: int, db: Session = Depends(get_db)):
    return ProductService(db).find_by_code(code)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product by ID"
)
def get_product(product_id: int, db: Session = Depends(get_db)):
    """Get a product by ID. Returns 404 if it doesn't exist."""
    return ProductService(db).find_by_id(product_id)


@router.get(
    "/{product_id}/cached",
    summary="Get product from cache",
    description="Get product details from Redis cache (or database if not cached)."
)
def get_product_cached(product_id: int, db: Session = Depends(get_db)):
    """
    Returns cached data if available, otherwise fetches from database
    and caches the result. The entry is dropped whenever the product changes.
    """
    return ProductService(db).find_by_id_cached(product_id)


@router.post(
    "/",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product"
)
def create_product(product_data: ProductCreate, db: Session = Depends(get_db)):
    """
    Create a new product.

    The referenced **category_id** must exist, otherwise 404 is returned
    and nothing is stored.
    """
    return ProductService(db).create(product_data)


@router.put(
    "/",
    response_model=ProductResponse,
    summary="Replace a product",
    description="Overwrite every field of an existing product. The body must include its id."
)
def update_product(product_data: ProductUpdate, db: Session = Depends(get_db)):
    return ProductService(db).update(product_data)


@router.patch(
    "/discount",
    response_model=List[ProductResponse],
    summary="Discount by name or manufacturer",
    description="Apply a discount to products whose name and/or manufacturer contain the given text."
)
def discount_by_name_or_manufacturer(
    percentage: int = Query(..., description="Discount percentage (0-100)"),
    name: Optional[str] = Query(None, description="Substring of the product name"),
    manufacturer: Optional[str] = Query(None, description="Substring of the manufacturer"),
    db: Session = Depends(get_db)
):
    return ProductService(db).apply_discount_by_name_or_manufacturer(
        percentage, name=name, manufacturer=manufacturer
    )


@router.patch(
    "/discount/expiration",
    response_model=List[ProductResponse],
    summary="Discount by expiration window",
    description="Apply a discount to products expiring between today + min_days and today + max_days."
)
def discount_by_expiration(
    percentage: int = Query(..., description="Discount percentage (0-100)"),
    min_days: Optional[int] = Query(None, description="Window start in days from today (default 30)"),
    max_days: Optional[int] = Query(None, description="Window end in days from today (default 60)"),
    db: Session = Depends(get_db)
):
    return ProductService(db).apply_discount_by_expiration(
        percentage, min_days=min_days, max_days=max_days
    )


@router.patch(
    "/discount/category/{category_id}",
    response_model=List[ProductResponse],
    summary="Discount by category",
    description="Apply a discount to every product of a category."
)
def discount_by_category(
    category_id: int,
    percentage: int = Query(..., description="Discount percentage (0-100)"),
    db: Session = Depends(get_db)
):
    return ProductService(db).apply_discount_by_category(category_id, percentage)


@router.patch(
    "/{product_id}/discount/{percentage}",
    response_model=ProductResponse,
    summary="Discount a single product"
)
def discount_by_id(product_id: int, percentage: int, db: Session = Depends(get_db)):
    return ProductService(db).apply_discount_by_id(product_id, percentage)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product"
)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    ProductService(db).delete(product_id)
    return None
