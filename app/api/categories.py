from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.services.category_service import CategoryService
from app.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryDescriptionUpdate,
    CategoryResponse,
)

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get(
    "/",
    response_model=List[CategoryResponse],
    summary="List all categories"
)
def list_categories(db: Session = Depends(get_db)):
    """Get all categories."""
    return CategoryService(db).find_all()


@router.get(
    "/name/{name}",
    response_model=List[CategoryResponse],
    summary="Search categories by name",
    description="Case-insensitive substring match on the category name."
)
def search_by_name(name: str, db: Session = Depends(get_db)):
    return CategoryService(db).find_all_by_name(name)


@router.get(
    "/description/{description}",
    response_model=List[CategoryResponse],
    summary="Search categories by description",
    description="Case-insensitive substring match on the category description."
)
def search_by_description(description: str, db: Session = Depends(get_db)):
    return CategoryService(db).find_all_by_description(description)


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Get category by ID"
)
def get_category(category_id: int, db: Session = Depends(get_db)):
    """Get a category by ID. Returns 404 if it doesn't exist."""
    return CategoryService(db).find_by_id(category_id)


@router.post(
    "/",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new category"
)
def create_category(category_data: CategoryCreate, db: Session = Depends(get_db)):
    """
    Create a new category.

    - **name**: Category name (required)
    - **description**: Category description (required)
    """
    return CategoryService(db).create(category_data)


@router.put(
    "/",
    response_model=CategoryResponse,
    summary="Replace a category",
    description="Overwrite every field of an existing category. The body must include its id."
)
def update_category(category_data: CategoryUpdate, db: Session = Depends(get_db)):
    return CategoryService(db).update(category_data)


@router.patch(
    "/{category_id}/description",
    response_model=CategoryResponse,
    summary="Change a category description",
    description="The description is trimmed; blank values are rejected with 400."
)
def update_category_description(
    category_id: int,
    payload: CategoryDescriptionUpdate,
    db: Session = Depends(get_db)
):
    return CategoryService(db).update_description(category_id, payload.description)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a category",
    description="Delete a category together with all of its products."
)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    CategoryService(db).delete(category_id)
    return None
