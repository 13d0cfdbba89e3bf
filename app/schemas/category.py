from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryBase(BaseModel):
    """Base schema for Category with common attributes."""
    name: str = Field(..., min_length=1, max_length=255, description="Category name")
    description: str = Field(..., min_length=1, max_length=255, description="Category description")


class CategoryCreate(CategoryBase):
    """Schema for creating a new category."""
    pass


class CategoryUpdate(CategoryBase):
    """Schema for replacing an existing category. The id selects the row."""
    id: int = Field(..., description="ID of the category to replace")


class CategoryDescriptionUpdate(BaseModel):
    """Schema for changing only the description. Blank values are rejected by the service."""
    description: str = Field(..., max_length=255, description="New description")

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, value):
        """Trim before the length check so padding doesn't count."""
        return value.strip() if isinstance(value, str) else value


class CategoryResponse(CategoryBase):
    """Schema for category response including all fields."""
    id: int

    model_config = ConfigDict(from_attributes=True)
