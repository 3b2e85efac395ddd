"""
Category Pydantic schemas for request/response validation
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from app.services.schema_registry import CategoryType, supports_rank, uses_items


class CategoryBase(BaseModel):
    """Base schema with common fields"""
    name: str = Field(..., min_length=1, max_length=100, description="Category name")
    type: CategoryType = Field(default=CategoryType.GENERAL, description="Category type")
    icon: Optional[str] = Field("folder", max_length=50, description="Icon tag")


class CategoryCreate(CategoryBase):
    """Schema for creating a new category"""
    pass


class CategoryUpdate(BaseModel):
    """
    Schema for updating a category (all fields optional)

    The type is fixed at creation; it decides which records the
    category holds.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    icon: Optional[str] = Field(None, max_length=50)

    model_config = {"extra": "forbid"}


class CategoryInDB(CategoryBase):
    """Schema for category from database"""
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CategoryResponse(CategoryInDB):
    """Schema for API response"""

    @computed_field
    @property
    def supports_rank(self) -> bool:
        return supports_rank(self.type)

    @computed_field
    @property
    def uses_items(self) -> bool:
        return uses_items(self.type)
