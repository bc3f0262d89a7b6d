"""
Category Pydantic schemas for API validation.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
import uuid


class CategoryBase(BaseModel):
    """Base category schema."""
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    parent_id: Optional[uuid.UUID] = None


class CategoryCreate(CategoryBase):
    """Schema for creating a category."""
    pass


class CategoryUpdate(CategoryBase):
    """Schema for replacing a category's fields."""
    pass


class CategoryResponse(BaseModel):
    """Schema for category response."""
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    parent_id: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CategoryEnvelope(BaseModel):
    category: CategoryResponse


class CategoryList(BaseModel):
    """Schema for listing categories."""
    categories: list[CategoryResponse]
