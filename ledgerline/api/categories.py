"""
Category API endpoints.
"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ledgerline.dependencies import get_db, get_read_db
from ledgerline.schemas import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryEnvelope,
    CategoryList,
    CreatedResponse,
    MessageResponse,
)
from ledgerline.services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", response_model=CreatedResponse, status_code=201)
def create_category(
    category: CategoryCreate,
    db: Session = Depends(get_db)
):
    """Create a new category."""
    category_id = category_service.create(
        db, category.name, category.description, category.parent_id
    )
    return CreatedResponse(id=str(category_id))


@router.get("", response_model=CategoryList)
def list_categories(
    db: Session = Depends(get_read_db)
):
    """List all categories."""
    categories = category_service.list_all(db)
    return CategoryList(
        categories=[CategoryResponse.model_validate(c) for c in categories]
    )


@router.get("/{category_id}", response_model=CategoryEnvelope)
def get_category(
    category_id: uuid.UUID,
    db: Session = Depends(get_read_db)
):
    """Get a specific category."""
    category = category_service.get_by_id(db, category_id)
    return CategoryEnvelope(category=CategoryResponse.model_validate(category))


@router.put("/{category_id}", response_model=MessageResponse)
def update_category(
    category_id: uuid.UUID,
    category_update: CategoryUpdate,
    db: Session = Depends(get_db)
):
    """Replace a category's name, description and parent."""
    category_service.update(
        db,
        category_id,
        category_update.name,
        category_update.description,
        category_update.parent_id,
    )
    return MessageResponse(message="category updated")


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: uuid.UUID,
    db: Session = Depends(get_db)
):
    """Delete a category. Refused while subcategories or items reference it."""
    category_service.delete(db, category_id)
    return MessageResponse(message="category deleted")
