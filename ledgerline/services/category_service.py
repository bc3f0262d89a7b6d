"""Service for category management."""

import logging
import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from ledgerline.errors import CategoryInUseError, CategoryNotFoundError, InvalidInputError, wrap_errors
from ledgerline.models import Category
from ledgerline.repositories import categories as category_repository

logger = logging.getLogger(__name__)


def _check_parent(db: Session, parent_id: Optional[uuid.UUID], category_id: Optional[uuid.UUID] = None) -> None:
    """Parent must exist, and must not be the category itself or one of its descendants."""
    if parent_id is None:
        return
    if category_id is not None and parent_id == category_id:
        raise InvalidInputError("category cannot be its own parent")
    if not category_repository.exists(db, parent_id):
        raise InvalidInputError(f"parent category {parent_id} does not exist")
    if category_id is not None and category_id in category_repository.ancestor_ids(db, parent_id):
        raise InvalidInputError("parent category is a descendant of this category")


def create(db: Session, name: str, description: Optional[str], parent_id: Optional[uuid.UUID] = None) -> uuid.UUID:
    with wrap_errors("create category"):
        _check_parent(db, parent_id)
        category = category_repository.create(
            db, Category(name=name, description=description, parent_id=parent_id)
        )
        logger.info("created category %s", category.id)
        return category.id


def get_by_id(db: Session, category_id: uuid.UUID) -> Category:
    with wrap_errors("get category"):
        return category_repository.get_by_id(db, category_id)


def list_all(db: Session) -> List[Category]:
    with wrap_errors("list categories"):
        return category_repository.list_all(db)


def update(
    db: Session,
    category_id: uuid.UUID,
    name: str,
    description: Optional[str],
    parent_id: Optional[uuid.UUID] = None,
) -> None:
    with wrap_errors("update category"):
        if not category_repository.exists(db, category_id):
            raise CategoryNotFoundError()
        _check_parent(db, parent_id, category_id)
        category_repository.update(db, category_id, name, description, parent_id)


def delete(db: Session, category_id: uuid.UUID) -> None:
    """Delete a category that nothing references."""
    with wrap_errors("delete category"):
        if category_repository.has_dependents(db, category_id):
            raise CategoryInUseError()
        category_repository.delete(db, category_id)
        logger.info("deleted category %s", category_id)
