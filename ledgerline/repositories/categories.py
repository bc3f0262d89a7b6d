"""
Category persistence.
"""

import uuid
from typing import List, Optional, Set

from sqlalchemy import exists as sql_exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, aliased

from ledgerline.errors import CategoryInUseError, CategoryNotFoundError, NoCategoriesFoundError
from ledgerline.models import Category, Item
from ledgerline.repositories.base import commit


def create(db: Session, category: Category) -> Category:
    """Insert a category and return it with its generated id."""
    db.add(category)
    commit(db)
    db.refresh(category)
    return category


def get_by_id(db: Session, category_id: uuid.UUID) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise CategoryNotFoundError()
    return category


def list_all(db: Session) -> List[Category]:
    """All categories, oldest first. Raises NoCategoriesFoundError when empty."""
    categories = db.query(Category).order_by(Category.created_at, Category.id).all()
    if not categories:
        raise NoCategoriesFoundError()
    return categories


def update(
    db: Session,
    category_id: uuid.UUID,
    name: str,
    description: Optional[str],
    parent_id: Optional[uuid.UUID],
) -> None:
    updated = db.query(Category).filter(Category.id == category_id).update(
        {
            Category.name: name,
            Category.description: description,
            Category.parent_id: parent_id,
        },
        synchronize_session=False,
    )
    if updated == 0:
        db.rollback()
        raise CategoryNotFoundError()
    commit(db)


def delete(db: Session, category_id: uuid.UUID) -> None:
    try:
        deleted = db.query(Category).filter(Category.id == category_id).delete(
            synchronize_session=False
        )
    except IntegrityError as exc:
        # Raised here by backends that check foreign keys per statement
        db.rollback()
        raise CategoryInUseError() from exc
    if deleted == 0:
        db.rollback()
        raise CategoryNotFoundError()
    commit(db)


def exists(db: Session, category_id: uuid.UUID) -> bool:
    return db.query(sql_exists().where(Category.id == category_id)).scalar()


def has_dependents(db: Session, category_id: uuid.UUID) -> bool:
    """Whether any subcategory or item references the category."""
    children = sql_exists().where(Category.parent_id == category_id)
    items = sql_exists().where(Item.category_id == category_id)
    return db.query(children | items).scalar()


def ancestor_ids(db: Session, category_id: uuid.UUID) -> Set[uuid.UUID]:
    """
    The category's id and the ids of all its ancestors.

    Walks ``parent_id`` with a recursive CTE. UNION (not UNION ALL) makes
    the walk terminate even if the stored tree already has a cycle.
    """
    parent = aliased(Category)
    ancestors = (
        select(Category.id, Category.parent_id)
        .where(Category.id == category_id)
        .cte("ancestors", recursive=True)
    )
    ancestors = ancestors.union(
        select(parent.id, parent.parent_id).join(ancestors, parent.id == ancestors.c.parent_id)
    )
    return set(db.execute(select(ancestors.c.id)).scalars())
